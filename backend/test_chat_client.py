"""
Unit tests for the chat-completions client.

Tests request shape and the mapping of every failure to UpstreamError.
"""
from unittest.mock import Mock, patch

import pytest
import requests

from webbuilder.errors import UpstreamError, UpstreamReason, UpstreamTimeout
from webbuilder.inference.chat_completions_client import ChatCompletionsClient

API_KEY = "pplx-secret-key"
MESSAGES = [
    {"role": "system", "content": "sys"},
    {"role": "user", "content": "hello"},
]


def make_client(**kwargs):
    params = dict(
        base_url="https://api.perplexity.ai/",
        model="sonar",
        api_key=API_KEY,
        max_tokens=10000,
        timeout=120,
    )
    params.update(kwargs)
    return ChatCompletionsClient(**params)


def make_response(status_code=200, payload=None, text=""):
    response = Mock()
    response.status_code = status_code
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    response.text = text
    return response


class TestConstruction:
    """Test configuration validation."""

    def test_missing_api_key(self):
        with pytest.raises(ValueError, match="api_key is required"):
            make_client(api_key="")

    def test_missing_model(self):
        with pytest.raises(ValueError, match="model is required"):
            make_client(model=" ")

    def test_missing_base_url(self):
        with pytest.raises(ValueError, match="base_url is required"):
            make_client(base_url="")

    def test_trailing_slash_trimmed(self):
        assert make_client().base_url == "https://api.perplexity.ai"


@patch("webbuilder.inference.chat_completions_client.requests.post")
class TestGenerate:
    """Test the outbound call and response handling."""

    def test_success_returns_content(self, mock_post):
        mock_post.return_value = make_response(
            payload={"choices": [{"message": {"role": "assistant", "content": "### HTML CODE ###"}}]}
        )

        assert make_client().generate(MESSAGES) == "### HTML CODE ###"

    def test_request_shape(self, mock_post):
        mock_post.return_value = make_response(
            payload={"choices": [{"message": {"content": "ok"}}]}
        )

        make_client().generate(MESSAGES)

        mock_post.assert_called_once_with(
            "https://api.perplexity.ai/chat/completions",
            headers={
                "Authorization": f"Bearer {API_KEY}",
                "Content-Type": "application/json",
            },
            json={"model": "sonar", "messages": MESSAGES, "max_tokens": 10000},
            timeout=120,
        )

    def test_temperature_sent_when_set(self, mock_post):
        mock_post.return_value = make_response(
            payload={"choices": [{"message": {"content": "ok"}}]}
        )

        make_client(temperature=0.2).generate(MESSAGES)

        assert mock_post.call_args.kwargs["json"]["temperature"] == 0.2

    def test_empty_messages_rejected(self, mock_post):
        with pytest.raises(ValueError, match="messages is required"):
            make_client().generate([])
        mock_post.assert_not_called()

    def test_timeout(self, mock_post):
        mock_post.side_effect = requests.Timeout("Read timed out")

        with pytest.raises(UpstreamTimeout) as excinfo:
            make_client().generate(MESSAGES)

        assert excinfo.value.reason == UpstreamReason.TIMEOUT
        assert isinstance(excinfo.value, UpstreamError)

    def test_connection_error(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("Connection refused")

        with pytest.raises(UpstreamError) as excinfo:
            make_client().generate(MESSAGES)

        assert excinfo.value.reason == UpstreamReason.TRANSPORT

    def test_credential_scrubbed_from_detail(self, mock_post):
        mock_post.side_effect = requests.ConnectionError(f"failed with {API_KEY}")

        with pytest.raises(UpstreamError) as excinfo:
            make_client().generate(MESSAGES)

        assert API_KEY not in str(excinfo.value.to_detail())

    def test_credential_scrubbed_from_json_error_body(self, mock_post):
        mock_post.return_value = make_response(
            status_code=401,
            payload={"error": {"message": f"Invalid API key {API_KEY}", "keys": [API_KEY]}},
        )

        with pytest.raises(UpstreamError) as excinfo:
            make_client().generate(MESSAGES)

        detail = excinfo.value.to_detail()
        assert API_KEY not in str(detail)
        assert detail["upstream"] == {"error": {"message": "Invalid API key ***", "keys": ["***"]}}

    def test_credential_scrubbed_from_malformed_envelope(self, mock_post):
        mock_post.return_value = make_response(payload={"echo": API_KEY, "choices": []})

        with pytest.raises(UpstreamError) as excinfo:
            make_client().generate(MESSAGES)

        assert excinfo.value.reason == UpstreamReason.MALFORMED_RESPONSE
        assert API_KEY not in str(excinfo.value.to_detail())

    def test_non_2xx_status(self, mock_post):
        mock_post.return_value = make_response(
            status_code=401, payload={"error": {"message": "Invalid API key"}}
        )

        with pytest.raises(UpstreamError) as excinfo:
            make_client().generate(MESSAGES)

        error = excinfo.value
        assert error.reason == UpstreamReason.HTTP_STATUS
        assert error.status_code == 401
        assert error.detail == {"error": {"message": "Invalid API key"}}
        assert error.to_detail()["status_code"] == 401

    def test_non_2xx_with_text_body(self, mock_post):
        mock_post.return_value = make_response(
            status_code=502, payload=ValueError("no json"), text="Bad Gateway"
        )

        with pytest.raises(UpstreamError) as excinfo:
            make_client().generate(MESSAGES)

        assert excinfo.value.detail == "Bad Gateway"

    def test_non_json_body(self, mock_post):
        mock_post.return_value = make_response(payload=ValueError("no json"))

        with pytest.raises(UpstreamError) as excinfo:
            make_client().generate(MESSAGES)

        assert excinfo.value.reason == UpstreamReason.MALFORMED_RESPONSE

    @pytest.mark.parametrize("payload", [
        {},
        {"choices": []},
        {"choices": "nope"},
        {"choices": [{}]},
        {"choices": [{"message": None}]},
        ["not", "a", "dict"],
    ])
    def test_malformed_envelope(self, mock_post, payload):
        mock_post.return_value = make_response(payload=payload)

        with pytest.raises(UpstreamError) as excinfo:
            make_client().generate(MESSAGES)

        assert excinfo.value.reason == UpstreamReason.MALFORMED_RESPONSE

    @pytest.mark.parametrize("message", [{}, {"content": ""}, {"content": None}])
    def test_missing_content(self, mock_post, message):
        mock_post.return_value = make_response(payload={"choices": [{"message": message}]})

        with pytest.raises(UpstreamError, match="No content received from API") as excinfo:
            make_client().generate(MESSAGES)

        assert excinfo.value.reason == UpstreamReason.EMPTY_CONTENT
