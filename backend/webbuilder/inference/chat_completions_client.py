import logging
from typing import Any, Dict, List, Optional

import requests

from webbuilder.errors import UpstreamError, UpstreamReason, UpstreamTimeout
from webbuilder.inference.base import LLMClient

logger = logging.getLogger("webbuilder.inference")


class ChatCompletionsClient(LLMClient):
    """
    OpenAI-style /chat/completions client (Perplexity by default).

    One attempt per call. Every failure surfaces as UpstreamError.
    """

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: str,
        max_tokens: int = 10000,
        timeout: float = 300,
        temperature: Optional[float] = None,
    ):
        if not base_url or not base_url.strip():
            raise ValueError("base_url is required and cannot be empty")
        if not model or not model.strip():
            raise ValueError("model is required and cannot be empty")
        if not api_key or not api_key.strip():
            raise ValueError("api_key is required and cannot be empty")

        self.base_url = base_url.rstrip("/")
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.temperature = temperature
        self._api_key = api_key

    def _payload(self, messages: List[Dict]) -> Dict[str, Any]:
        payload = {
            "model": self.model,
            "messages": messages,
            "max_tokens": self.max_tokens,
        }
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        return payload

    def _scrub(self, text: str) -> str:
        return text.replace(self._api_key, "***")

    def _scrub_detail(self, value: Any) -> Any:
        """Scrub the credential from a decoded JSON body, however nested."""
        if isinstance(value, str):
            return self._scrub(value)
        if isinstance(value, dict):
            return {self._scrub_detail(k): self._scrub_detail(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._scrub_detail(item) for item in value]
        return value

    def generate(self, messages: List[Dict]) -> str:
        if not messages:
            raise ValueError("messages is required and cannot be empty")

        url = f"{self.base_url}/chat/completions"
        logger.info("Calling %s (model=%s, max_tokens=%s)", url, self.model, self.max_tokens)

        try:
            response = requests.post(
                url,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                json=self._payload(messages),
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise UpstreamTimeout(
                f"Completion request timed out after {self.timeout}s",
                detail=self._scrub(str(e)),
            ) from e
        except requests.RequestException as e:
            raise UpstreamError(
                "Completion request failed",
                UpstreamReason.TRANSPORT,
                detail=self._scrub(str(e)),
            ) from e

        if not 200 <= response.status_code < 300:
            raise UpstreamError(
                f"Completion endpoint returned HTTP {response.status_code}",
                UpstreamReason.HTTP_STATUS,
                status_code=response.status_code,
                detail=self._error_body(response),
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(
                "Completion endpoint returned a non-JSON body",
                UpstreamReason.MALFORMED_RESPONSE,
                status_code=response.status_code,
            ) from e

        return self._extract_content(data)

    def _error_body(self, response: requests.Response) -> Any:
        try:
            return self._scrub_detail(response.json())
        except ValueError:
            return self._scrub(response.text[:2000])

    def _extract_content(self, data: Any) -> str:
        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices:
            raise UpstreamError(
                "Invalid API response structure: missing choices",
                UpstreamReason.MALFORMED_RESPONSE,
                detail=self._scrub_detail(data),
            )

        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        if not isinstance(message, dict):
            raise UpstreamError(
                "Invalid API response structure: missing message",
                UpstreamReason.MALFORMED_RESPONSE,
                detail=self._scrub_detail(data),
            )

        content = message.get("content")
        if not isinstance(content, str) or not content:
            raise UpstreamError(
                "No content received from API",
                UpstreamReason.EMPTY_CONTENT,
            )

        return content
