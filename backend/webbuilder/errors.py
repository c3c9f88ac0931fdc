from enum import Enum
from typing import Any, Dict, Optional


class WebBuilderError(Exception):
    """Base class for errors raised by the generator backend."""


class ConfigurationError(WebBuilderError):
    """Raised at startup when required settings are missing or invalid."""


class QuotaExceeded(WebBuilderError):
    def __init__(self, limit: int):
        super().__init__(f"Daily prompt limit reached ({limit} prompts per day)")
        self.limit = limit


class UpstreamReason(Enum):
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    MALFORMED_RESPONSE = "malformed_response"
    EMPTY_CONTENT = "empty_content"
    TIMEOUT = "timeout"


class UpstreamError(WebBuilderError):
    """
    Any failure of the completion endpoint: transport, non-2xx status,
    malformed envelope or missing content.
    """

    def __init__(
        self,
        message: str,
        reason: UpstreamReason,
        status_code: Optional[int] = None,
        detail: Any = None,
    ):
        super().__init__(message)
        self.reason = reason
        self.status_code = status_code
        self.detail = detail

    def to_detail(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "reason": self.reason.value,
            "message": str(self),
        }
        if self.status_code is not None:
            payload["status_code"] = self.status_code
        if self.detail is not None:
            payload["upstream"] = self.detail
        return payload


class UpstreamTimeout(UpstreamError):
    def __init__(self, message: str, detail: Any = None):
        super().__init__(message, UpstreamReason.TIMEOUT, detail=detail)


class AuthenticationError(WebBuilderError):
    """Missing, unknown or malformed bearer token."""
