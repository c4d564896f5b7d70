"""CCU client errors and response classification."""
from __future__ import annotations

from typing import Any, Protocol

__all__ = [
    "CcuError",
    "ConfigurationError",
    "EncodingError",
    "RequestConstructionError",
    "TransportError",
    "UnauthorizedError",
    "DecodeError",
    "ApiError",
    "format_error",
    "is_success",
    "assert_success",
]


class ProblemDetails(Protocol):
    """Fields common to every CCU API reply."""

    status_code: int
    title: str
    detail: str


class CcuError(Exception):
    """Base class for all errors raised by the CCU clients."""

    phase: str = "unknown"


class ConfigurationError(CcuError):
    """The signing configuration could not be loaded."""

    phase = "config"


class EncodingError(CcuError):
    """The request payload could not be serialized as JSON."""

    phase = "encode"


class RequestConstructionError(CcuError):
    """The HTTP request could not be built, e.g. a malformed URL."""

    phase = "construct"


class TransportError(CcuError):
    """The HTTP request could not be sent (connection, timeout, TLS)."""

    phase = "send"


class UnauthorizedError(CcuError):
    """The API rejected the credentials with HTTP 401."""

    phase = "send"


class DecodeError(CcuError):
    """The response body is not valid JSON for the expected shape.

    ``response`` holds the raw HTTP response when the client keeps it (v3),
    otherwise ``None`` (v2).
    """

    phase = "decode"

    def __init__(self, message: str, response: Any = None):
        super().__init__(message)
        self.response = response


class ApiError(CcuError):
    """A decoded API reply whose status is outside of the 2xx range."""

    phase = "api"

    def __init__(self, response: Any):
        super().__init__(format_error(response.title, response.detail))
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def support_id(self) -> str:
        return self.response.support_id

    @property
    def title(self) -> str:
        return self.response.title

    @property
    def detail(self) -> str:
        return self.response.detail

    @property
    def described_by(self) -> str:
        return self.response.described_by


def format_error(title: str, detail: str) -> str:
    """Format an API error message as ``title: detail``."""
    if not title:
        return "unknown"
    if not detail:
        return title
    return f"{title}: {detail}"


def is_success(status_code: int) -> bool:
    return 200 <= status_code <= 299


def assert_success(response: ProblemDetails) -> None:
    """Raise an ApiError if the reply's status is not in the 200 range."""
    if not is_success(response.status_code):
        raise ApiError(response)
