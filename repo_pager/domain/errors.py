"""Typed failures raised by repository fetchers.

The pagination controller catches these at its boundary and turns them into
the user-facing ``SessionState.error`` message.
"""
from enum import Enum
from typing import Optional


class FetchErrorKind(Enum):
    """Category of a failed page fetch."""
    TRANSPORT = "transport"
    DECODE = "decode"
    HTTP_STATUS = "http_status"


class FetchError(Exception):
    """Base class for all page fetch failures."""

    kind: FetchErrorKind = FetchErrorKind.TRANSPORT

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return self.message


class TransportError(FetchError):
    """Network-level failure: DNS, connection, timeout or broken payload."""
    kind = FetchErrorKind.TRANSPORT


class DecodeError(FetchError):
    """Response body did not have the expected shape."""
    kind = FetchErrorKind.DECODE


class HttpStatusError(FetchError):
    """Remote API answered with a non-success status."""
    kind = FetchErrorKind.HTTP_STATUS

    def __init__(self, code: int, reason: str = ""):
        self.reason = reason
        message = f"{code} {reason}".strip()
        super().__init__(message, code=code)
