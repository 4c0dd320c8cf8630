"""
Error taxonomy for the relay.

Every error carries the HTTP status and the plain-text body it may expose to
the caller. Anything beyond that (causes, tracebacks) stays in the logs.
"""

from __future__ import annotations

from typing import Optional

GENERIC_SERVER_ERROR = "Server error"


class RelayError(Exception):
    """Base relay failure; rendered as a generic 500."""

    status_code: int = 500

    @property
    def body(self) -> str:
        return GENERIC_SERVER_ERROR


class ClientInputError(RelayError):
    """The caller sent a request we cannot forward."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def body(self) -> str:
        return self.message


class UpstreamError(RelayError):
    """remove.bg answered with a non-2xx status; passed through as-is."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"upstream returned {status_code}")
        self.status_code = status_code
        self._body = body

    @property
    def body(self) -> str:
        return self._body


class TransportError(RelayError):
    """The outbound call never produced a response."""

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"upstream request failed: {type(cause).__name__}" if cause else "upstream request failed")
        self.cause = cause
