"""
Jackbox client error types.

Every failure surfaces as one of four kinds: not found, malformed,
fatal or transient.
"""

from typing import Any, Optional


class JackboxError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class NotFoundError(JackboxError):
    """Room lookup returned 404, or a picture file could not be read."""

    def __init__(self, message: str, code: str = "not_found", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class MalformedError(JackboxError):
    """JSON that failed to decode, or a handshake body without a session token."""

    def __init__(self, message: str, code: str = "malformed", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class FatalError(JackboxError):
    def __init__(self, message: str, code: str = "fatal"):
        super().__init__(code, message)


class TransientError(JackboxError):
    def __init__(self, message: str, code: str = "transient"):
        super().__init__(code, message)


class ConnectionError(FatalError):
    def __init__(self, message: str):
        super().__init__(message, code="connection_error")
