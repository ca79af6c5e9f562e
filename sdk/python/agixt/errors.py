"""Exceptions raised by the AGiXT SDK."""

from __future__ import annotations


class AGiXTError(Exception):
    """Base error for AGiXT SDK."""
    pass


class APIError(AGiXTError):
    """Non-success HTTP status returned by the AGiXT server.

    ``message`` is the raw response body, unmodified.
    """

    def __init__(self, status: int, message: str):
        super().__init__(f"API error ({status}): {message}")
        self.status = status
        self.message = message


class ConnectionError(AGiXTError):
    """Error reaching the AGiXT server (connect, DNS, TLS or timeout)."""
    pass


class DecodeError(AGiXTError):
    """Response body is not JSON or lacks the expected envelope field."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body


class AuthError(AGiXTError):
    """Local authentication failure, e.g. a malformed OTP URI."""
    pass
