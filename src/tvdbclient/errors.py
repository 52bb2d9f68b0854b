"""Error types raised by the TVDB client."""
from typing import Optional


class TVDBError(Exception):
    """Base class for all client errors.

    Args:
        message: Human readable description
        method: HTTP method of the request that failed, if any
        path: API path of the request that failed, if any
    """

    def __init__(self, message: str, method: Optional[str] = None, path: Optional[str] = None):
        super().__init__(message)
        self.method = method
        self.path = path

    def __str__(self) -> str:
        message = super().__str__()
        if self.method and self.path:
            return f"{self.method} {self.path}: {message}"
        return message


class NetworkError(TVDBError):
    """Transport failed before any response was received."""


class AuthError(TVDBError):
    """Login or token refresh was rejected or malformed."""


class UnexpectedStatusError(TVDBError):
    """A resource call answered with a status other than 200."""

    def __init__(self, code: int, method: Optional[str] = None, path: Optional[str] = None):
        super().__init__(f"unexpected status code: {code}", method, path)
        self.code = code


class UnauthorizedError(AuthError, UnexpectedStatusError):
    """The server kept answering 401 after the token was refreshed."""

    def __init__(self, method: Optional[str] = None, path: Optional[str] = None):
        UnexpectedStatusError.__init__(self, 401, method, path)


class DecodeError(TVDBError):
    """Response body does not match the expected shape."""


class EncodeError(TVDBError):
    """Request body could not be serialized to JSON."""
