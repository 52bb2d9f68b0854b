"""Client library for the TVDB v4 API."""
from tvdbclient.errors import (
    AuthError,
    DecodeError,
    EncodeError,
    NetworkError,
    TVDBError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from tvdbclient.tvdb import TVDB

__all__ = [
    "TVDB",
    "TVDBError",
    "NetworkError",
    "AuthError",
    "UnauthorizedError",
    "UnexpectedStatusError",
    "DecodeError",
    "EncodeError",
]
