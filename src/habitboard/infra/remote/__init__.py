"""REST backend client and repositories."""

from .client import RestClient
from .errors import (
    APIError,
    DecodingError,
    InvalidResponseError,
    NetworkError,
    ServerError,
)
from .expenses import RemoteExpenseRepository
from .habits import RemoteHabitRepository

__all__ = [
    "APIError",
    "DecodingError",
    "InvalidResponseError",
    "NetworkError",
    "RemoteExpenseRepository",
    "RemoteHabitRepository",
    "RestClient",
    "ServerError",
]
