"""Network clients for the hosted backend."""

from .articles_client import ArticlesClient
from .auth_client import AuthClient
from .client import Client
from .exceptions import (
    APIError,
    ClientError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
    ResponseValidationError,
)
from .storage_client import StorageClient

__all__ = [
    "Client",
    "ArticlesClient",
    "AuthClient",
    "StorageClient",
    "ClientError",
    "ConnectionError",
    "APIError",
    "ConflictError",
    "RateLimitError",
    "NotFoundError",
    "ResponseValidationError",
]
