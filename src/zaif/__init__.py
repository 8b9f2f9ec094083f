"""
Zaif exchange REST API client.
"""

from .client.rest import RestClient
from .exceptions import (
    APIError,
    AuthenticationError,
    ConnectionFailedError,
    MalformedResponseError,
    ZaifError,
)
from .utils.config import ClientConfig, Config

__version__ = "0.1.0"

__all__ = [
    "RestClient",
    "ClientConfig",
    "Config",
    "ZaifError",
    "AuthenticationError",
    "ConnectionFailedError",
    "MalformedResponseError",
    "APIError",
]
