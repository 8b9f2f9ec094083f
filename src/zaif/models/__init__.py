"""Data models."""

from .currency import CurrencyPair
from .request import HttpMethod, RawResponse, RequestSpec
from .response import ResponseEnvelope

__all__ = [
    "CurrencyPair",
    "HttpMethod",
    "RawResponse",
    "RequestSpec",
    "ResponseEnvelope",
]
