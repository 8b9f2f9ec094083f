"""Authentication and signing utilities for the Zaif private API."""

import hashlib
import hmac
from typing import Any
from urllib.parse import urlencode

from .credentials import Credentials

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def encode_body(method: str, params: dict[str, Any], nonce: float) -> str:
    """
    Build the form-encoded POST body.

    The caller's parameters keep their order; ``method`` and ``nonce`` are
    appended after them. The returned string is what gets signed and sent.

    Args:
        method: Private API method name (e.g. "get_info")
        params: Endpoint parameters
        nonce: Nonce for this request

    Returns:
        Encoded body, e.g. "currency_pair=btc_jpy&method=trade&nonce=1700000000.5"
    """
    fields = {str(k): str(v) for k, v in params.items()}
    fields.pop("method", None)
    fields.pop("nonce", None)
    fields["method"] = method
    fields["nonce"] = str(nonce)
    return urlencode(fields)


def sign_body(body: str, api_secret: str) -> str:
    """Hex-encoded HMAC-SHA512 of the body bytes, keyed by the API secret."""
    return hmac.new(
        api_secret.encode("utf-8"),
        body.encode("utf-8"),
        hashlib.sha512,
    ).hexdigest()


def get_auth_headers(body: str, credentials: Credentials) -> dict[str, str]:
    """
    Get authentication headers for a private request.

    Args:
        body: Encoded request body, exactly as it will be transmitted
        credentials: Credentials to authenticate with

    Returns:
        Dictionary of headers
    """
    headers = {"Content-Type": FORM_CONTENT_TYPE}

    if credentials.uses_token:
        headers["Token"] = credentials.token
    else:
        headers["Key"] = credentials.api_key
        headers["Sign"] = sign_body(body, credentials.api_secret)

    return headers


def sign_request(
    method: str,
    params: dict[str, Any],
    nonce: float,
    credentials: Credentials,
) -> tuple[str, dict[str, str]]:
    """
    Sign a private API request.

    Returns:
        Tuple of (body, headers)
    """
    body = encode_body(method, params, nonce)
    return body, get_auth_headers(body, credentials)
