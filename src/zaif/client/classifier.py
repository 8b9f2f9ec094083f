"""Response classification for public and private endpoints."""

import json
from typing import Any

from ..exceptions import APIError, ConnectionFailedError, MalformedResponseError
from ..models.request import RawResponse
from ..models.response import ResponseEnvelope
from ..utils.logger import logger


def raise_for_status(response: RawResponse) -> None:
    """Raise ConnectionFailedError for any non-2xx status."""
    if not response.ok:
        logger.error(f"REST API error: {response.status_line} - {response.text[:200]}")
        raise ConnectionFailedError(
            f"Failed to connect to zaif: {response.status_line}",
            status=response.status,
        )


def parse_body(response: RawResponse) -> Any:
    """
    Decode the response body as UTF-8 and parse it as JSON.

    Raises:
        MalformedResponseError: If the body is not UTF-8 JSON or is JSON null
    """
    try:
        data = json.loads(response.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedResponseError(response.body) from e

    if data is None:
        raise MalformedResponseError(response.body)

    return data


def classify_public(response: RawResponse) -> Any:
    """
    Classify a public endpoint response.

    Returns:
        The parsed JSON value

    Raises:
        ConnectionFailedError: Non-2xx status
        MalformedResponseError: Body is not usable JSON
        APIError: The body is an object carrying an ``error`` key
    """
    raise_for_status(response)
    data = parse_body(response)

    if isinstance(data, dict) and "error" in data:
        logger.error(f"Public API error: {data['error']}")
        raise APIError(str(data["error"]))

    return data


def classify_private(response: RawResponse) -> Any:
    """
    Classify a private endpoint response.

    Returns:
        The envelope's ``return`` value

    Raises:
        ConnectionFailedError: Non-2xx status
        MalformedResponseError: Body is not a success envelope
        APIError: ``success`` is 0
    """
    raise_for_status(response)
    envelope = ResponseEnvelope.from_api(parse_body(response), response.body)

    if not envelope.success:
        logger.error(f"Private API error: {envelope.error}")
        raise APIError(envelope.error)

    return envelope.payload
