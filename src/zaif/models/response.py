"""Private API response envelope."""

from dataclasses import dataclass
from typing import Any

from ..exceptions import MalformedResponseError


@dataclass(frozen=True)
class ResponseEnvelope:
    """
    The private API's success envelope.

    Either ``{"success": 1, "return": ...}`` or
    ``{"success": 0, "error": "message"}``.
    """

    success: bool
    payload: Any = None
    error: str | None = None

    @classmethod
    def from_api(cls, data: Any, raw_body: str | bytes) -> "ResponseEnvelope":
        """
        Build an envelope from a parsed private response.

        Args:
            data: Parsed JSON value
            raw_body: Body text, attached to any MalformedResponseError

        Returns:
            ResponseEnvelope

        Raises:
            MalformedResponseError: If the value is not an envelope
        """
        if not isinstance(data, dict) or "success" not in data:
            raise MalformedResponseError(raw_body)

        if data["success"] == 0:
            return cls(success=False, error=str(data.get("error", "")))

        if "return" not in data:
            raise MalformedResponseError(raw_body)

        return cls(success=True, payload=data["return"])
