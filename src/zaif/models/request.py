"""Request and raw response models passed through the pipeline."""

from dataclasses import dataclass, field
from typing import Literal

HttpMethod = Literal["GET", "POST"]


@dataclass
class RequestSpec:
    """One outgoing request: where it goes and the parameters it carries."""

    url: str
    method: HttpMethod = "GET"
    params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RawResponse:
    """HTTP status and body bytes exactly as the transport received them."""

    status: int
    reason: str
    body: bytes

    @property
    def text(self) -> str:
        """Body decoded for display; undecodable bytes are replaced."""
        return self.body.decode("utf-8", errors="replace")

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def status_line(self) -> str:
        return f"{self.status} {self.reason}".strip()
