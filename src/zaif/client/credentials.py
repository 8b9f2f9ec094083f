"""Credential store for private API calls."""

from dataclasses import dataclass

from ..exceptions import AuthenticationError


@dataclass(frozen=True)
class Credentials:
    """Either a bearer token or an API key/secret pair.

    When a token is set it is used instead of the key/secret pair.
    """

    token: str | None = None
    api_key: str | None = None
    api_secret: str | None = None

    @property
    def uses_token(self) -> bool:
        return bool(self.token)

    @property
    def is_ready(self) -> bool:
        return self.uses_token or bool(self.api_key and self.api_secret)

    def check_ready(self) -> None:
        """Raise AuthenticationError unless private calls can be authenticated."""
        if not self.is_ready:
            raise AuthenticationError(
                "You need to set a token, or an API key and secret"
            )

    def __repr__(self) -> str:
        return (
            f"Credentials(token={'set' if self.token else None}, "
            f"api_key={self.api_key!r}, "
            f"api_secret={'set' if self.api_secret else None})"
        )
