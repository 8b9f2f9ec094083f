"""Exception types raised by the Zaif client."""


class ZaifError(Exception):
    """Base class for every error raised by this package."""


class AuthenticationError(ZaifError):
    """Private call attempted without a token or a key/secret pair."""


class ConnectionFailedError(ZaifError):
    """Non-2xx HTTP status or a transport-level failure (DNS, TLS, timeout)."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class MalformedResponseError(ZaifError):
    """Response body is not JSON or parses to no value."""

    def __init__(self, body: str | bytes):
        super().__init__(f"Malformed response: {body[:200]!r}")
        self.body = body


class APIError(ZaifError):
    """The exchange reported a failure."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
