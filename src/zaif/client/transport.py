"""HTTPS transport for the Zaif API."""

import asyncio
import ssl

import aiohttp

from ..exceptions import ConnectionFailedError
from ..models.request import RawResponse
from ..utils.config import ClientConfig
from ..utils.logger import logger, redact


def check_chain_depth(ssl_object, verify_depth: int) -> None:
    """Reject peers whose verified chain has more than verify_depth issuers."""
    # get_verified_chain() only exists on Python 3.13+
    get_chain = getattr(ssl_object, "get_verified_chain", None)
    if get_chain is None:
        return

    issuers = len(get_chain()) - 1
    if issuers > verify_depth:
        raise ConnectionFailedError(
            f"Certificate chain too deep: {issuers} > {verify_depth}"
        )


class DepthCheckingConnector(aiohttp.TCPConnector):
    """TCP connector that enforces the certificate chain depth on connect.

    The check runs once the TLS handshake is done and before the request
    is written, so a rejected peer never receives a request body.
    """

    def __init__(self, *, verify_depth: int, **kwargs):
        super().__init__(**kwargs)
        self.verify_depth = verify_depth

    async def _create_connection(self, req, traces, timeout):
        protocol = await super()._create_connection(req, traces, timeout)
        transport = protocol.transport
        ssl_object = transport.get_extra_info("ssl_object") if transport else None

        try:
            check_chain_depth(ssl_object, self.verify_depth)
        except ConnectionFailedError:
            protocol.close()
            raise

        return protocol


class HttpTransport:
    """
    Performs one HTTPS exchange per call.

    Every call opens its own session and connection, verifies the peer
    certificate and closes the connection afterwards. Responses are returned
    as received; interpreting them is left to the caller.
    """

    def __init__(self, config: ClientConfig):
        self.config = config

    def _ssl_context(self) -> ssl.SSLContext:
        context = ssl.create_default_context(cafile=self.config.cert_path or None)
        context.verify_mode = ssl.CERT_REQUIRED
        context.check_hostname = True
        return context

    def _timeout(self) -> aiohttp.ClientTimeout:
        # connect covers DNS, pool acquisition, TCP connect and TLS handshake
        return aiohttp.ClientTimeout(
            connect=self.config.open_timeout,
            sock_read=self.config.read_timeout,
        )

    def _open_session(self) -> aiohttp.ClientSession:
        connector = DepthCheckingConnector(
            verify_depth=self.config.verify_depth,
            ssl=self._ssl_context(),
            force_close=True,
        )
        return aiohttp.ClientSession(connector=connector, timeout=self._timeout())

    async def get(self, url: str) -> RawResponse:
        """Send a GET request with no body and default headers."""
        return await self._send("GET", url)

    async def post(self, url: str, body: str, headers: dict[str, str]) -> RawResponse:
        """Send a POST request with an already encoded body."""
        return await self._send("POST", url, body=body, headers=headers)

    async def _send(
        self,
        method: str,
        url: str,
        body: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> RawResponse:
        logger.debug(
            f"REST {method} request ->\nurl: {url}\nbody: {body}\n"
            f"headers: {redact(headers or {})}"
        )

        try:
            async with self._open_session() as session:
                async with session.request(
                    method=method,
                    url=url,
                    data=body.encode("utf-8") if body is not None else None,
                    headers=headers,
                ) as response:
                    # Raw bytes; decoding is the classifier's job
                    content = await response.read()
                    return RawResponse(
                        status=response.status,
                        reason=response.reason or "",
                        body=content,
                    )

        except (aiohttp.ClientError, asyncio.TimeoutError, ssl.SSLError) as e:
            logger.error(f"REST request failed: {method} {url} - {e!r}")
            raise ConnectionFailedError(f"Failed to connect to zaif: {e!r}") from e
