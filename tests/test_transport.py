"""Unit tests for the HTTPS transport."""

import asyncio
import ssl
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from zaif.client.rest import RestClient
from zaif.client.transport import (
    DepthCheckingConnector,
    HttpTransport,
    check_chain_depth,
)
from zaif.exceptions import ConnectionFailedError, MalformedResponseError
from zaif.utils.config import ClientConfig

UNDECODABLE_PAGE = b"\xff\xfe<html>\x93\x82</html>"


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""

    def __init__(self, status: int, reason: str, content: bytes):
        self.status = status
        self.reason = reason
        self._content = content

    async def read(self) -> bytes:
        return self._content

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class FakeSession:
    """Minimal stand-in for aiohttp.ClientSession recording requests."""

    def __init__(self, response: FakeResponse):
        self.response = response
        self.requests: list[dict] = []
        self.closed = False

    def request(self, **kwargs):
        self.requests.append(kwargs)
        return self.response

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.closed = True
        return False


@pytest.fixture
def transport() -> HttpTransport:
    return HttpTransport(ClientConfig(open_timeout=3, read_timeout=7))


def ssl_object_with_chain(length: int) -> MagicMock:
    ssl_object = MagicMock()
    ssl_object.get_verified_chain.return_value = [object()] * length
    return ssl_object


class TestTransportSetup:
    """Test suite for TLS, timeout and connector settings."""

    def test_ssl_context_verifies_peer(self, transport: HttpTransport):
        """Test that the TLS context requires a verified certificate."""
        context = transport._ssl_context()

        assert context.verify_mode == ssl.CERT_REQUIRED
        assert context.check_hostname is True

    def test_timeouts(self, transport: HttpTransport):
        """Test that the open timeout covers the whole connect step."""
        timeout = transport._timeout()

        assert timeout.connect == 3
        assert timeout.sock_connect is None
        assert timeout.sock_read == 7

    @pytest.mark.asyncio
    async def test_session_uses_depth_checking_connector(
        self, transport: HttpTransport
    ):
        """Test that every session checks chain depth and never reuses connections."""
        session = transport._open_session()
        try:
            assert isinstance(session.connector, DepthCheckingConnector)
            assert session.connector.verify_depth == 5
            assert session.connector.force_close
        finally:
            await session.close()


class TestTransportSend:
    """Test suite for request execution."""

    @pytest.mark.asyncio
    async def test_get_returns_raw_response(self, transport: HttpTransport):
        """Test that GET sends no body and returns status and body bytes."""
        session = FakeSession(FakeResponse(200, "OK", b'{"last_price": 1}'))

        with patch.object(transport, "_open_session", return_value=session):
            response = await transport.get("https://api.zaif.jp/api/1/ticker/btc_jpy")

        assert response.status == 200
        assert response.body == b'{"last_price": 1}'
        assert session.requests[0]["method"] == "GET"
        assert session.requests[0]["data"] is None
        assert session.requests[0]["headers"] is None
        assert session.closed

    @pytest.mark.asyncio
    async def test_post_sends_exact_body_bytes(self, transport: HttpTransport):
        """Test that POST transmits the encoded body unchanged."""
        session = FakeSession(FakeResponse(200, "OK", b"{}"))
        body = "amount=0.1&method=trade&nonce=1.5"
        headers = {"Key": "k", "Sign": "s"}

        with patch.object(transport, "_open_session", return_value=session):
            await transport.post("https://api.zaif.jp/tapi", body, headers)

        sent = session.requests[0]
        assert sent["method"] == "POST"
        assert sent["data"] == body.encode("utf-8")
        assert sent["headers"] == headers

    @pytest.mark.asyncio
    async def test_non_2xx_is_returned_not_interpreted(self, transport: HttpTransport):
        """Test that the transport hands back error statuses as received."""
        session = FakeSession(FakeResponse(503, "Service Unavailable", b"down"))

        with patch.object(transport, "_open_session", return_value=session):
            response = await transport.get("https://api.zaif.jp/api/1/ticker/btc_jpy")

        assert response.status == 503
        assert response.status_line == "503 Service Unavailable"

    @pytest.mark.asyncio
    async def test_undecodable_body_is_returned_as_bytes(
        self, transport: HttpTransport
    ):
        """Test that a body that is not UTF-8 does not fail in the transport."""
        session = FakeSession(FakeResponse(200, "OK", UNDECODABLE_PAGE))

        with patch.object(transport, "_open_session", return_value=session):
            response = await transport.get("https://api.zaif.jp/api/1/ticker/btc_jpy")

        assert response.body == UNDECODABLE_PAGE

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            aiohttp.ClientConnectionError("connection refused"),
            asyncio.TimeoutError(),
            ssl.SSLError("handshake failure"),
        ],
    )
    async def test_transport_failures(self, transport: HttpTransport, error):
        """Test that network failures become ConnectionFailedError."""
        with patch.object(transport, "_open_session", side_effect=error):
            with pytest.raises(ConnectionFailedError) as exc_info:
                await transport.get("https://api.zaif.jp/api/1/ticker/btc_jpy")

        assert exc_info.value.status is None
        assert exc_info.value.__cause__ is error


class TestUndecodableBodyThroughClient:
    """Test suite for non-UTF-8 bodies passing through the whole pipeline."""

    @pytest.fixture
    def client(self, transport: HttpTransport) -> RestClient:
        return RestClient(cool_down=False, transport=transport)

    @pytest.mark.asyncio
    async def test_success_status_gives_malformed_response(
        self, client: RestClient, transport: HttpTransport
    ):
        """Test that a 200 with a non-UTF-8 body raises MalformedResponseError."""
        session = FakeSession(FakeResponse(200, "OK", UNDECODABLE_PAGE))

        with patch.object(transport, "_open_session", return_value=session):
            with pytest.raises(MalformedResponseError) as exc_info:
                await client.get_last_price("btc")

        assert exc_info.value.body == UNDECODABLE_PAGE

    @pytest.mark.asyncio
    async def test_error_status_gives_connection_error(
        self, client: RestClient, transport: HttpTransport
    ):
        """Test that a 503 with a non-UTF-8 page raises ConnectionFailedError."""
        session = FakeSession(
            FakeResponse(503, "Service Unavailable", UNDECODABLE_PAGE)
        )

        with patch.object(transport, "_open_session", return_value=session):
            with pytest.raises(ConnectionFailedError) as exc_info:
                await client.get_last_price("btc")

        assert exc_info.value.status == 503


class TestChainDepth:
    """Test suite for certificate chain depth enforcement."""

    def test_chain_within_depth(self):
        """Test that a leaf plus five issuers is accepted."""
        check_chain_depth(ssl_object_with_chain(6), 5)

    def test_chain_too_deep(self):
        """Test that more than five issuers is rejected."""
        with pytest.raises(ConnectionFailedError, match="too deep"):
            check_chain_depth(ssl_object_with_chain(7), 5)

    def test_chain_unavailable(self):
        """Test that a missing TLS object is tolerated."""
        check_chain_depth(None, 5)

    @pytest.mark.asyncio
    async def test_deep_chain_rejected_before_request_is_written(self):
        """Test that the connector drops a too-deep peer before sending anything."""
        protocol = MagicMock()
        protocol.transport.get_extra_info.return_value = ssl_object_with_chain(7)
        connector = DepthCheckingConnector(verify_depth=5, force_close=True)

        try:
            with patch.object(
                aiohttp.TCPConnector,
                "_create_connection",
                new_callable=AsyncMock,
                return_value=protocol,
            ):
                with pytest.raises(ConnectionFailedError, match="too deep"):
                    await connector._create_connection(MagicMock(), [], MagicMock())
        finally:
            await connector.close()

        protocol.transport.get_extra_info.assert_called_once_with("ssl_object")
        protocol.close.assert_called_once()
        protocol.transport.write.assert_not_called()

    @pytest.mark.asyncio
    async def test_connection_within_depth_is_returned(self):
        """Test that an acceptable peer's connection is handed back unchanged."""
        protocol = MagicMock()
        protocol.transport.get_extra_info.return_value = ssl_object_with_chain(3)
        connector = DepthCheckingConnector(verify_depth=5, force_close=True)

        try:
            with patch.object(
                aiohttp.TCPConnector,
                "_create_connection",
                new_callable=AsyncMock,
                return_value=protocol,
            ):
                result = await connector._create_connection(
                    MagicMock(), [], MagicMock()
                )
        finally:
            await connector.close()

        assert result is protocol
        protocol.close.assert_not_called()
