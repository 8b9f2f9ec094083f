"""REST API client for the Zaif exchange."""

from dataclasses import replace
from typing import Any, Literal

from ..exceptions import MalformedResponseError
from ..models.currency import CurrencyPair
from ..models.request import RequestSpec
from ..utils.config import ClientConfig, Config
from ..utils.logger import logger
from ..utils.timing import get_nonce
from .auth import sign_request
from .classifier import classify_private, classify_public
from .cooldown import CoolDown, CoolDownStrategy, NoCoolDown
from .credentials import Credentials
from .transport import HttpTransport

TradeAction = Literal["bid", "ask"]


class RestClient:
    """
    Async REST client for the Zaif API.

    Every call is one independent request: no retries, no pooling. Private
    nonces come from the wall clock, so private calls sharing one set of
    credentials must be awaited one at a time.
    """

    def __init__(
        self,
        cool_down: bool = Config.COOL_DOWN,
        cool_down_time: float = Config.COOL_DOWN_TIME,
        cert_path: str | None = None,
        token: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        open_timeout: float = Config.OPEN_TIMEOUT,
        read_timeout: float = Config.READ_TIMEOUT,
        transport: HttpTransport | None = None,
        cool_down_strategy: CoolDownStrategy | None = None,
    ):
        self.config = ClientConfig(
            open_timeout=open_timeout,
            read_timeout=read_timeout,
            cool_down=cool_down,
            cool_down_time=cool_down_time,
            cert_path=cert_path,
        )
        self.credentials = Credentials(
            token=token, api_key=api_key, api_secret=api_secret
        )
        self.transport = transport or HttpTransport(self.config)

        if cool_down_strategy is not None:
            self.cool_down = cool_down_strategy
        elif self.config.cool_down:
            self.cool_down = CoolDown(self.config.cool_down_time)
        else:
            self.cool_down = NoCoolDown()

    @classmethod
    def from_env(cls, **options) -> "RestClient":
        """Create a client with credentials and CA bundle taken from the environment."""
        options.setdefault("token", Config.TOKEN or None)
        options.setdefault("api_key", Config.API_KEY or None)
        options.setdefault("api_secret", Config.API_SECRET or None)
        options.setdefault("cert_path", Config.CERT_PATH or None)
        return cls(**options)

    def set_api_key(self, api_key: str, api_secret: str) -> None:
        """Replace the API key/secret pair."""
        self.credentials = replace(
            self.credentials, api_key=api_key, api_secret=api_secret
        )

    def set_token(self, token: str | None) -> None:
        """Replace the bearer token. A set token takes precedence over the key pair."""
        self.credentials = replace(self.credentials, token=token)

    # Pipeline

    async def public_get(self, path: str) -> Any:
        """
        Call a public endpoint.

        Args:
            path: Path relative to the public base URL (e.g. "ticker/btc_jpy")

        Returns:
            Parsed JSON response
        """
        response = await self.transport.get(self.config.public_url + path)
        data = classify_public(response)
        await self.cool_down.wait()
        return data

    async def private_post(
        self, url: str, method: str, params: dict[str, Any] | None = None
    ) -> Any:
        """
        Call a private endpoint.

        Args:
            url: Trade or leverage-trade base URL
            method: API method name (e.g. "get_info")
            params: Method parameters

        Returns:
            The ``return`` payload of the response envelope
        """
        self.credentials.check_ready()

        spec = RequestSpec(
            url=url,
            method="POST",
            params={k: str(v) for k, v in (params or {}).items()},
        )
        body, headers = sign_request(
            method=method,
            params=spec.params,
            nonce=get_nonce(),
            credentials=self.credentials,
        )
        response = await self.transport.post(spec.url, body, headers)
        data = classify_private(response)
        await self.cool_down.wait()
        return data

    # Public endpoints

    async def get_last_price(
        self,
        currency_code: str,
        counter_currency_code: str = Config.DEFAULT_COUNTER_CURRENCY,
    ) -> Any:
        """Get the last traded price of a currency pair."""
        pair = CurrencyPair(currency_code, counter_currency_code)
        data = await self.public_get(f"last_price/{pair}")
        if not isinstance(data, dict) or "last_price" not in data:
            raise MalformedResponseError(str(data))
        return data["last_price"]

    async def get_ticker(
        self,
        currency_code: str,
        counter_currency_code: str = Config.DEFAULT_COUNTER_CURRENCY,
    ) -> dict[str, Any]:
        """Get the ticker of a currency pair."""
        pair = CurrencyPair(currency_code, counter_currency_code)
        return await self.public_get(f"ticker/{pair}")

    async def get_trades(
        self,
        currency_code: str,
        counter_currency_code: str = Config.DEFAULT_COUNTER_CURRENCY,
    ) -> list[dict[str, Any]]:
        """Get recent trades of a currency pair."""
        pair = CurrencyPair(currency_code, counter_currency_code)
        return await self.public_get(f"trades/{pair}")

    async def get_depth(
        self,
        currency_code: str,
        counter_currency_code: str = Config.DEFAULT_COUNTER_CURRENCY,
    ) -> dict[str, Any]:
        """Get the order book depth of a currency pair."""
        pair = CurrencyPair(currency_code, counter_currency_code)
        return await self.public_get(f"depth/{pair}")

    # Private endpoints (trade API)

    async def get_info(self) -> dict[str, Any]:
        """Get account information."""
        return await self.private_post(self.config.trade_url, "get_info")

    async def get_info2(self) -> dict[str, Any]:
        """Get lightweight account information."""
        return await self.private_post(self.config.trade_url, "get_info2")

    async def get_my_trades(
        self, options: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Get your trade history.

        Args:
            options: from, count, from_id, end_id, order, since, end, currency_pair

        Returns:
            Trades keyed by trade ID
        """
        return await self.private_post(
            self.config.trade_url, "trade_history", options
        )

    async def get_active_orders(
        self, options: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Get your active orders.

        Args:
            options: currency_pair

        Returns:
            Orders keyed by order ID
        """
        return await self.private_post(
            self.config.trade_url, "active_orders", options
        )

    async def trade(
        self,
        currency_code: str,
        price: Any,
        amount: Any,
        action: TradeAction,
        limit: Any | None = None,
        counter_currency_code: str = Config.DEFAULT_COUNTER_CURRENCY,
    ) -> dict[str, Any]:
        """
        Place an order.

        Args:
            currency_code: Base currency code
            price: Order price
            amount: Order amount
            action: "bid" or "ask"
            limit: Optional limit price
            counter_currency_code: Counter currency code

        Returns:
            Order result (received, remains, order_id, funds)
        """
        pair = CurrencyPair(currency_code, counter_currency_code)
        params: dict[str, Any] = {
            "currency_pair": str(pair),
            "action": action,
            "price": price,
            "amount": amount,
        }
        if limit is not None:
            params["limit"] = limit

        result = await self.private_post(self.config.trade_url, "trade", params)
        logger.info(f"Order placed: {action} {amount} {pair} @ {price}")
        return result

    async def bid(
        self,
        currency_code: str,
        price: Any,
        amount: Any,
        limit: Any | None = None,
        counter_currency_code: str = Config.DEFAULT_COUNTER_CURRENCY,
    ) -> dict[str, Any]:
        """Place a buy order."""
        return await self.trade(
            currency_code, price, amount, "bid", limit, counter_currency_code
        )

    async def ask(
        self,
        currency_code: str,
        price: Any,
        amount: Any,
        limit: Any | None = None,
        counter_currency_code: str = Config.DEFAULT_COUNTER_CURRENCY,
    ) -> dict[str, Any]:
        """Place a sell order."""
        return await self.trade(
            currency_code, price, amount, "ask", limit, counter_currency_code
        )

    async def cancel(self, order_id: int | str) -> dict[str, Any]:
        """Cancel an order."""
        result = await self.private_post(
            self.config.trade_url, "cancel_order", {"order_id": order_id}
        )
        logger.info(f"Order cancelled: {order_id}")
        return result

    async def withdraw(
        self,
        currency_code: str,
        address: str,
        amount: Any,
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Withdraw funds.

        Args:
            currency_code: Currency to withdraw
            address: Destination address
            amount: Amount to withdraw
            options: Extra parameters (message, opt_fee)
        """
        params = dict(options or {})
        params["currency"] = currency_code
        params["address"] = address
        params["amount"] = amount
        result = await self.private_post(self.config.trade_url, "withdraw", params)
        logger.info(f"Withdrawal requested: {amount} {currency_code}")
        return result

    async def withdraw_history(
        self, currency: str, options: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Get your withdrawal history.

        Args:
            currency: Currency code
            options: from, count, from_id, end_id, order, since, end
        """
        params = dict(options or {})
        params["currency"] = currency
        return await self.private_post(
            self.config.trade_url, "withdraw_history", params
        )

    async def deposit_history(
        self, currency: str, options: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Get your deposit history.

        Args:
            currency: Currency code
            options: from, count, from_id, end_id, order, since, end
        """
        params = dict(options or {})
        params["currency"] = currency
        return await self.private_post(
            self.config.trade_url, "deposit_history", params
        )

    # Private endpoints (leverage trade API)

    async def get_positions(
        self, position_type: str, options: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Get leverage positions.

        Args:
            position_type: "margin" or "futures"
            options: Extra filters (group_id, from, count, ...)
        """
        params = dict(options or {})
        params["type"] = position_type
        return await self.private_post(
            self.config.leverage_trade_url, "get_positions", params
        )
