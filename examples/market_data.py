"""
Print BTC/JPY market data and, when credentials are configured, account funds.

Credentials are read from ZAIF_API_KEY / ZAIF_API_SECRET or ZAIF_TOKEN
(a .env file works too).
"""

import asyncio

from zaif import Config, RestClient, ZaifError
from zaif.utils.logger import logger


async def main():
    client = RestClient.from_env()

    price = await client.get_last_price("btc")
    logger.info(f"BTC/JPY last price: {price}")

    ticker = await client.get_ticker("btc")
    logger.info(f"BTC/JPY ticker: {ticker}")

    if not Config.validate():
        logger.info("No credentials configured, skipping private calls")
        return

    try:
        info = await client.get_info2()
        logger.info(f"Funds: {info.get('funds')}")
    except ZaifError as e:
        logger.error(f"Private call failed: {type(e).__name__}: {e}")


if __name__ == "__main__":
    asyncio.run(main())
