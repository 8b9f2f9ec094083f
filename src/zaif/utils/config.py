"""Configuration management."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Environment-backed defaults for the Zaif client."""

    # API credentials
    API_KEY: str = os.getenv("ZAIF_API_KEY", "")
    API_SECRET: str = os.getenv("ZAIF_API_SECRET", "")
    TOKEN: str = os.getenv("ZAIF_TOKEN", "")

    # CA bundle used to verify the exchange certificate (system store if empty)
    CERT_PATH: str = os.getenv("ZAIF_CERT_PATH", "")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # REST API URLs
    PUBLIC_URL = "https://api.zaif.jp/api/1/"
    TRADE_URL = "https://api.zaif.jp/tapi"
    LEVERAGE_TRADE_URL = "https://api.zaif.jp/tlapi"

    # Connection settings
    OPEN_TIMEOUT = 5  # seconds
    READ_TIMEOUT = 15  # seconds
    VERIFY_DEPTH = 5

    # Cool-down after each successful call
    COOL_DOWN = True
    COOL_DOWN_TIME = 2  # seconds

    DEFAULT_COUNTER_CURRENCY = "jpy"

    @classmethod
    def validate(cls) -> bool:
        """Check whether the environment carries usable credentials."""
        return bool(cls.TOKEN) or bool(cls.API_KEY and cls.API_SECRET)


@dataclass(frozen=True)
class ClientConfig:
    """Per-client settings, fixed for the lifetime of a client."""

    open_timeout: float = Config.OPEN_TIMEOUT
    read_timeout: float = Config.READ_TIMEOUT
    verify_depth: int = Config.VERIFY_DEPTH
    cool_down: bool = Config.COOL_DOWN
    cool_down_time: float = Config.COOL_DOWN_TIME
    cert_path: str | None = None
    public_url: str = Config.PUBLIC_URL
    trade_url: str = Config.TRADE_URL
    leverage_trade_url: str = Config.LEVERAGE_TRADE_URL

    def __post_init__(self):
        if self.open_timeout <= 0 or self.read_timeout <= 0:
            raise ValueError("Timeouts must be positive")
        if self.cool_down_time < 0:
            raise ValueError("cool_down_time must not be negative")
        if self.verify_depth < 0:
            raise ValueError("verify_depth must not be negative")
