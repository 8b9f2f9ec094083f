"""Centralized logging configuration."""

import logging
import sys
from datetime import datetime

from .config import Config


class MicrosecondFormatter(logging.Formatter):
    """Formatter with microsecond precision in timestamps.

    Example output:
        2024-01-15 14:23:45.123456 - zaif - INFO - [rest.py:42:trade] - Order placed
    """

    def formatTime(self, record, datefmt=None):
        ct = datetime.fromtimestamp(record.created)
        s = ct.strftime(datefmt or "%Y-%m-%d %H:%M:%S")
        return f"{s}.{int(record.created % 1 * 1_000_000):06d}"


def setup_logger(name: str = "zaif") -> logging.Logger:
    """Set up and return a configured logger."""
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = MicrosecondFormatter(
            "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d:%(funcName)s] - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO))

    return logger


def redact(headers: dict[str, str]) -> dict[str, str]:
    """Copy of request headers with credential values masked for logging."""
    return {
        k: ("***" if k in ("Key", "Sign", "Token") else v) for k, v in headers.items()
    }


logger = setup_logger()
