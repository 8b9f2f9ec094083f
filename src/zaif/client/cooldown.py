"""Post-call cool-down to stay under the exchange's rate limit."""

import asyncio
from abc import ABC, abstractmethod

from ..utils.logger import logger


class CoolDownStrategy(ABC):
    """Delay applied after every successful call."""

    @abstractmethod
    async def wait(self) -> None:
        pass


class CoolDown(CoolDownStrategy):
    """Fixed sleep after each call."""

    def __init__(self, seconds: float):
        if seconds < 0:
            raise ValueError("Cool-down time must not be negative")
        self.seconds = seconds

    async def wait(self) -> None:
        logger.debug(f"Cooling down for {self.seconds}s")
        await asyncio.sleep(self.seconds)


class NoCoolDown(CoolDownStrategy):
    """Returns immediately."""

    async def wait(self) -> None:
        return None
