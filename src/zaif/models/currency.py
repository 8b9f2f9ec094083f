"""Currency pair model."""

from dataclasses import dataclass

from ..utils.config import Config


@dataclass(frozen=True)
class CurrencyPair:
    """A base/counter currency pair as the exchange names it (e.g. btc_jpy)."""

    base: str
    counter: str = Config.DEFAULT_COUNTER_CURRENCY

    def __post_init__(self):
        if not self.base or not self.counter:
            raise ValueError("Currency codes must not be empty")
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "base", self.base.lower())
        object.__setattr__(self, "counter", self.counter.lower())

    def __str__(self) -> str:
        return f"{self.base}_{self.counter}"
