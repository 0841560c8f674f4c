"""Market data types consumed by the indicator engine.

Frozen dataclasses for value objects. Prices are plain floats: indicator
math is float math, and conversion from exchange types (Decimal, str)
happens upstream of this package.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OhlcTick:
    """OHLCV tick covering one period that starts at timestamp_sec (UTC)."""

    timestamp_sec: int
    open: float
    high: float
    low: float
    close: float
    volume: float

    @property
    def is_valid(self) -> bool:
        """True if low <= open, close <= high and volume is non-negative."""
        return (
            self.low <= self.open <= self.high
            and self.low <= self.close <= self.high
            and self.volume >= 0
        )
