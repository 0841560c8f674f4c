"""Indicator protocol: the capability shared by every indicator.

Indicators have distinct getter sets; this protocol covers only what a
driving loop needs to feed them uniformly.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from algo_indicators.types import OhlcTick


@runtime_checkable
class Indicator(Protocol):
    """Synchronous, incrementally updated technical indicator."""

    def update(self, ohlc_tick: OhlcTick) -> None:
        """Fold the next tick (strictly later timestamp) into the indicator."""
        ...

    @property
    def num_ohlc_ticks(self) -> int:
        """Number of aggregate OHLC ticks observed."""
        ...

    @property
    def is_warm(self) -> bool:
        """True once enough periods were seen for a steady-state value."""
        ...
