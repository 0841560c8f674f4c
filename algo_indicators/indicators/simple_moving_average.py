"""Simple Moving Average (SMA) of closing prices over the last N ticks.

Based on: https://www.investopedia.com/terms/s/sma.asp
"""

from __future__ import annotations

from algo_indicators.config import SmaConfig
from algo_indicators.engine.tick_aggregator import LastNOhlcTicks
from algo_indicators.types import OhlcTick


class SimpleMovingAverage:
    """SMA via running sum over the aggregation window. O(1) per update.

    Before N ticks were seen the average covers the ticks seen so far.
    """

    def __init__(self, num_ohlc_ticks: int, period_size_sec: int) -> None:
        self._sum_close = 0.0
        self._last_n_ohlc_ticks = LastNOhlcTicks(
            num_ohlc_ticks=num_ohlc_ticks,
            period_size_sec=period_size_sec,
            on_last_tick_updated=self._last_tick_updated,
            on_new_tick_added=self._new_tick_added,
            on_new_tick_added_and_oldest_tick_removed=self._tick_shifted,
        )

    @classmethod
    def from_config(cls, config: SmaConfig) -> SimpleMovingAverage:
        return cls(
            num_ohlc_ticks=config.num_ohlc_ticks,
            period_size_sec=config.period_size_sec,
        )

    @property
    def value(self) -> float:
        """Current SMA, or 0 before the first tick."""
        num_ohlc_ticks = self.num_ohlc_ticks
        if num_ohlc_ticks == 0:
            return 0.0
        return self._sum_close / num_ohlc_ticks

    @property
    def num_ohlc_ticks(self) -> int:
        """Number of ticks in the window (max = N)."""
        return len(self._last_n_ohlc_ticks.ohlc_ticks)

    @property
    def is_warm(self) -> bool:
        return self.num_ohlc_ticks >= self._last_n_ohlc_ticks.num_ohlc_ticks

    def update(self, ohlc_tick: OhlcTick) -> None:
        self._last_n_ohlc_ticks.update(ohlc_tick)

    def _last_tick_updated(self, old_tick: OhlcTick, new_tick: OhlcTick) -> None:
        self._sum_close += new_tick.close - old_tick.close

    def _new_tick_added(self, new_tick: OhlcTick) -> None:
        self._sum_close += new_tick.close

    def _tick_shifted(self, removed_tick: OhlcTick, new_tick: OhlcTick) -> None:
        self._sum_close += new_tick.close - removed_tick.close
