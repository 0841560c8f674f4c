"""Stochastic Oscillator (SO) over the last N aggregate ticks.

Typical values for N are 5, 9 or 14 periods.

Based on: https://en.wikipedia.org/wiki/Stochastic_oscillator
     and: https://www.investopedia.com/terms/s/stochasticoscillator.asp
"""

from __future__ import annotations

from algo_indicators.config import StochasticConfig
from algo_indicators.engine.sliding_window import (
    BoundedSimpleAverage,
    SlidingWindowMaximum,
    SlidingWindowMinimum,
)
from algo_indicators.engine.tick_aggregator import LastNOhlcTicks
from algo_indicators.errors import InvalidParameterError
from algo_indicators.types import OhlcTick

D_WINDOW_SIZE = 3
NEUTRAL_K = 50.0
MIN_PRICE_SPAN = 1.0e-6


class StochasticOscillator:
    """%K, %D-fast and %D-slow.

    %K = 100 * (close - low_N) / (high_N - low_N), 50 in a flat window.
    %D-fast is the 3-period SMA of %K, %D-slow the 3-period SMA of
    %D-fast.
    """

    def __init__(self, num_periods: int, period_size_sec: int) -> None:
        if num_periods < 1:
            raise InvalidParameterError(f"num_periods must be >= 1, got {num_periods}")
        self.num_periods = num_periods
        self._num_ohlc_ticks = 0
        self._k = 0.0
        self._low = SlidingWindowMinimum(window_size=num_periods)
        self._high = SlidingWindowMaximum(window_size=num_periods)
        self._d_fast = BoundedSimpleAverage(window_size=D_WINDOW_SIZE)
        self._d_slow = BoundedSimpleAverage(window_size=D_WINDOW_SIZE)
        self._last_n_ohlc_ticks = LastNOhlcTicks(
            num_ohlc_ticks=1,
            period_size_sec=period_size_sec,
            on_last_tick_updated=self._last_tick_updated,
            on_new_tick_added=self._new_tick_added,
            on_new_tick_added_and_oldest_tick_removed=self._tick_shifted,
        )

    @classmethod
    def from_config(cls, config: StochasticConfig) -> StochasticOscillator:
        return cls(
            num_periods=config.num_periods,
            period_size_sec=config.period_size_sec,
        )

    @property
    def low(self) -> float:
        """Lowest low over the last N ticks."""
        return self._low.minimum

    @property
    def high(self) -> float:
        """Highest high over the last N ticks."""
        return self._high.maximum

    @property
    def k(self) -> float:
        return self._k

    @property
    def fast_d(self) -> float:
        return self._d_fast.mean

    @property
    def slow_d(self) -> float:
        return self._d_slow.mean

    @property
    def num_ohlc_ticks(self) -> int:
        return self._num_ohlc_ticks

    @property
    def is_warm(self) -> bool:
        # N ticks for %K, then two more SMA-3 stages.
        return self._num_ohlc_ticks >= self.num_periods + 2 * (D_WINDOW_SIZE - 1)

    def update(self, ohlc_tick: OhlcTick) -> None:
        self._last_n_ohlc_ticks.update(ohlc_tick)

    def _last_tick_updated(self, old_tick: OhlcTick, new_tick: OhlcTick) -> None:
        self._low.update_current_value(new_tick.low)
        self._high.update_current_value(new_tick.high)
        self._update_k(new_tick.close)
        self._d_fast.update_current_value(self._k)
        self._d_slow.update_current_value(self.fast_d)

    def _new_tick_added(self, new_tick: OhlcTick) -> None:
        self._num_ohlc_ticks += 1
        self._low.add_new_value(new_tick.low)
        self._high.add_new_value(new_tick.high)
        self._update_k(new_tick.close)
        self._d_fast.add_new_value(self._k)
        self._d_slow.add_new_value(self.fast_d)

    def _tick_shifted(self, removed_tick: OhlcTick, new_tick: OhlcTick) -> None:
        self._new_tick_added(new_tick)

    def _update_k(self, latest_price: float) -> None:
        price_span = self.high - self.low
        if price_span < MIN_PRICE_SPAN:
            self._k = NEUTRAL_K
            return
        self._k = 100.0 * (latest_price - self.low) / price_span
