"""Relative Strength Index (RSI) of closing prices.

Upward change U and downward change D are smoothed with Wilder's
modified moving average: an EMA with weight 1 / min(ticks seen, N).
Typically N = 14 daily periods.

Based on: https://en.wikipedia.org/wiki/Relative_strength_index
     and: https://www.investopedia.com/terms/r/rsi.asp
"""

from __future__ import annotations

from algo_indicators.config import RsiConfig
from algo_indicators.engine.sliding_window import ExponentialMovingAverageHelper
from algo_indicators.engine.tick_aggregator import LastNOhlcTicks
from algo_indicators.errors import InvalidParameterError
from algo_indicators.types import OhlcTick

NEUTRAL_RSI = 50.0
MAX_RSI = 100.0
EPSILON = 1.0e-6


class RelativeStrengthIndex:
    """RSI over all aggregate ticks seen so far.

    The change of the very first tick is its close minus its open; later
    changes compare consecutive closes.
    """

    def __init__(self, num_periods: int, period_size_sec: int) -> None:
        if num_periods < 1:
            raise InvalidParameterError(f"num_periods must be >= 1, got {num_periods}")
        self.num_periods = num_periods
        self._num_ohlc_ticks = 0
        self._upward_change_mma = ExponentialMovingAverageHelper()
        self._downward_change_mma = ExponentialMovingAverageHelper()
        self._last_n_ohlc_ticks = LastNOhlcTicks(
            num_ohlc_ticks=2,
            period_size_sec=period_size_sec,
            on_last_tick_updated=self._last_tick_updated,
            on_new_tick_added=self._new_tick_added,
            on_new_tick_added_and_oldest_tick_removed=self._tick_shifted,
        )

    @classmethod
    def from_config(cls, config: RsiConfig) -> RelativeStrengthIndex:
        return cls(
            num_periods=config.num_periods,
            period_size_sec=config.period_size_sec,
        )

    @property
    def upward_change_mma(self) -> float:
        return self._upward_change_mma.value

    @property
    def downward_change_mma(self) -> float:
        return self._downward_change_mma.value

    @property
    def value(self) -> float:
        """RSI = 100 - 100 / (1 + U / D); 50 if both U and D are ~0."""
        upward = self.upward_change_mma
        downward = self.downward_change_mma
        if upward < EPSILON and downward < EPSILON:
            return NEUTRAL_RSI
        if downward < upward * EPSILON:
            return MAX_RSI
        return 100.0 - 100.0 / (1.0 + upward / downward)

    @property
    def num_ohlc_ticks(self) -> int:
        return self._num_ohlc_ticks

    @property
    def is_warm(self) -> bool:
        return self._num_ohlc_ticks >= self.num_periods

    def update(self, ohlc_tick: OhlcTick) -> None:
        self._last_n_ohlc_ticks.update(ohlc_tick)

    def _last_tick_updated(self, old_tick: OhlcTick, new_tick: OhlcTick) -> None:
        weight = self._weight()
        upward, downward = self._upward_downward_change()
        self._upward_change_mma.update_current_value(upward, weight)
        self._downward_change_mma.update_current_value(downward, weight)

    def _new_tick_added(self, new_tick: OhlcTick) -> None:
        self._num_ohlc_ticks += 1
        weight = self._weight()
        upward, downward = self._upward_downward_change()
        self._upward_change_mma.add_new_value(upward, weight)
        self._downward_change_mma.add_new_value(downward, weight)

    def _tick_shifted(self, removed_tick: OhlcTick, new_tick: OhlcTick) -> None:
        self._new_tick_added(new_tick)

    def _weight(self) -> float:
        return 1.0 / min(self._num_ohlc_ticks, self.num_periods)

    def _upward_downward_change(self) -> tuple[float, float]:
        ticks = self._last_n_ohlc_ticks.ohlc_ticks
        current = ticks[-1]
        previous_close = ticks[0].close if len(ticks) == 2 else current.open
        change = current.close - previous_close
        if change >= 0:
            return change, 0.0
        return 0.0, -change
