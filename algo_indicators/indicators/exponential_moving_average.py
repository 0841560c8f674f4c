"""Exponential Moving Average (EMA) of closing prices.

Based on: https://www.investopedia.com/terms/e/ema.asp
"""

from __future__ import annotations

from collections.abc import Callable

from algo_indicators.config import EmaConfig
from algo_indicators.engine.sliding_window import ExponentialMovingAverageHelper
from algo_indicators.engine.tick_aggregator import LastNOhlcTicks
from algo_indicators.errors import InvalidParameterError
from algo_indicators.types import OhlcTick

EmaUpdatedCallback = Callable[[float, int], None]


class ExponentialMovingAverage:
    """EMA of closing prices over all aggregate ticks seen so far.

    Weight of the newest close is smoothing / (1 + ema_length). The EMA of
    the very first tick is its close.
    """

    def __init__(
        self,
        smoothing: float,
        ema_length: int,
        period_size_sec: int,
        *,
        on_updated: EmaUpdatedCallback | None = None,
    ) -> None:
        if smoothing <= 0:
            raise InvalidParameterError(f"smoothing must be > 0, got {smoothing}")
        if ema_length < 1:
            raise InvalidParameterError(f"ema_length must be >= 1, got {ema_length}")
        self.smoothing = smoothing
        self.ema_length = ema_length
        self._ema = ExponentialMovingAverageHelper(
            weight=smoothing / (1.0 + ema_length),
        )
        self._on_updated = on_updated
        self._last_n_ohlc_ticks = LastNOhlcTicks(
            num_ohlc_ticks=1,
            period_size_sec=period_size_sec,
            on_last_tick_updated=self._last_tick_updated,
            on_new_tick_added=self._new_tick_added,
            on_new_tick_added_and_oldest_tick_removed=self._tick_shifted,
        )

    @classmethod
    def from_config(
        cls,
        config: EmaConfig,
        *,
        on_updated: EmaUpdatedCallback | None = None,
    ) -> ExponentialMovingAverage:
        return cls(
            smoothing=config.smoothing,
            ema_length=config.ema_length,
            period_size_sec=config.period_size_sec,
            on_updated=on_updated,
        )

    @property
    def value(self) -> float:
        """Current EMA, or 0 before the first tick."""
        return self._ema.value

    @property
    def num_ohlc_ticks(self) -> int:
        return self._ema.num_values

    @property
    def is_warm(self) -> bool:
        return self.num_ohlc_ticks >= self.ema_length

    def update(self, ohlc_tick: OhlcTick) -> None:
        self._last_n_ohlc_ticks.update(ohlc_tick)
        if self._on_updated is not None:
            self._on_updated(self.value, self.num_ohlc_ticks)

    def _last_tick_updated(self, old_tick: OhlcTick, new_tick: OhlcTick) -> None:
        self._ema.update_current_value(new_tick.close)

    def _new_tick_added(self, new_tick: OhlcTick) -> None:
        self._ema.add_new_value(new_tick.close)

    def _tick_shifted(self, removed_tick: OhlcTick, new_tick: OhlcTick) -> None:
        self._new_tick_added(new_tick)
