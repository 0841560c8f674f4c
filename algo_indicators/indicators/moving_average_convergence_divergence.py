"""Moving Average Convergence/Divergence (MACD) of closing prices.

Based on: https://en.wikipedia.org/wiki/MACD
     and: https://www.investopedia.com/terms/m/macd.asp
"""

from __future__ import annotations

from algo_indicators.config import MacdConfig
from algo_indicators.engine.sliding_window import ExponentialMovingAverageHelper
from algo_indicators.engine.tick_aggregator import LastNOhlcTicks
from algo_indicators.errors import InvalidParameterError
from algo_indicators.types import OhlcTick


class MovingAverageConvergenceDivergence:
    """MACD series, signal and divergence over aggregate ticks.

    fast/slow EMAs of the close use weights 2 / (1 + length); the signal
    is an EMA of the MACD series with weight 2 / (1 + signal_smoothing).
    Typical lengths are 12, 26 and 9 periods.
    """

    def __init__(
        self,
        fast_length: int,
        slow_length: int,
        signal_smoothing: int,
        period_size_sec: int,
    ) -> None:
        for name, length in (
            ("fast_length", fast_length),
            ("slow_length", slow_length),
            ("signal_smoothing", signal_smoothing),
        ):
            if length < 1:
                raise InvalidParameterError(f"{name} must be >= 1, got {length}")
        self.fast_length = fast_length
        self.slow_length = slow_length
        self.signal_smoothing = signal_smoothing
        self._fast_ema = ExponentialMovingAverageHelper(
            weight=2.0 / (1.0 + fast_length),
        )
        self._slow_ema = ExponentialMovingAverageHelper(
            weight=2.0 / (1.0 + slow_length),
        )
        self._signal_ema = ExponentialMovingAverageHelper(
            weight=2.0 / (1.0 + signal_smoothing),
        )
        self._last_n_ohlc_ticks = LastNOhlcTicks(
            num_ohlc_ticks=1,
            period_size_sec=period_size_sec,
            on_last_tick_updated=self._last_tick_updated,
            on_new_tick_added=self._new_tick_added,
            on_new_tick_added_and_oldest_tick_removed=self._tick_shifted,
        )

    @classmethod
    def from_config(cls, config: MacdConfig) -> MovingAverageConvergenceDivergence:
        return cls(
            fast_length=config.fast_length,
            slow_length=config.slow_length,
            signal_smoothing=config.signal_smoothing,
            period_size_sec=config.period_size_sec,
        )

    @property
    def fast_ema(self) -> float:
        return self._fast_ema.value

    @property
    def slow_ema(self) -> float:
        return self._slow_ema.value

    @property
    def macd_series(self) -> float:
        """Fast EMA minus slow EMA."""
        return self.fast_ema - self.slow_ema

    @property
    def macd_signal(self) -> float:
        """EMA of the MACD series."""
        return self._signal_ema.value

    @property
    def divergence(self) -> float:
        """MACD series minus MACD signal (the histogram)."""
        return self.macd_series - self.macd_signal

    @property
    def num_ohlc_ticks(self) -> int:
        return self._fast_ema.num_values

    @property
    def is_warm(self) -> bool:
        return self.num_ohlc_ticks >= self.slow_length

    def update(self, ohlc_tick: OhlcTick) -> None:
        self._last_n_ohlc_ticks.update(ohlc_tick)

    def _last_tick_updated(self, old_tick: OhlcTick, new_tick: OhlcTick) -> None:
        self._fast_ema.update_current_value(new_tick.close)
        self._slow_ema.update_current_value(new_tick.close)
        self._signal_ema.update_current_value(self.macd_series)

    def _new_tick_added(self, new_tick: OhlcTick) -> None:
        self._fast_ema.add_new_value(new_tick.close)
        self._slow_ema.add_new_value(new_tick.close)
        self._signal_ema.add_new_value(self.macd_series)

    def _tick_shifted(self, removed_tick: OhlcTick, new_tick: OhlcTick) -> None:
        self._new_tick_added(new_tick)
