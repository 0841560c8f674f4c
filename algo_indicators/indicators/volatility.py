"""Portfolio volatility: standard deviation of logarithmic returns.

The portfolio value at a tick is base_balance * close + quote_balance,
using the balances passed with the most recent update. The return of the
very first tick is measured against the value at its opening price.

Based on: https://en.wikipedia.org/wiki/Volatility_(finance)
"""

from __future__ import annotations

import math
from collections import deque

from algo_indicators.config import VolatilityConfig
from algo_indicators.engine.sliding_window import SlidingWindowMeanAndVariance
from algo_indicators.engine.tick_aggregator import LastNOhlcTicks
from algo_indicators.errors import IndicatorError, InvalidParameterError
from algo_indicators.types import OhlcTick


class Volatility:
    """Volatility over the last window_size periods (all if window_size=0)."""

    def __init__(self, window_size: int, period_size_sec: int) -> None:
        self.window_size = window_size
        self._base_balance = 0.0
        self._quote_balance = 0.0
        self._has_balances = False
        self._num_ohlc_ticks = 0
        # Previous and current portfolio value.
        self._portfolio_values: deque[float] = deque(maxlen=2)
        self._log_returns = SlidingWindowMeanAndVariance(window_size=window_size)
        self._last_n_ohlc_ticks = LastNOhlcTicks(
            num_ohlc_ticks=2,
            period_size_sec=period_size_sec,
            on_last_tick_updated=self._last_tick_updated,
            on_new_tick_added=self._new_tick_added,
            on_new_tick_added_and_oldest_tick_removed=self._tick_shifted,
        )

    @classmethod
    def from_config(cls, config: VolatilityConfig) -> Volatility:
        return cls(
            window_size=config.window_size,
            period_size_sec=config.period_size_sec,
        )

    @property
    def value(self) -> float:
        """Standard deviation of the log returns, or 0 before two returns."""
        return self._log_returns.standard_deviation

    @property
    def num_ohlc_ticks(self) -> int:
        return self._num_ohlc_ticks

    @property
    def is_warm(self) -> bool:
        return self._num_ohlc_ticks >= max(self.window_size, 2)

    def update(
        self,
        ohlc_tick: OhlcTick,
        base_balance: float | None = None,
        quote_balance: float | None = None,
    ) -> None:
        """Fold in the next tick with the portfolio balances held during it.

        Omitted balances keep their latest values; the first update must
        provide both.

        Raises:
            InvalidParameterError: balances missing on the first update,
                negative, or both zero.
            OutOfOrderTickError, InvalidTickError: the tick was rejected; the
                stored balances are left as they were.
        """
        if not self._has_balances and (base_balance is None or quote_balance is None):
            raise InvalidParameterError(
                "Portfolio balances are required on the first update"
            )
        if base_balance is None:
            base_balance = self._base_balance
        if quote_balance is None:
            quote_balance = self._quote_balance
        if base_balance < 0 or quote_balance < 0 or base_balance + quote_balance <= 0:
            raise InvalidParameterError(
                f"Portfolio balances must be non-negative and not both zero, "
                f"got base={base_balance}, quote={quote_balance}"
            )
        previous_balances = (
            self._base_balance,
            self._quote_balance,
            self._has_balances,
        )
        self._base_balance = base_balance
        self._quote_balance = quote_balance
        self._has_balances = True
        try:
            self._last_n_ohlc_ticks.update(ohlc_tick)
        except IndicatorError:
            # Rejected tick: keep the balances of the last accepted update.
            self._base_balance, self._quote_balance, self._has_balances = (
                previous_balances
            )
            raise

    def _last_tick_updated(self, old_tick: OhlcTick, new_tick: OhlcTick) -> None:
        self._portfolio_values[-1] = self._portfolio_value(new_tick.close)
        self._log_returns.update_current_value(self._log_return())

    def _new_tick_added(self, new_tick: OhlcTick) -> None:
        if not self._portfolio_values:
            self._portfolio_values.append(self._portfolio_value(new_tick.open))
        self._portfolio_values.append(self._portfolio_value(new_tick.close))
        self._num_ohlc_ticks += 1
        self._log_returns.add_new_value(self._log_return())

    def _tick_shifted(self, removed_tick: OhlcTick, new_tick: OhlcTick) -> None:
        self._new_tick_added(new_tick)

    def _portfolio_value(self, price: float) -> float:
        return self._base_balance * price + self._quote_balance

    def _log_return(self) -> float:
        previous_value, current_value = self._portfolio_values
        return math.log(current_value / previous_value)
