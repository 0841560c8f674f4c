"""Tests shared by every indicator: protocol conformance and tick preconditions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from algo_indicators import (
    ExponentialMovingAverage,
    Indicator,
    InvalidTickError,
    MovingAverageConvergenceDivergence,
    OutOfOrderTickError,
    RelativeStrengthIndex,
    SimpleMovingAverage,
    StochasticOscillator,
    Volatility,
)
from algo_indicators.types import OhlcTick
from tests.factories import SECONDS_PER_DAY, make_ohlc_tick


def _volatility() -> Volatility:
    volatility = Volatility(window_size=3, period_size_sec=SECONDS_PER_DAY)
    # Balances are given once with the first history tick; later updates keep them.
    volatility.update(make_ohlc_tick(), 5.0, 1000.0)
    return volatility


INDICATOR_FACTORIES: dict[str, Callable[[], Indicator]] = {
    "ema": lambda: ExponentialMovingAverage(
        smoothing=2, ema_length=7, period_size_sec=SECONDS_PER_DAY
    ),
    "sma": lambda: SimpleMovingAverage(
        num_ohlc_ticks=3, period_size_sec=SECONDS_PER_DAY
    ),
    "macd": lambda: MovingAverageConvergenceDivergence(
        fast_length=4,
        slow_length=7,
        signal_smoothing=3,
        period_size_sec=SECONDS_PER_DAY,
    ),
    "rsi": lambda: RelativeStrengthIndex(
        num_periods=3, period_size_sec=SECONDS_PER_DAY
    ),
    "stochastic": lambda: StochasticOscillator(
        num_periods=2, period_size_sec=SECONDS_PER_DAY
    ),
    "volatility": _volatility,
}

VALUE_GETTERS: dict[str, Callable[[Any], tuple[float, ...]]] = {
    "ema": lambda i: (i.value,),
    "sma": lambda i: (i.value,),
    "macd": lambda i: (i.macd_series, i.macd_signal),
    "rsi": lambda i: (i.value,),
    "stochastic": lambda i: (i.k, i.fast_d, i.slow_d),
    "volatility": lambda i: (i.value,),
}


def _history_after_seed(ohlc_history: list[OhlcTick]) -> list[OhlcTick]:
    # Volatility is seeded with the first tick, so every indicator starts after it.
    return ohlc_history[1:]


@pytest.fixture(params=sorted(INDICATOR_FACTORIES))
def indicator_name(request: pytest.FixtureRequest) -> str:
    name: str = request.param
    return name


class TestIndicatorProtocol:
    """Every indicator satisfies the Indicator protocol."""

    def test_isinstance(self, indicator_name: str) -> None:
        assert isinstance(INDICATOR_FACTORIES[indicator_name](), Indicator)

    def test_replay_is_deterministic(
        self, indicator_name: str, ohlc_history: list[OhlcTick]
    ) -> None:
        results = []
        for _ in range(2):
            indicator = INDICATOR_FACTORIES[indicator_name]()
            values = []
            for tick in _history_after_seed(ohlc_history):
                indicator.update(tick)
                values.append(VALUE_GETTERS[indicator_name](indicator))
            results.append((values, indicator.num_ohlc_ticks))
        assert results[0] == results[1]


class TestTickPreconditions:
    """Rejected ticks raise and leave the indicator untouched."""

    def test_out_of_order_tick_raises(
        self, indicator_name: str, ohlc_history: list[OhlcTick]
    ) -> None:
        indicator = INDICATOR_FACTORIES[indicator_name]()
        history = _history_after_seed(ohlc_history)
        for tick in history[:4]:
            indicator.update(tick)
        before = (VALUE_GETTERS[indicator_name](indicator), indicator.num_ohlc_ticks)

        with pytest.raises(OutOfOrderTickError):
            indicator.update(history[3])

        after = (VALUE_GETTERS[indicator_name](indicator), indicator.num_ohlc_ticks)
        assert after == before

    @pytest.mark.parametrize(
        "overrides",
        [
            {"open": 0.0, "low": 0.0, "close": 0.0},
            {"low": 130.0},
            {"volume": -5.0},
        ],
    )
    def test_invalid_tick_raises(
        self,
        indicator_name: str,
        ohlc_history: list[OhlcTick],
        overrides: dict[str, float],
    ) -> None:
        indicator = INDICATOR_FACTORIES[indicator_name]()
        history = _history_after_seed(ohlc_history)
        for tick in history[:4]:
            indicator.update(tick)
        before = (VALUE_GETTERS[indicator_name](indicator), indicator.num_ohlc_ticks)

        bad_tick = make_ohlc_tick(
            timestamp_sec=history[4].timestamp_sec, **overrides
        )
        with pytest.raises(InvalidTickError):
            indicator.update(bad_tick)

        after = (VALUE_GETTERS[indicator_name](indicator), indicator.num_ohlc_ticks)
        assert after == before

    def test_rejected_tick_does_not_block_next_tick(
        self, indicator_name: str, ohlc_history: list[OhlcTick]
    ) -> None:
        indicator = INDICATOR_FACTORIES[indicator_name]()
        history = _history_after_seed(ohlc_history)
        indicator.update(history[0])
        with pytest.raises(InvalidTickError):
            indicator.update(
                make_ohlc_tick(timestamp_sec=history[1].timestamp_sec, volume=-1.0)
            )
        indicator.update(history[1])
        assert indicator.num_ohlc_ticks >= 1
