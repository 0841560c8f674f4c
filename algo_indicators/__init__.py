"""Incremental technical indicators over OHLC tick streams."""

from algo_indicators.engine import LastNOhlcTicks
from algo_indicators.errors import (
    IndicatorError,
    InsufficientDataError,
    InvalidParameterError,
    InvalidTickError,
    OutOfOrderTickError,
)
from algo_indicators.indicators import (
    ExponentialMovingAverage,
    Indicator,
    MovingAverageConvergenceDivergence,
    RelativeStrengthIndex,
    SimpleMovingAverage,
    StochasticOscillator,
    Volatility,
)
from algo_indicators.types import OhlcTick

__all__ = [
    "ExponentialMovingAverage",
    "Indicator",
    "IndicatorError",
    "InsufficientDataError",
    "InvalidParameterError",
    "InvalidTickError",
    "LastNOhlcTicks",
    "MovingAverageConvergenceDivergence",
    "OhlcTick",
    "OutOfOrderTickError",
    "RelativeStrengthIndex",
    "SimpleMovingAverage",
    "StochasticOscillator",
    "Volatility",
]
