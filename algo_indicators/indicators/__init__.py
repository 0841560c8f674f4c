"""Indicator layer: incrementally updated technical indicators."""

from algo_indicators.indicators.base import Indicator
from algo_indicators.indicators.exponential_moving_average import (
    ExponentialMovingAverage,
)
from algo_indicators.indicators.moving_average_convergence_divergence import (
    MovingAverageConvergenceDivergence,
)
from algo_indicators.indicators.relative_strength_index import RelativeStrengthIndex
from algo_indicators.indicators.simple_moving_average import SimpleMovingAverage
from algo_indicators.indicators.stochastic_oscillator import StochasticOscillator
from algo_indicators.indicators.volatility import Volatility

__all__ = [
    "ExponentialMovingAverage",
    "Indicator",
    "MovingAverageConvergenceDivergence",
    "RelativeStrengthIndex",
    "SimpleMovingAverage",
    "StochasticOscillator",
    "Volatility",
]
