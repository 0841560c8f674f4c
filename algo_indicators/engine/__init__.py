"""Engine layer: tick aggregation and sliding-window primitives."""

from algo_indicators.engine.sliding_window import (
    BoundedSimpleAverage,
    ExponentialMovingAverageHelper,
    SlidingWindow,
    SlidingWindowMaximum,
    SlidingWindowMeanAndVariance,
    SlidingWindowMinimum,
)
from algo_indicators.engine.tick_aggregator import LastNOhlcTicks

__all__ = [
    "BoundedSimpleAverage",
    "ExponentialMovingAverageHelper",
    "LastNOhlcTicks",
    "SlidingWindow",
    "SlidingWindowMaximum",
    "SlidingWindowMeanAndVariance",
    "SlidingWindowMinimum",
]
