"""Indicator error hierarchy.

All precondition violations inherit from IndicatorError. They signal a
bug in the driving code (bad parameters, unordered or corrupt ticks),
never a transient condition, so nothing in this package retries them.
"""

from __future__ import annotations


class IndicatorError(Exception):
    """Base exception for all indicator-related errors."""


class InvalidParameterError(IndicatorError, ValueError):
    """Non-positive period, length, window size or smoothing factor."""


class InvalidTickError(IndicatorError, ValueError):
    """Tick with a non-positive close or broken OHLC invariant."""


class OutOfOrderTickError(IndicatorError):
    """Tick timestamp is not strictly after the previous one.

    Stores both timestamps for the caller's diagnostics.
    """

    def __init__(self, last_timestamp_sec: int, timestamp_sec: int) -> None:
        self.last_timestamp_sec = last_timestamp_sec
        self.timestamp_sec = timestamp_sec
        super().__init__(
            f"Out-of-order tick: {timestamp_sec} is not after {last_timestamp_sec}"
        )


class InsufficientDataError(IndicatorError):
    """Current value revised before any value was added."""
