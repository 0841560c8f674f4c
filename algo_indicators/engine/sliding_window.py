"""Sliding-window primitives with O(1) amortized updates.

Every primitive follows the same commit/revise protocol:

- add_new_value(v) commits the current value and starts a new one.
- update_current_value(v) replaces the current value without committing.

The current value always counts towards the reported statistic, so an
indicator can revise the in-flight period on every incoming tick and
commit it once the next period starts.

Note: Running sums may accumulate negligible float drift over very long
series. Acceptable for indicators; variance is clamped at zero.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections import deque

from algo_indicators.errors import InsufficientDataError, InvalidParameterError


class SlidingWindow(ABC):
    """Base class for the commit/revise primitives."""

    __slots__ = ("_num_values",)

    def __init__(self) -> None:
        self._num_values = 0

    @property
    def num_values(self) -> int:
        """Total number of added values, the current one included."""
        return self._num_values

    @abstractmethod
    def add_new_value(self, value: float) -> None:
        """Commit the current value and make value the new current one."""

    @abstractmethod
    def update_current_value(self, value: float) -> None:
        """Replace the current value. Requires at least one added value."""

    def _require_current_value(self) -> None:
        if self._num_values == 0:
            raise InsufficientDataError(
                f"{type(self).__name__}: update_current_value before add_new_value"
            )


class _MonotonicWindow(SlidingWindow):
    """Extreme over the last window_size values via a monotonic deque.

    The deque holds (value, index) pairs of committed values only, oldest
    first, each entry dominating every later one. The current value is
    kept apart, so revising it never touches the deque.
    """

    __slots__ = ("_current_value", "_window", "_window_size")

    def __init__(self, window_size: int) -> None:
        if window_size < 1:
            raise InvalidParameterError(f"window_size must be >= 1, got {window_size}")
        super().__init__()
        self._window_size = window_size
        self._current_value = 0.0
        self._window: deque[tuple[float, int]] = deque()

    @staticmethod
    @abstractmethod
    def _dominates(a: float, b: float) -> bool:
        """True when a is at least as extreme as b."""

    @property
    def count(self) -> int:
        """Number of values currently in the window (max = window_size)."""
        return min(self._num_values, self._window_size)

    def _extreme(self) -> float:
        if not self._window:
            return self._current_value
        oldest = self._window[0][0]
        if self._dominates(oldest, self._current_value):
            return oldest
        return self._current_value

    def add_new_value(self, value: float) -> None:
        if self._num_values > 0 and self._window_size > 1:
            # Committed values beaten by the new entry can never win again.
            while self._window and self._dominates(
                self._current_value, self._window[-1][0]
            ):
                self._window.pop()
            self._window.append((self._current_value, self._num_values - 1))
        self._num_values += 1
        oldest_index = self._num_values - self._window_size
        while self._window and self._window[0][1] < oldest_index:
            self._window.popleft()
        self._current_value = value

    def update_current_value(self, value: float) -> None:
        self._require_current_value()
        self._current_value = value


class SlidingWindowMinimum(_MonotonicWindow):
    """Minimum over the last window_size values."""

    __slots__ = ()

    @staticmethod
    def _dominates(a: float, b: float) -> bool:
        return a <= b

    @property
    def minimum(self) -> float:
        """Current sliding window minimum, or 0 before the first value."""
        return self._extreme()


class SlidingWindowMaximum(_MonotonicWindow):
    """Maximum over the last window_size values."""

    __slots__ = ()

    @staticmethod
    def _dominates(a: float, b: float) -> bool:
        return a >= b

    @property
    def maximum(self) -> float:
        """Current sliding window maximum, or 0 before the first value."""
        return self._extreme()


class BoundedSimpleAverage(SlidingWindow):
    """Mean over the last window_size values with a running sum.

    window_size=0 keeps every value (unbounded window).
    """

    __slots__ = ("_sum", "_window", "_window_size")

    def __init__(self, window_size: int) -> None:
        if window_size < 0:
            raise InvalidParameterError(f"window_size must be >= 0, got {window_size}")
        super().__init__()
        self._window_size = window_size
        self._window: deque[float] = deque()
        self._sum = 0.0

    @property
    def mean(self) -> float:
        """Mean over the window, or 0 before the first value."""
        if not self._window:
            return 0.0
        return self._sum / len(self._window)

    @property
    def count(self) -> int:
        """Number of values currently in the window."""
        return len(self._window)

    def add_new_value(self, value: float) -> None:
        if self._window_size and len(self._window) == self._window_size:
            self._remove(self._window.popleft())
        self._window.append(value)
        self._add(value)
        self._num_values += 1

    def update_current_value(self, value: float) -> None:
        self._require_current_value()
        self._remove(self._window[-1])
        self._window[-1] = value
        self._add(value)

    def _add(self, value: float) -> None:
        self._sum += value

    def _remove(self, value: float) -> None:
        self._sum -= value


class SlidingWindowMeanAndVariance(BoundedSimpleAverage):
    """Mean and population variance over the last window_size values."""

    __slots__ = ("_sum_of_squares",)

    def __init__(self, window_size: int) -> None:
        super().__init__(window_size)
        self._sum_of_squares = 0.0

    @property
    def variance(self) -> float:
        """Population variance, or 0 before the first value."""
        if not self._window:
            return 0.0
        mean = self.mean
        return max(0.0, self._sum_of_squares / len(self._window) - mean * mean)

    @property
    def standard_deviation(self) -> float:
        return math.sqrt(self.variance)

    def _add(self, value: float) -> None:
        super()._add(value)
        self._sum_of_squares += value * value

    def _remove(self, value: float) -> None:
        super()._remove(value)
        self._sum_of_squares -= value * value


class ExponentialMovingAverageHelper(SlidingWindow):
    """Exponential moving average with a revisable most recent value.

    The first value is taken as is. Every later value v with weight w
    yields w * v + (1 - w) * previous, where previous is the average
    before the current value was added. The weight given at construction
    is used unless a call passes its own (RSI changes it per period).
    """

    __slots__ = ("_current_ema", "_previous_ema", "_weight")

    def __init__(self, weight: float | None = None) -> None:
        if weight is not None:
            _check_weight(weight)
        super().__init__()
        self._weight = weight
        self._current_ema = 0.0
        self._previous_ema = 0.0

    @property
    def value(self) -> float:
        """Current exponential moving average, or 0 before the first value."""
        return self._current_ema

    def add_new_value(self, value: float, weight: float | None = None) -> None:
        w = self._resolve_weight(weight) if self._num_values > 0 else None
        self._previous_ema = self._current_ema
        self._num_values += 1
        self._set_current(value, w)

    def update_current_value(self, value: float, weight: float | None = None) -> None:
        self._require_current_value()
        w = self._resolve_weight(weight) if self._num_values > 1 else None
        self._set_current(value, w)

    def _set_current(self, value: float, weight: float | None) -> None:
        if weight is None:
            # Only value so far.
            self._current_ema = value
            return
        self._current_ema = weight * value + (1.0 - weight) * self._previous_ema

    def _resolve_weight(self, weight: float | None) -> float:
        if weight is not None:
            return _check_weight(weight)
        if self._weight is None:
            raise InvalidParameterError(
                "ExponentialMovingAverageHelper has no default weight"
            )
        return self._weight


def _check_weight(weight: float) -> float:
    if not 0.0 < weight <= 1.0:
        raise InvalidParameterError(f"weight must be in (0, 1], got {weight}")
    return weight
