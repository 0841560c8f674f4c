"""Tick aggregation into a bounded window of fixed-period OHLC ticks.

Push-based: call update() with each incoming OHLC tick. The aggregator
keeps the last N aggregate ticks and notifies its owner through three
optional callbacks:

- on_last_tick_updated(old, new): the incoming tick fell into the period
  of the most recent aggregate tick, which was revised.
- on_new_tick_added(new): a new aggregate tick was appended and the
  window still holds at most N ticks.
- on_new_tick_added_and_oldest_tick_removed(removed, new): a new
  aggregate tick was appended and the oldest one was evicted.

Missing periods are backfilled with zero-volume ticks priced at the
previous close, one new-tick event per filler.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import replace

from algo_indicators.errors import (
    InvalidParameterError,
    InvalidTickError,
    OutOfOrderTickError,
)
from algo_indicators.types import OhlcTick
from algo_indicators.utils.logging import get_logger

log = get_logger(__name__)

LastTickUpdatedCallback = Callable[[OhlcTick, OhlcTick], None]
NewTickAddedCallback = Callable[[OhlcTick], None]
NewTickAddedAndOldestTickRemovedCallback = Callable[[OhlcTick, OhlcTick], None]


class LastNOhlcTicks:
    """Keeps the last N OHLC ticks with a period of period_size_sec seconds.

    Aggregate tick timestamps are aligned down to a multiple of
    period_size_sec. period_size_sec must be a multiple of the spacing of
    the incoming ticks; this is not checked.
    """

    def __init__(
        self,
        num_ohlc_ticks: int,
        period_size_sec: int,
        *,
        on_last_tick_updated: LastTickUpdatedCallback | None = None,
        on_new_tick_added: NewTickAddedCallback | None = None,
        on_new_tick_added_and_oldest_tick_removed: (
            NewTickAddedAndOldestTickRemovedCallback | None
        ) = None,
    ) -> None:
        if num_ohlc_ticks < 1:
            raise InvalidParameterError(
                f"num_ohlc_ticks must be >= 1, got {num_ohlc_ticks}"
            )
        if period_size_sec < 1:
            raise InvalidParameterError(
                f"period_size_sec must be >= 1, got {period_size_sec}"
            )
        self.num_ohlc_ticks = num_ohlc_ticks
        self.period_size_sec = period_size_sec
        self._ticks: deque[OhlcTick] = deque()
        self._last_timestamp_sec: int | None = None
        self._num_ticks_added = 0
        self._on_last_tick_updated = on_last_tick_updated
        self._on_new_tick_added = on_new_tick_added
        self._on_new_tick_added_and_oldest_tick_removed = (
            on_new_tick_added_and_oldest_tick_removed
        )

    @property
    def ohlc_ticks(self) -> Sequence[OhlcTick]:
        """Buffered aggregate ticks, oldest first. Do not mutate."""
        return self._ticks

    @property
    def num_ticks_added(self) -> int:
        """Number of aggregate ticks ever appended, fillers included."""
        return self._num_ticks_added

    def update(self, ohlc_tick: OhlcTick) -> None:
        """Fold an incoming tick into the window.

        O(1), except when the tick is several periods past the most recent
        aggregate tick: then every missing period is backfilled first.

        Raises:
            OutOfOrderTickError: timestamp not after the previous update.
            InvalidTickError: non-positive close or broken OHLC invariant.
        """
        self._validate(ohlc_tick)
        self._last_timestamp_sec = ohlc_tick.timestamp_sec

        aligned_timestamp_sec = self.period_size_sec * (
            ohlc_tick.timestamp_sec // self.period_size_sec
        )
        self._backfill(aligned_timestamp_sec)

        if not self._ticks or self._ticks[-1].timestamp_sec < aligned_timestamp_sec:
            self._append(replace(ohlc_tick, timestamp_sec=aligned_timestamp_sec))
            return

        old_tick = self._ticks[-1]
        new_tick = replace(
            old_tick,
            high=max(old_tick.high, ohlc_tick.high),
            low=min(old_tick.low, ohlc_tick.low),
            close=ohlc_tick.close,
            volume=old_tick.volume + ohlc_tick.volume,
        )
        self._ticks[-1] = new_tick
        if self._on_last_tick_updated is not None:
            self._on_last_tick_updated(old_tick, new_tick)

    def _validate(self, ohlc_tick: OhlcTick) -> None:
        if (
            self._last_timestamp_sec is not None
            and ohlc_tick.timestamp_sec <= self._last_timestamp_sec
        ):
            log.warning(
                "ohlc_tick_rejected",
                reason="out_of_order",
                timestamp_sec=ohlc_tick.timestamp_sec,
                last_timestamp_sec=self._last_timestamp_sec,
            )
            raise OutOfOrderTickError(self._last_timestamp_sec, ohlc_tick.timestamp_sec)
        if ohlc_tick.close <= 0 or not ohlc_tick.is_valid:
            log.warning(
                "ohlc_tick_rejected",
                reason="invalid_prices",
                timestamp_sec=ohlc_tick.timestamp_sec,
            )
            raise InvalidTickError(f"Invalid OHLC tick: {ohlc_tick}")

    def _backfill(self, aligned_timestamp_sec: int) -> None:
        """Append a zero-volume tick for every skipped period."""
        num_fillers = 0
        while (
            self._ticks
            and self._ticks[-1].timestamp_sec + self.period_size_sec
            < aligned_timestamp_sec
        ):
            prev_tick = self._ticks[-1]
            self._append(
                OhlcTick(
                    timestamp_sec=prev_tick.timestamp_sec + self.period_size_sec,
                    open=prev_tick.close,
                    high=prev_tick.close,
                    low=prev_tick.close,
                    close=prev_tick.close,
                    volume=0.0,
                )
            )
            num_fillers += 1
        if num_fillers:
            log.debug(
                "ohlc_gap_backfilled",
                num_fillers=num_fillers,
                first_timestamp_sec=(
                    self._ticks[-1].timestamp_sec
                    - (num_fillers - 1) * self.period_size_sec
                ),
                last_timestamp_sec=self._ticks[-1].timestamp_sec,
            )

    def _append(self, ohlc_tick: OhlcTick) -> None:
        """Append a tick, evicting the oldest one beyond N, and fire one event."""
        self._ticks.append(ohlc_tick)
        self._num_ticks_added += 1
        if len(self._ticks) <= self.num_ohlc_ticks:
            if self._on_new_tick_added is not None:
                self._on_new_tick_added(ohlc_tick)
            return
        removed_tick = self._ticks.popleft()
        if self._on_new_tick_added_and_oldest_tick_removed is not None:
            self._on_new_tick_added_and_oldest_tick_removed(removed_tick, ohlc_tick)
