"""Tests for OhlcTick."""

from __future__ import annotations

import dataclasses

import pytest

from tests.factories import make_ohlc_tick


class TestOhlcTickValidity:
    """is_valid checks the OHLC price ordering and volume."""

    def test_default_tick_is_valid(self) -> None:
        assert make_ohlc_tick().is_valid

    def test_flat_tick_is_valid(self) -> None:
        tick = make_ohlc_tick(open=5.0, high=5.0, low=5.0, close=5.0, volume=0.0)
        assert tick.is_valid

    @pytest.mark.parametrize(
        "overrides",
        [
            {"low": 110.0},  # low above open
            {"high": 110.0},  # high below close
            {"close": 70.0},  # close below low
            {"open": 160.0},  # open above high
            {"volume": -1.0},
        ],
    )
    def test_invalid_ticks(self, overrides: dict[str, float]) -> None:
        assert not make_ohlc_tick(**overrides).is_valid


class TestOhlcTickImmutability:
    """OhlcTick is a frozen value object."""

    def test_cannot_mutate(self) -> None:
        tick = make_ohlc_tick()
        with pytest.raises(dataclasses.FrozenInstanceError):
            tick.close = 1.0  # type: ignore[misc]

    def test_equality_by_value(self) -> None:
        assert make_ohlc_tick(timestamp_sec=60) == make_ohlc_tick(timestamp_sec=60)
        assert make_ohlc_tick(timestamp_sec=60) != make_ohlc_tick(timestamp_sec=120)
