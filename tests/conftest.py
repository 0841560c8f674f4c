"""Shared test fixtures for algo-indicators."""

from __future__ import annotations

import pytest

from algo_indicators.types import OhlcTick
from tests.factories import example_ohlc_history


@pytest.fixture
def ohlc_history() -> list[OhlcTick]:
    """The 12-tick 8-hour example history (see tests.factories)."""
    return example_ohlc_history()
