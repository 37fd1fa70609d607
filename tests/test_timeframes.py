"""Unit tests for utils.timeframes."""

import pytest
from strategy_studio.utils.timeframes import timeframe_minutes, timeframe_ms


def test_timeframe_minutes():
    assert timeframe_minutes("1m") == 1
    assert timeframe_minutes("5m") == 5
    assert timeframe_minutes("1h") == 60
    assert timeframe_minutes("1d") == 1440


def test_timeframe_ms():
    assert timeframe_ms("1m") == 60_000
    assert timeframe_ms("5m") == 300_000
    assert timeframe_ms("1h") == 3_600_000
    assert timeframe_ms("1d") == 86_400_000


def test_timeframe_invalid():
    with pytest.raises(ValueError):
        timeframe_minutes("1x")
    with pytest.raises(ValueError):
        timeframe_ms("15m")
