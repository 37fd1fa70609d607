"""Unit tests for data.synthetic."""

import random
from datetime import datetime, timedelta, timezone

import pytest

from strategy_studio.data.synthetic import generate_candles, next_candle, to_epoch_ms


def test_deterministic():
    a = generate_candles("AAPL", "2024-01-02T14:30:00Z", "2024-01-02T17:49:00Z", "1m")
    b = generate_candles("AAPL", "2024-01-02T14:30:00Z", "2024-01-02T17:49:00Z", "1m")
    assert a == b
    assert len(a) == 200


def test_inclusive_range_and_steps():
    bars = generate_candles("AAPL", "2024-01-01T00:00:00Z", "2024-01-01T00:04:00Z", "1m")
    assert len(bars) == 5
    assert bars[0].timestamp == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert bars[1].timestamp - bars[0].timestamp == timedelta(minutes=1)
    assert len(generate_candles("AAPL", "2024-01-01T00:00:00Z", "2024-01-01T01:00:00Z", "5m")) == 13
    assert len(generate_candles("AAPL", "2024-01-01", "2024-01-03", "1d")) == 3


def test_first_bar_values():
    bar = generate_candles("AAPL", "2024-01-01", "2024-01-01", "1h")[0]
    # base = 100 + ord('A') % 10 = 105; noise at idx 0 = 0.15
    close = 105 * (1 + 0.0005 + 0.15 * 0.001)
    assert bar.open == 105.0
    assert bar.close == pytest.approx(close)
    assert bar.high == pytest.approx(close * 1.002)
    assert bar.low == pytest.approx(105 * 0.998)
    assert bar.volume == 1000.0


def test_open_is_previous_close():
    bars = generate_candles("MSFT", "2024-01-01", "2024-01-02", "1h")
    assert bars[0].open == 107.0
    for prev, cur in zip(bars, bars[1:]):
        assert cur.open == prev.close


def test_candles_are_valid_and_rising():
    bars = generate_candles("TSLA", "2024-01-01", "2024-01-10", "1h")
    assert all(b.is_valid() for b in bars)
    assert all(b.close > b.open for b in bars)


def test_empty_when_from_after_to():
    assert generate_candles("AAPL", "2024-01-02", "2024-01-01", "1m") == []


def test_naive_dates_are_utc():
    assert to_epoch_ms("2024-01-01") == to_epoch_ms("2024-01-01T00:00:00Z")
    assert to_epoch_ms("2024-01-01T02:00:00+02:00") == to_epoch_ms("2024-01-01T00:00:00Z")


def test_invalid_inputs():
    with pytest.raises(ValueError):
        generate_candles("", "2024-01-01", "2024-01-02", "1m")
    with pytest.raises(ValueError):
        generate_candles("AAPL", "2024-01-01", "2024-01-02", "2w")


def test_next_candle():
    prev = generate_candles("AAPL", "2024-01-01", "2024-01-01", "1m")[0]
    bar = next_candle(prev, "AAPL", "1m", now_ms=1_704_067_200_000, rng=random.Random(3))
    assert bar.timestamp == prev.timestamp + timedelta(minutes=1)
    assert bar.open == prev.close
    assert bar.is_valid()
    assert 0.98 * prev.volume <= bar.volume <= 1.02 * prev.volume
    assert abs(bar.close / prev.close - 1) < 0.003


def test_next_candle_reproducible_when_pinned():
    prev = generate_candles("AAPL", "2024-01-01", "2024-01-01", "1m")[0]
    a = next_candle(prev, "AAPL", "1m", now_ms=1_704_067_200_000, rng=random.Random(3))
    b = next_candle(prev, "AAPL", "1m", now_ms=1_704_067_200_000, rng=random.Random(3))
    assert a == b
