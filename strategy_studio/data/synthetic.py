"""
Synthetic OHLCV generator for demo history and simulated live ticks.

generate_candles is a pure function of (symbol, from, to, timeframe): the same
arguments always reproduce the same bars, so backtests are repeatable.
next_candle extends a live stream and seeds its noise from the wall clock.
"""

from __future__ import annotations
import math
import random
import time
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pandas as pd

from strategy_studio.core.types import Candle
from strategy_studio.utils.timeframes import timeframe_ms

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

DRIFT = 0.0005
WICK = 0.002


def to_epoch_ms(value) -> int:
    """Parse an ISO date/datetime (or datetime) into epoch ms. Naive values are UTC."""
    ts = pd.Timestamp(value)
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    else:
        ts = ts.tz_convert("UTC")
    return ts.value // 1_000_000


def from_epoch_ms(ms: int) -> datetime:
    return EPOCH + timedelta(milliseconds=ms)


def base_price(symbol: str) -> float:
    if not symbol:
        raise ValueError("symbol must be a non-empty string")
    return 100.0 + (ord(symbol[0]) % 10)


def _bar(timestamp: datetime, last_close: float, close: float, volume: float) -> Candle:
    return Candle(
        timestamp=timestamp,
        open=last_close,
        high=max(close, last_close) * (1 + WICK),
        low=min(close, last_close) * (1 - WICK),
        close=close,
        volume=volume,
    )


def generate_candles(symbol: str, from_iso, to_iso, timeframe: str) -> List[Candle]:
    """
    Deterministic drifting series from `from_iso` to `to_iso` inclusive, one bar per step.
    Returns an empty list when from > to.
    """
    step = timeframe_ms(timeframe)
    start = to_epoch_ms(from_iso)
    end = to_epoch_ms(to_iso)
    last_close = base_price(symbol)
    out: List[Candle] = []
    t = start
    while t <= end:
        idx = len(out)
        noise = math.sin(idx / 7) * 0.2 + math.cos(idx / 13) * 0.15
        close = max(1.0, last_close * (1 + DRIFT + noise * 0.001))
        out.append(_bar(from_epoch_ms(t), last_close, close, 1000.0 + idx))
        last_close = close
        t += step
    return out


def next_candle(
    previous: Candle,
    symbol: str,
    timeframe: str,
    now_ms: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Candle:
    """
    Next bar of a live stream, one step after `previous`.
    Noise is seeded from the current step index and volume gets random jitter,
    so results differ run to run unless both now_ms and rng are pinned.
    """
    step = timeframe_ms(timeframe)
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    rand = rng.random() if rng is not None else random.random()
    idx = now_ms // step
    noise = (math.sin(idx / 5) + math.cos(idx / 9)) * 0.001
    close = max(1.0, previous.close * (1 + DRIFT + noise))
    return _bar(
        previous.timestamp + timedelta(milliseconds=step),
        previous.close,
        close,
        previous.volume * (0.98 + rand * 0.04),
    )
