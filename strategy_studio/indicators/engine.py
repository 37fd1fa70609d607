"""
Indicator engine: Price, SMA, EMA and Wilder RSI on closing prices.

An IndicatorEngine is owned by a single backtest run or live session. It caches
every value it computes, so each (kind, period, index) is evaluated at most once.
EMA and RSI are recurrences and are filled forward in index order; values
already computed stay valid when bars are appended.
Undefined values (not enough history yet) are None, never NaN or an exception.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence

from strategy_studio.core.types import Candle, IndicatorKind, IndicatorRef, NumberLiteral, Operand


def sma(closes: Sequence[float], period: int, index: int) -> Optional[float]:
    """Simple average of closes[index-period+1 .. index]; None if index+1 < period."""
    if index + 1 < period:
        return None
    return sum(closes[index - period + 1: index + 1]) / period


class _RsiState:
    __slots__ = ("values", "avg_gain", "avg_loss")

    def __init__(self) -> None:
        self.values: List[Optional[float]] = []
        self.avg_gain: Optional[float] = None
        self.avg_loss: Optional[float] = None


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


class IndicatorEngine:
    """Per-run indicator cache over a growing series of candles."""

    def __init__(self, candles: Iterable[Candle] = ()):
        self._closes: List[float] = [c.close for c in candles]
        self._sma: Dict[int, Dict[int, Optional[float]]] = {}
        self._ema: Dict[int, List[float]] = {}
        self._rsi: Dict[int, _RsiState] = {}

    def __len__(self) -> int:
        return len(self._closes)

    def append(self, candle: Candle) -> int:
        """Add the next bar; returns its index."""
        self._closes.append(candle.close)
        return len(self._closes) - 1

    def resolve(self, operand: Operand, index: int) -> Optional[float]:
        if isinstance(operand, NumberLiteral):
            return operand.value
        return self.value(operand, index)

    def value(self, ref: IndicatorRef, index: int) -> Optional[float]:
        if index < 0 or index >= len(self._closes):
            raise IndexError(f"bar index {index} out of range (0..{len(self._closes) - 1})")
        kind = ref.kind
        if kind == IndicatorKind.PRICE:
            return self._closes[index]
        period = ref.resolved_period
        if kind == IndicatorKind.SMA:
            return self._sma_at(period, index)
        if kind == IndicatorKind.EMA:
            return self._ema_at(period, index)
        if kind == IndicatorKind.RSI:
            return self._rsi_at(period, index)
        raise ValueError(f"Unsupported indicator: {kind}")

    def _sma_at(self, period: int, index: int) -> Optional[float]:
        cache = self._sma.setdefault(period, {})
        if index not in cache:
            cache[index] = sma(self._closes, period, index)
        return cache[index]

    def _ema_at(self, period: int, index: int) -> float:
        values = self._ema.setdefault(period, [])
        k = 2.0 / (period + 1)
        closes = self._closes
        while len(values) <= index:
            i = len(values)
            if i == 0:
                values.append(closes[0])
            else:
                values.append(closes[i] * k + values[i - 1] * (1 - k))
        return values[index]

    def _rsi_at(self, period: int, index: int) -> Optional[float]:
        state = self._rsi.get(period)
        if state is None:
            state = self._rsi[period] = _RsiState()
        closes = self._closes
        values = state.values
        while len(values) <= index:
            i = len(values)
            if i < period:
                values.append(None)
                continue
            if i == period:
                deltas = [closes[j] - closes[j - 1] for j in range(1, period + 1)]
                state.avg_gain = sum(d for d in deltas if d > 0) / period
                state.avg_loss = sum(-d for d in deltas if d < 0) / period
            else:
                delta = closes[i] - closes[i - 1]
                gain = delta if delta > 0 else 0.0
                loss = -delta if delta < 0 else 0.0
                state.avg_gain = (state.avg_gain * (period - 1) + gain) / period
                state.avg_loss = (state.avg_loss * (period - 1) + loss) / period
            values.append(_rsi_from_averages(state.avg_gain, state.avg_loss))
        return values[index]
