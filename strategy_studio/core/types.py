"""
Core data types: candles, indicator operands, conditions, strategies, positions, trades.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple, Union

from strategy_studio.core.errors import StrategyFormatError

TIMEFRAMES = ("1m", "5m", "1h", "1d")


class IndicatorKind(str, Enum):
    PRICE = "Price"
    SMA = "SMA"
    EMA = "EMA"
    RSI = "RSI"


DEFAULT_PERIODS = {
    IndicatorKind.SMA: 20,
    IndicatorKind.EMA: 20,
    IndicatorKind.RSI: 14,
}


class Operator(str, Enum):
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    CROSSES_ABOVE = "crossesAbove"
    CROSSES_BELOW = "crossesBelow"


class Side(str, Enum):
    FLAT = "flat"
    LONG = "long"


@dataclass(frozen=True)
class Candle:
    """OHLCV bar. Timestamps are timezone-aware UTC."""
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float

    def is_valid(self) -> bool:
        return self.high >= max(self.open, self.close) and self.low <= min(self.open, self.close)

    def to_dict(self) -> dict:
        return {
            "t": iso_timestamp(self.timestamp),
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }


@dataclass(frozen=True)
class IndicatorRef:
    """Reference to an indicator series. Price ignores period."""
    kind: IndicatorKind
    period: Optional[int] = None

    @property
    def resolved_period(self) -> Optional[int]:
        if self.kind == IndicatorKind.PRICE:
            return None
        return self.period or DEFAULT_PERIODS[self.kind]


@dataclass(frozen=True)
class NumberLiteral:
    """Constant operand, identical on every bar."""
    value: float


Operand = Union[IndicatorRef, NumberLiteral]


@dataclass(frozen=True)
class Condition:
    left: IndicatorRef
    operator: Operator
    right: Operand
    # editor row id; carried through save/load, not part of the rule itself
    id: Optional[str] = field(default=None, compare=False)


@dataclass(frozen=True)
class Strategy:
    """
    Declarative long-only strategy. Entry conditions are AND-combined,
    exit conditions OR-combined.
    """
    name: str
    timeframe: str
    entry: Tuple[Condition, ...] = ()
    exit: Tuple[Condition, ...] = ()
    take_profit_pct: Optional[float] = None
    stop_loss_pct: Optional[float] = None


@dataclass
class Position:
    """Open position state, scoped to one run or live session."""
    side: Side = Side.FLAT
    entry_price: Optional[float] = None
    entry_time: Optional[datetime] = None

    @property
    def is_long(self) -> bool:
        return self.side == Side.LONG


@dataclass(frozen=True)
class Trade:
    """Closed trade, appended on each Long -> Flat transition."""
    entry_time: datetime
    exit_time: datetime
    entry_price: float
    exit_price: float
    pnl_pct: float
    exit_reason: str  # "take_profit" | "stop_loss" | "signal"

    def to_dict(self) -> dict:
        return {
            "entryTime": iso_timestamp(self.entry_time),
            "exitTime": iso_timestamp(self.exit_time),
            "entryPrice": self.entry_price,
            "exitPrice": self.exit_price,
            "pnlPct": self.pnl_pct,
            "exitReason": self.exit_reason,
        }


@dataclass(frozen=True)
class EquityPoint:
    timestamp: datetime
    equity: float

    def to_dict(self) -> dict:
        return {"t": iso_timestamp(self.timestamp), "equity": self.equity}


@dataclass(frozen=True)
class AnnotatedCandle:
    """Candle with display-only moving average overlays."""
    candle: Candle
    sma20: Optional[float] = None
    sma50: Optional[float] = None

    def to_dict(self) -> dict:
        data = self.candle.to_dict()
        data["sma20"] = self.sma20
        data["sma50"] = self.sma50
        return data


def iso_timestamp(ts: datetime) -> str:
    return ts.isoformat().replace("+00:00", "Z")


# --- dict (de)serialization, JSON shape shared with the strategy editor ---

def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:  # int too large for a float
        return False


def _operand_from_dict(raw: Any, where: str) -> Operand:
    if isinstance(raw, bool):
        raise StrategyFormatError(f"{where}: expected number or indicator, got {raw!r}")
    if isinstance(raw, (int, float)):
        if not _is_finite_number(raw):
            raise StrategyFormatError(f"{where}: expected finite number, got {raw!r}")
        return NumberLiteral(float(raw))
    return _indicator_from_dict(raw, where)


def _indicator_from_dict(raw: Any, where: str) -> IndicatorRef:
    if not isinstance(raw, dict) or "type" not in raw:
        raise StrategyFormatError(f"{where}: expected indicator object, got {raw!r}")
    try:
        kind = IndicatorKind(raw["type"])
    except ValueError:
        raise StrategyFormatError(f"{where}: unknown indicator {raw['type']!r}") from None
    params = raw.get("params")
    if params is None:
        params = {}
    if not isinstance(params, dict):
        raise StrategyFormatError(f"{where}: params must be an object, got {params!r}")
    period = params.get("period")
    if period is not None:
        if not _is_finite_number(period) or int(period) < 1:
            raise StrategyFormatError(f"{where}: invalid period {period!r}")
        period = int(period)
    return IndicatorRef(kind, period)


def _condition_from_dict(raw: Any, where: str) -> Condition:
    if not isinstance(raw, dict):
        raise StrategyFormatError(f"{where}: expected condition object, got {raw!r}")
    for key in ("left", "operator", "right"):
        if key not in raw:
            raise StrategyFormatError(f"{where}: missing '{key}'")
    try:
        op = Operator(raw["operator"])
    except ValueError:
        raise StrategyFormatError(f"{where}: unknown operator {raw['operator']!r}") from None
    cond_id = raw.get("id")
    if cond_id is not None and not isinstance(cond_id, (str, int)):
        raise StrategyFormatError(f"{where}: invalid id {cond_id!r}")
    return Condition(
        left=_indicator_from_dict(raw["left"], f"{where}.left"),
        operator=op,
        right=_operand_from_dict(raw["right"], f"{where}.right"),
        id=None if cond_id is None else str(cond_id),
    )


def _optional_pct(data: dict, key: str) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    if not _is_finite_number(value) or value < 0:
        raise StrategyFormatError(f"{key}: expected non-negative number, got {value!r}")
    return float(value)


def strategy_from_dict(data: Any) -> Strategy:
    """Build a Strategy from its JSON-like form. Raises StrategyFormatError."""
    if not isinstance(data, dict):
        raise StrategyFormatError(f"strategy: expected object, got {type(data).__name__}")
    timeframe = data.get("timeframe", "1m")
    if timeframe not in TIMEFRAMES:
        raise StrategyFormatError(f"timeframe: unsupported {timeframe!r}")
    entry = data.get("entry", [])
    exit_ = data.get("exit", [])
    if not isinstance(entry, list) or not isinstance(exit_, list):
        raise StrategyFormatError("entry/exit: expected lists of conditions")
    return Strategy(
        name=str(data.get("name", "")),
        timeframe=timeframe,
        entry=tuple(_condition_from_dict(c, f"entry[{i}]") for i, c in enumerate(entry)),
        exit=tuple(_condition_from_dict(c, f"exit[{i}]") for i, c in enumerate(exit_)),
        take_profit_pct=_optional_pct(data, "takeProfitPct"),
        stop_loss_pct=_optional_pct(data, "stopLossPct"),
    )


def _operand_to_dict(op: Operand) -> Any:
    if isinstance(op, NumberLiteral):
        return op.value
    params = {} if op.period is None else {"period": op.period}
    return {"type": op.kind.value, "params": params}


def strategy_to_dict(strategy: Strategy) -> dict:
    def cond(c: Condition) -> dict:
        data = {
            "left": _operand_to_dict(c.left),
            "operator": c.operator.value,
            "right": _operand_to_dict(c.right),
        }
        if c.id is not None:
            data["id"] = c.id
        return data

    data: dict = {
        "name": strategy.name,
        "timeframe": strategy.timeframe,
        "entry": [cond(c) for c in strategy.entry],
        "exit": [cond(c) for c in strategy.exit],
    }
    if strategy.take_profit_pct is not None:
        data["takeProfitPct"] = strategy.take_profit_pct
    if strategy.stop_loss_pct is not None:
        data["stopLossPct"] = strategy.stop_loss_pct
    return data
