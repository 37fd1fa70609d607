"""
Backtest request: validated input from the transport layer
({symbol, from, to, strategy}) and the generate-then-run pipeline.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any

from strategy_studio.backtesting.engine import BacktestEngine, BacktestResult, INITIAL_EQUITY
from strategy_studio.core.errors import StrategyFormatError, ValidationError
from strategy_studio.core.types import Strategy, strategy_from_dict
from strategy_studio.data.synthetic import generate_candles, to_epoch_ms

logger = logging.getLogger("strategy_studio.backtest.request")

DEFAULT_SYMBOL = "AAPL"


@dataclass(frozen=True)
class BacktestRequest:
    symbol: str
    from_date: str
    to_date: str
    strategy: Strategy

    @classmethod
    def from_dict(cls, body: Any) -> "BacktestRequest":
        """Validate a request body. Accepts from/to or fromDate/toDate. Raises ValidationError."""
        if not isinstance(body, dict):
            raise ValidationError("Missing params")
        symbol = str(body.get("symbol") or "").strip().upper() or DEFAULT_SYMBOL
        from_date = body.get("from") or body.get("fromDate")
        to_date = body.get("to") or body.get("toDate")
        raw_strategy = body.get("strategy")
        missing = [
            name for name, value in (("from", from_date), ("to", to_date), ("strategy", raw_strategy))
            if not value
        ]
        if missing:
            raise ValidationError(f"Missing params: {', '.join(missing)}")
        for name, value in (("from", from_date), ("to", to_date)):
            try:
                to_epoch_ms(str(value))
            except (ValueError, TypeError) as e:
                raise ValidationError(f"Invalid {name} date {value!r}: {e}") from e
        if isinstance(raw_strategy, Strategy):
            strategy = raw_strategy
        else:
            try:
                strategy = strategy_from_dict(raw_strategy)
            except StrategyFormatError as e:
                raise ValidationError(f"Invalid strategy: {e}") from e
        return cls(symbol=symbol, from_date=str(from_date), to_date=str(to_date), strategy=strategy)


def run_request(request: BacktestRequest, initial_equity: float = INITIAL_EQUITY) -> BacktestResult:
    """Generate synthetic history for the request and backtest the strategy on it."""
    logger.info(
        "Backtest request symbol=%s from=%s to=%s strategy=%s",
        request.symbol, request.from_date, request.to_date, request.strategy.name,
    )
    candles = generate_candles(
        request.symbol, request.from_date, request.to_date, request.strategy.timeframe
    )
    return BacktestEngine(initial_equity).run(candles, request.strategy)
