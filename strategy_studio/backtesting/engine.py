"""
Backtest engine: bar-by-bar simulation of a declarative strategy, long/flat only,
compounding equity on each closed trade. No fees or slippage.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import pandas as pd

from strategy_studio.analytics.metrics import PerformanceMetrics, compute_metrics
from strategy_studio.core.types import (
    AnnotatedCandle,
    Candle,
    EquityPoint,
    IndicatorKind,
    IndicatorRef,
    Strategy,
    Trade,
)
from strategy_studio.indicators.engine import IndicatorEngine
from strategy_studio.strategies.state_machine import StrategyStateMachine

logger = logging.getLogger("strategy_studio.backtest")

INITIAL_EQUITY = 10000.0

SMA20 = IndicatorRef(IndicatorKind.SMA, 20)
SMA50 = IndicatorRef(IndicatorKind.SMA, 50)


@dataclass
class BacktestResult:
    """Backtest output: equity curve, trades, metrics and chart overlays."""
    equity_series: List[EquityPoint] = field(default_factory=list)
    trades: List[Trade] = field(default_factory=list)
    metrics: Optional[PerformanceMetrics] = None
    annotated_candles: List[AnnotatedCandle] = field(default_factory=list)

    def to_dict(self) -> dict:
        """JSON-ready form for the rendering layer."""
        return {
            "equitySeries": [p.to_dict() for p in self.equity_series],
            "trades": [t.to_dict() for t in self.trades],
            "metrics": self.metrics.to_dict() if self.metrics else None,
            "annotatedCandles": [c.to_dict() for c in self.annotated_candles],
        }

    def equity_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {"equity": [p.equity for p in self.equity_series]},
            index=pd.DatetimeIndex([p.timestamp for p in self.equity_series], name="time"),
        )

    def trades_frame(self) -> pd.DataFrame:
        columns = ["entry_time", "exit_time", "entry_price", "exit_price", "pnl_pct", "exit_reason"]
        return pd.DataFrame(
            [[getattr(t, c) for c in columns] for t in self.trades],
            columns=columns,
        )


class BacktestEngine:
    """
    Runs a strategy over a candle sequence. Each run() owns its own indicator cache
    and position state, so runs never share anything.
    """

    def __init__(self, initial_equity: float = INITIAL_EQUITY):
        self.initial_equity = initial_equity

    def run(self, candles: Sequence[Candle], strategy: Strategy) -> BacktestResult:
        engine = IndicatorEngine(candles)
        machine = StrategyStateMachine(strategy)
        equity = self.initial_equity
        equity_series: List[EquityPoint] = []
        trades: List[Trade] = []

        for i, candle in enumerate(candles):
            trade = machine.step(engine, i, candle)
            if trade is not None:
                equity *= 1 + trade.pnl_pct / 100.0
                trades.append(trade)
            equity_series.append(EquityPoint(candle.timestamp, equity))

        metrics = compute_metrics(
            [t.pnl_pct for t in trades],
            [p.equity for p in equity_series],
            self.initial_equity,
        )
        annotated = [
            AnnotatedCandle(candle, engine.value(SMA20, i), engine.value(SMA50, i))
            for i, candle in enumerate(candles)
        ]
        logger.info(
            "Backtest '%s': %d bars, %d trades, return %.2f%%, max DD %.2f%%",
            strategy.name, len(candles), len(trades),
            metrics.total_return_pct, metrics.max_drawdown_pct,
        )
        return BacktestResult(
            equity_series=equity_series,
            trades=trades,
            metrics=metrics,
            annotated_candles=annotated,
        )


def run_backtest(candles: Sequence[Candle], strategy: Strategy) -> BacktestResult:
    """Run with the standard 10000 starting equity."""
    return BacktestEngine().run(candles, strategy)
