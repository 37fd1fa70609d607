"""
Performance metrics: total return, win rate, max drawdown.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np


@dataclass
class PerformanceMetrics:
    """Summary metrics for a backtest or live session."""
    total_return_pct: float
    win_rate: float
    max_drawdown_pct: float
    total_trades: int
    winning_trades: int
    losing_trades: int
    final_equity: float

    def to_dict(self) -> dict:
        return {
            "totalReturnPct": self.total_return_pct,
            "winRate": self.win_rate,
            "maxDrawdownPct": self.max_drawdown_pct,
            "totalTrades": self.total_trades,
            "winningTrades": self.winning_trades,
            "losingTrades": self.losing_trades,
            "finalEquity": self.final_equity,
        }


def total_return_pct(initial_equity: float, final_equity: float) -> float:
    """(final - initial) / initial in percent."""
    return (final_equity - initial_equity) / initial_equity * 100.0


def win_rate(pnls: Sequence[float]) -> float:
    """Fraction of trades with positive PnL; 0 with no trades."""
    if not pnls:
        return 0.0
    return sum(1 for p in pnls if p > 0) / len(pnls)


def max_drawdown_pct(equity: Sequence[float]) -> float:
    """Largest decline from the running peak, in percent (positive number)."""
    if len(equity) == 0:
        return 0.0
    arr = np.asarray(equity, dtype=float)
    peak = np.maximum.accumulate(arr)
    dd = (peak - arr) / np.where(peak != 0, peak, 1)
    return float(np.max(dd)) * 100.0


def compute_metrics(
    pnls: List[float],
    equity: Sequence[float],
    initial_equity: float,
) -> PerformanceMetrics:
    """
    pnls: per-trade PnL in percent. equity: equity value after each bar.
    The starting equity counts as the initial peak.
    """
    final_equity = float(equity[-1]) if len(equity) else initial_equity
    return PerformanceMetrics(
        total_return_pct=total_return_pct(initial_equity, final_equity),
        win_rate=win_rate(pnls),
        max_drawdown_pct=max_drawdown_pct([initial_equity, *equity]),
        total_trades=len(pnls),
        winning_trades=sum(1 for p in pnls if p > 0),
        losing_trades=sum(1 for p in pnls if p <= 0),
        final_equity=final_equity,
    )
