"""Analytics: performance metrics (total return, win rate, max drawdown)."""

from strategy_studio.analytics.metrics import (
    PerformanceMetrics,
    compute_metrics,
    total_return_pct,
    win_rate,
    max_drawdown_pct,
)

__all__ = [
    "PerformanceMetrics",
    "compute_metrics",
    "total_return_pct",
    "win_rate",
    "max_drawdown_pct",
]
