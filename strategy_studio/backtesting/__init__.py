"""Backtesting engine: bar-by-bar simulation of declarative strategies."""

from strategy_studio.backtesting.engine import BacktestEngine, BacktestResult, run_backtest, INITIAL_EQUITY
from strategy_studio.backtesting.request import BacktestRequest, run_request

__all__ = ["BacktestEngine", "BacktestResult", "run_backtest", "INITIAL_EQUITY", "BacktestRequest", "run_request"]
