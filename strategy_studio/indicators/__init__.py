"""Indicators: per-run cached Price/SMA/EMA/RSI engine."""

from strategy_studio.indicators.engine import IndicatorEngine, sma

__all__ = ["IndicatorEngine", "sma"]
