"""Utils: timeframes."""

from strategy_studio.utils.timeframes import timeframe_minutes, timeframe_ms

__all__ = ["timeframe_minutes", "timeframe_ms"]
