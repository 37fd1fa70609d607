"""Timeframe string to bar step conversion."""

from strategy_studio.core.types import TIMEFRAMES


def timeframe_minutes(tf: str) -> int:
    """Convert a strategy timeframe ('1m', '5m', '1h', '1d') to minutes."""
    tf = tf.strip().lower()
    if tf not in TIMEFRAMES:
        raise ValueError(f"Unsupported timeframe: {tf}")
    if tf.endswith("m"):
        return int(tf[:-1])
    if tf.endswith("h"):
        return int(tf[:-1]) * 60
    return int(tf[:-1]) * 60 * 24


def timeframe_ms(tf: str) -> int:
    """Bar step in milliseconds, e.g. '1m' -> 60000."""
    return timeframe_minutes(tf) * 60_000
