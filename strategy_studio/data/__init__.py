"""Data: synthetic candle generation."""

from strategy_studio.data.synthetic import generate_candles, next_candle

__all__ = ["generate_candles", "next_candle"]
