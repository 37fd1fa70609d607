"""Live: per-bar strategy evaluation on a simulated stream."""

from strategy_studio.live.session import LiveSession, LiveTick
from strategy_studio.live.runner import LiveRunner

__all__ = ["LiveSession", "LiveTick", "LiveRunner"]
