"""
Fixed-interval ticker for a live session. The sleep function is injectable,
so tests can drive ticks synchronously.
"""

from __future__ import annotations
import logging
import time
from typing import Callable, Optional

from strategy_studio.live.session import LiveSession

logger = logging.getLogger("strategy_studio.live.runner")


class LiveRunner:
    """Calls session.tick() every interval_s until stopped."""

    def __init__(
        self,
        session: LiveSession,
        interval_s: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        self.session = session
        self.interval_s = interval_s
        self._sleep = sleep
        self._stopped = False

    def stop(self) -> None:
        self._stopped = True
        self.session.stop()

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Block and tick until stop() or max_ticks. Returns the number of ticks attempted."""
        self._stopped = False
        ticks = 0
        while not self._stopped and self.session.running:
            if max_ticks is not None and ticks >= max_ticks:
                break
            self._sleep(self.interval_s)
            if self._stopped or not self.session.running:
                break
            ticks += 1
            try:
                self.session.tick()
            except Exception as e:
                logger.exception("Live tick error: %s", e)
        return ticks
