"""
Live session: evaluates a strategy once per newly generated bar.

The session owns its candle history, indicator cache, position and equity.
State persists across ticks and across stop()/start() with the same symbol and
strategy; a new symbol or strategy starts a fresh session.
"""

from __future__ import annotations
import logging
import random
import time
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from strategy_studio.analytics.metrics import PerformanceMetrics, compute_metrics
from strategy_studio.backtesting.engine import INITIAL_EQUITY
from strategy_studio.core.types import Candle, Position, Strategy, Trade
from strategy_studio.data.synthetic import from_epoch_ms, generate_candles, next_candle
from strategy_studio.indicators.engine import IndicatorEngine
from strategy_studio.strategies.state_machine import StrategyStateMachine
from strategy_studio.utils.timeframes import timeframe_ms

logger = logging.getLogger("strategy_studio.live")


@dataclass(frozen=True)
class LiveTick:
    """What a UI needs after each tick."""
    candle: Candle
    position: Position
    equity: float
    trade: Optional[Trade] = None


TickListener = Callable[[LiveTick], None]


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class LiveSession:

    def __init__(
        self,
        history: int = 200,
        initial_equity: float = INITIAL_EQUITY,
        clock: Optional[Callable[[], int]] = None,
        rng: Optional[random.Random] = None,
    ):
        if history < 1:
            raise ValueError("history must be at least 1 bar")
        self.history = history
        self.initial_equity = initial_equity
        self._clock = clock or _wall_clock_ms
        self._rng = rng
        self._listeners: List[TickListener] = []
        self.reset()

    def reset(self) -> None:
        """Drop all session state. Listeners stay registered."""
        self.symbol: Optional[str] = None
        self.strategy: Optional[Strategy] = None
        self.running = False
        self.equity = self.initial_equity
        self.trades: List[Trade] = []
        self._candles: List[Candle] = []
        self._equity_history: List[float] = []
        self._engine: Optional[IndicatorEngine] = None
        self._machine: Optional[StrategyStateMachine] = None

    def on_tick(self, listener: TickListener) -> TickListener:
        """Register a tick listener. Usable as a decorator."""
        self._listeners.append(listener)
        return listener

    def start(self, symbol: str, strategy: Strategy) -> None:
        symbol = symbol.strip().upper()
        if not self._candles or symbol != self.symbol or strategy != self.strategy:
            self._seed(symbol, strategy)
        self.running = True
        logger.info("Live session started: %s / %s", symbol, strategy.name)

    def stop(self) -> None:
        self.running = False
        logger.info("Live session stopped: equity %.2f, %d trades", self.equity, len(self.trades))

    def _seed(self, symbol: str, strategy: Strategy) -> None:
        self.reset()
        step = timeframe_ms(strategy.timeframe)
        now = self._clock()
        end = now - now % step
        start = end - (self.history - 1) * step
        self._candles = generate_candles(symbol, from_epoch_ms(start), from_epoch_ms(end), strategy.timeframe)
        self._engine = IndicatorEngine(self._candles)
        self._machine = StrategyStateMachine(strategy)
        self.symbol = symbol
        self.strategy = strategy
        logger.debug("Seeded %d bars for %s", len(self._candles), symbol)

    @property
    def position(self) -> Position:
        if self._machine is None:
            return Position()
        return replace(self._machine.position)

    @property
    def recent_candles(self) -> List[Candle]:
        return self._candles[-self.history:]

    def tick(self) -> Optional[LiveTick]:
        """Append one bar and evaluate it. Returns None while stopped."""
        if not self.running:
            return None
        candle = next_candle(
            self._candles[-1], self.symbol, self.strategy.timeframe,
            now_ms=self._clock(), rng=self._rng,
        )
        self._candles.append(candle)
        index = self._engine.append(candle)
        trade = self._machine.step(self._engine, index, candle)
        if trade is not None:
            self.equity *= 1 + trade.pnl_pct / 100.0
            self.trades.append(trade)
            logger.info("Live %s exit (%s): pnl %.3f%%, equity %.2f",
                        self.symbol, trade.exit_reason, trade.pnl_pct, self.equity)
        self._equity_history.append(self.equity)
        event = LiveTick(candle=candle, position=self.position, equity=self.equity, trade=trade)
        for listener in self._listeners:
            listener(event)
        return event

    def metrics(self) -> PerformanceMetrics:
        return compute_metrics([t.pnl_pct for t in self.trades], self._equity_history, self.initial_equity)
