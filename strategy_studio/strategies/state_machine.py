"""
Flat/Long position state machine driven by entry/exit rules and TP/SL thresholds.
"""

from __future__ import annotations
import logging
from typing import Optional

from strategy_studio.core.types import Candle, Position, Side, Strategy, Trade
from strategy_studio.indicators.engine import IndicatorEngine
from strategy_studio.strategies.conditions import all_hold, any_holds

logger = logging.getLogger("strategy_studio.trades")

DEFAULT_TAKE_PROFIT_PCT = 2.0
DEFAULT_STOP_LOSS_PCT = 1.0


class StrategyStateMachine:
    """
    One bar per step():
      Flat + all entry conditions -> Long at the bar's close (no exit check that bar).
      Long + (change >= TP or change <= -SL or any exit condition) -> Flat, emits a Trade.
    """

    def __init__(self, strategy: Strategy):
        self.strategy = strategy
        tp = strategy.take_profit_pct
        sl = strategy.stop_loss_pct
        self.take_profit_pct = DEFAULT_TAKE_PROFIT_PCT if tp is None else tp
        self.stop_loss_pct = DEFAULT_STOP_LOSS_PCT if sl is None else sl
        self.position = Position()

    def reset(self) -> None:
        self.position = Position()

    def step(self, engine: IndicatorEngine, index: int, candle: Candle) -> Optional[Trade]:
        """Advance on bar `index`. Returns the closed Trade if the position exited."""
        pos = self.position
        price = candle.close
        if pos.side == Side.FLAT:
            if all_hold(self.strategy.entry, engine, index):
                self.position = Position(side=Side.LONG, entry_price=price, entry_time=candle.timestamp)
                logger.debug("ENTER long @ %.4f at %s", price, candle.timestamp)
            return None

        change_pct = (price - pos.entry_price) / pos.entry_price * 100
        if change_pct >= self.take_profit_pct:
            reason = "take_profit"
        elif change_pct <= -self.stop_loss_pct:
            reason = "stop_loss"
        elif any_holds(self.strategy.exit, engine, index):
            reason = "signal"
        else:
            return None

        trade = Trade(
            entry_time=pos.entry_time,
            exit_time=candle.timestamp,
            entry_price=pos.entry_price,
            exit_price=price,
            pnl_pct=change_pct,
            exit_reason=reason,
        )
        self.position = Position()
        logger.debug("EXIT %s @ %.4f at %s pnl=%.3f%%", reason, price, candle.timestamp, change_pct)
        return trade
