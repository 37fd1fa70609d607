"""Unit tests for strategies.state_machine."""

from datetime import datetime, timedelta, timezone

from strategy_studio.core.types import (
    Candle, Condition, IndicatorKind, IndicatorRef, NumberLiteral, Operator, Side, Strategy,
)
from strategy_studio.indicators.engine import IndicatorEngine
from strategy_studio.strategies.state_machine import StrategyStateMachine

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
PRICE = IndicatorRef(IndicatorKind.PRICE)


def make_candles(closes):
    return [Candle(T0 + timedelta(minutes=i), c, c, c, c, 1.0) for i, c in enumerate(closes)]


def make_strategy(exit_below=95.0, tp=5.0, sl=3.0):
    return Strategy(
        name="test",
        timeframe="1m",
        entry=(Condition(PRICE, Operator.GT, NumberLiteral(100.0)),),
        exit=(Condition(PRICE, Operator.LT, NumberLiteral(exit_below)),),
        take_profit_pct=tp,
        stop_loss_pct=sl,
    )


def run(machine, closes):
    candles = make_candles(closes)
    eng = IndicatorEngine(candles)
    return [machine.step(eng, i, c) for i, c in enumerate(candles)]


def test_starts_flat():
    assert StrategyStateMachine(make_strategy()).position.side == Side.FLAT


def test_enter_and_take_profit():
    machine = StrategyStateMachine(make_strategy())
    trades = run(machine, [99.0, 101.0, 102.0, 107.0])
    assert trades[:3] == [None, None, None]
    trade = trades[3]
    assert trade.exit_reason == "take_profit"
    assert trade.entry_price == 101.0
    assert trade.exit_price == 107.0
    assert trade.pnl_pct == (107.0 - 101.0) / 101.0 * 100
    assert trade.entry_time == T0 + timedelta(minutes=1)
    assert trade.exit_time == T0 + timedelta(minutes=3)
    assert machine.position.side == Side.FLAT


def test_stop_loss():
    machine = StrategyStateMachine(make_strategy())
    trade = run(machine, [99.0, 101.0, 97.0])[2]
    assert trade.exit_reason == "stop_loss"
    assert trade.pnl_pct < -3.0


def test_exit_signal():
    machine = StrategyStateMachine(make_strategy(exit_below=100.5))
    trade = run(machine, [99.0, 101.0, 100.2])[2]
    assert trade.exit_reason == "signal"
    assert trade.pnl_pct < 0


def test_holds_between_thresholds():
    machine = StrategyStateMachine(make_strategy())
    assert run(machine, [101.0, 102.0, 100.0]) == [None, None, None]
    assert machine.position.side == Side.LONG
    assert machine.position.entry_price == 101.0


def test_entry_bar_cannot_exit():
    # TP of 0% would trigger on any bar checked for exit
    machine = StrategyStateMachine(make_strategy(tp=0.0))
    trades = run(machine, [101.0])
    assert trades == [None]
    assert machine.position.is_long


def test_no_reentry_while_long():
    machine = StrategyStateMachine(make_strategy(tp=50.0, sl=50.0))
    run(machine, [101.0, 102.0, 103.0])
    assert machine.position.entry_price == 101.0


def test_default_thresholds():
    strategy = Strategy(name="bare", timeframe="1m")
    machine = StrategyStateMachine(strategy)
    assert machine.take_profit_pct == 2.0
    assert machine.stop_loss_pct == 1.0


def test_reset():
    machine = StrategyStateMachine(make_strategy())
    run(machine, [101.0])
    machine.reset()
    assert machine.position.side == Side.FLAT
