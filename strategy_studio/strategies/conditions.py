"""
Condition evaluation: thresholds on the current bar, crossings against the previous bar.
"""

from __future__ import annotations
from typing import Iterable, Optional

from strategy_studio.core.types import Condition, Operator
from strategy_studio.indicators.engine import IndicatorEngine


def compare(op: Operator, prev_l: float, prev_r: float, l: float, r: float) -> bool:
    if op == Operator.GT:
        return l > r
    if op == Operator.LT:
        return l < r
    if op == Operator.GE:
        return l >= r
    if op == Operator.LE:
        return l <= r
    if op == Operator.CROSSES_ABOVE:
        return prev_l <= prev_r and l > r
    if op == Operator.CROSSES_BELOW:
        return prev_l >= prev_r and l < r
    raise ValueError(f"Unsupported operator: {op}")


def _defined(*values: Optional[float]) -> bool:
    return all(v is not None for v in values)


def evaluate_condition(condition: Condition, engine: IndicatorEngine, index: int) -> bool:
    """
    True if the condition holds at bar `index`. The previous bar is index-1,
    or bar 0 itself on the first bar. Any undefined operand makes the result False.
    """
    prev = max(0, index - 1)
    l = engine.resolve(condition.left, index)
    r = engine.resolve(condition.right, index)
    if condition.operator in (Operator.CROSSES_ABOVE, Operator.CROSSES_BELOW):
        prev_l = engine.resolve(condition.left, prev)
        prev_r = engine.resolve(condition.right, prev)
        if not _defined(l, r, prev_l, prev_r):
            return False
        return compare(condition.operator, prev_l, prev_r, l, r)
    if not _defined(l, r):
        return False
    return compare(condition.operator, l, r, l, r)


def all_hold(conditions: Iterable[Condition], engine: IndicatorEngine, index: int) -> bool:
    """AND over entry conditions. An empty set never holds."""
    conditions = tuple(conditions)
    if not conditions:
        return False
    return all(evaluate_condition(c, engine, index) for c in conditions)


def any_holds(conditions: Iterable[Condition], engine: IndicatorEngine, index: int) -> bool:
    """OR over exit conditions."""
    return any(evaluate_condition(c, engine, index) for c in conditions)
