"""Strategies: condition evaluation, position state machine, presets."""

from strategy_studio.strategies.conditions import evaluate_condition, all_hold, any_holds
from strategy_studio.strategies.state_machine import StrategyStateMachine
from strategy_studio.strategies.presets import default_strategy

__all__ = ["evaluate_condition", "all_hold", "any_holds", "StrategyStateMachine", "default_strategy"]
