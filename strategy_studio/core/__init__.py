"""Core: config, types, errors, logging."""

from strategy_studio.core.config import load_config, Config
from strategy_studio.core.errors import StrategyStudioError, ValidationError, StrategyFormatError
from strategy_studio.core.types import (
    Candle,
    IndicatorKind,
    IndicatorRef,
    NumberLiteral,
    Operand,
    Operator,
    Condition,
    Strategy,
    Side,
    Position,
    Trade,
    EquityPoint,
    AnnotatedCandle,
    strategy_from_dict,
    strategy_to_dict,
)
from strategy_studio.core.logger import setup_logging

__all__ = [
    "load_config",
    "Config",
    "StrategyStudioError",
    "ValidationError",
    "StrategyFormatError",
    "Candle",
    "IndicatorKind",
    "IndicatorRef",
    "NumberLiteral",
    "Operand",
    "Operator",
    "Condition",
    "Strategy",
    "Side",
    "Position",
    "Trade",
    "EquityPoint",
    "AnnotatedCandle",
    "strategy_from_dict",
    "strategy_to_dict",
    "setup_logging",
]
