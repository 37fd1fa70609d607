"""Exceptions raised at the edges of the engine (input parsing and validation)."""


class StrategyStudioError(Exception):
    """Base class for strategy_studio errors."""


class ValidationError(StrategyStudioError, ValueError):
    """Backtest request is missing or has malformed fields."""


class StrategyFormatError(StrategyStudioError, ValueError):
    """Strategy definition could not be parsed."""
