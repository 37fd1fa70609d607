"""Persistence: host-side strategy load/save."""

from strategy_studio.persistence.repository import (
    StrategyRepository,
    JsonFileStrategyRepository,
    InMemoryStrategyRepository,
    load_or_default,
)

__all__ = ["StrategyRepository", "JsonFileStrategyRepository", "InMemoryStrategyRepository", "load_or_default"]
