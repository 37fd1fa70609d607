"""
Strategy persistence for the host application. The engine never imports this;
hosts load a strategy here and pass it in.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from strategy_studio.core.errors import StrategyFormatError
from strategy_studio.core.types import Strategy, strategy_from_dict, strategy_to_dict

logger = logging.getLogger("strategy_studio.persistence")


class StrategyRepository(Protocol):
    def load(self) -> Optional[Strategy]:
        ...

    def save(self, strategy: Strategy) -> None:
        ...


class JsonFileStrategyRepository:
    """Stores the current strategy as JSON in a single file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Optional[Strategy]:
        """Return the saved strategy, or None if absent or unreadable."""
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return strategy_from_dict(json.load(f))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, StrategyFormatError) as e:
            logger.warning("Ignoring unreadable strategy file %s: %s", self.path, e)
            return None

    def save(self, strategy: Strategy) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(strategy_to_dict(strategy), f, indent=2)
        tmp.replace(self.path)
        logger.debug("Saved strategy '%s' to %s", strategy.name, self.path)


class InMemoryStrategyRepository:
    """Repository without storage, for tests and embedding."""

    def __init__(self, strategy: Optional[Strategy] = None):
        self._strategy = strategy

    def load(self) -> Optional[Strategy]:
        return self._strategy

    def save(self, strategy: Strategy) -> None:
        self._strategy = strategy


def load_or_default(repository: StrategyRepository, default: Strategy) -> Strategy:
    """Host fallback: saved strategy if usable, otherwise `default`."""
    strategy = repository.load()
    return strategy if strategy is not None else default
