"""
Logging setup. Console, optional application log file, optional trade journal.

Every position entry and exit is logged at DEBUG on the strategy_studio.trades
logger. The trade journal captures exactly those records, whatever the
console level is, so a run at INFO still leaves a full trade-by-trade file.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional

TRADES_LOGGER = "strategy_studio.trades"


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[Path] = None,
    log_file: Optional[str] = None,
    trade_log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the strategy_studio logger. Engine modules log under
    strategy_studio.<area>; trades go to strategy_studio.trades.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    journal = bool(log_dir and trade_log_file)
    root = logging.getLogger("strategy_studio")
    for handler in list(root.handlers):
        handler.close()
    root.handlers.clear()
    # the journal needs DEBUG records; the other handlers filter by level
    root.setLevel(min(log_level, logging.DEBUG) if journal else log_level)

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(log_level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
    if log_dir and log_file:
        fh = logging.FileHandler(log_dir / log_file, encoding="utf-8")
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)
    if journal:
        th = logging.FileHandler(log_dir / trade_log_file, encoding="utf-8")
        th.setLevel(logging.DEBUG)
        th.addFilter(logging.Filter(TRADES_LOGGER))
        th.setFormatter(logging.Formatter("%(asctime)s | %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(th)

    return root
