"""
Load configuration from config.yaml and .env. Environment overrides yaml.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from strategy_studio.core.types import TIMEFRAMES


def _env_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path(__file__).resolve().parents[2]
    return root / ".env"


def load_dotenv_if_exists(project_root: Optional[Path] = None) -> None:
    """Load .env from project root if present."""
    path = _env_path(project_root)
    if path.exists():
        load_dotenv(path)


def load_config(config_path: Optional[Path] = None, project_root: Optional[Path] = None) -> "Config":
    """Load config.yaml and overlay with env. Returns Config."""
    load_dotenv_if_exists(project_root)
    root = project_root or Path(__file__).resolve().parents[2]
    path = config_path or root / "config.yaml"
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    def env(key: str, default: str = "") -> str:
        return os.getenv(key, default).strip()

    def env_int(key: str, default: int = 0) -> int:
        try:
            return int(os.getenv(key, str(default)))
        except ValueError:
            return default

    def env_float(key: str, default: float = 0.0) -> float:
        try:
            return float(os.getenv(key, str(default)))
        except ValueError:
            return default

    backtest = data.get("backtest", {}) or {}
    live = data.get("live", {}) or {}
    storage = data.get("storage", {}) or {}
    logging_cfg = data.get("logging", {}) or {}

    strategy_file = Path(env("STRATEGY_FILE", str(storage.get("strategy_file", "strategy.json"))))
    if not strategy_file.is_absolute():
        strategy_file = root / strategy_file

    # timeframe of the default preset when no strategy is saved
    timeframe = env("TIMEFRAME", str(backtest.get("timeframe", "1m")))
    if timeframe not in TIMEFRAMES:
        raise ValueError(f"Unsupported timeframe in config: {timeframe}")

    return Config(
        symbol=env("SYMBOL", str(backtest.get("symbol", "AAPL"))).upper(),
        timeframe=timeframe,
        backtest_start=backtest.get("start_date"),
        backtest_end=backtest.get("end_date"),
        initial_equity=float(backtest.get("initial_equity", 10000.0)),
        strategy_file=strategy_file,
        live_interval_s=env_float("LIVE_INTERVAL_S", float(live.get("interval_s", 1.0))),
        live_history=env_int("LIVE_HISTORY", int(live.get("history", 200))),
        log_level=env("LOG_LEVEL", str(logging_cfg.get("level", "INFO"))),
        log_dir=Path(logging_cfg.get("log_dir", "logs")),
        log_file=logging_cfg.get("log_file", "strategy_studio.log"),
        trade_log_file=logging_cfg.get("trade_log_file", "trades.log"),
    )


class Config:
    """Unified configuration. Immutable after load."""

    __slots__ = (
        "symbol", "timeframe", "backtest_start", "backtest_end", "initial_equity",
        "strategy_file", "live_interval_s", "live_history",
        "log_level", "log_dir", "log_file", "trade_log_file",
    )

    def __init__(
        self,
        symbol: str = "AAPL",
        timeframe: str = "1m",
        backtest_start: Optional[str] = None,
        backtest_end: Optional[str] = None,
        initial_equity: float = 10000.0,
        strategy_file: Path = None,
        live_interval_s: float = 1.0,
        live_history: int = 200,
        log_level: str = "INFO",
        log_dir: Path = None,
        log_file: str = "strategy_studio.log",
        trade_log_file: Optional[str] = "trades.log",
    ):
        self.symbol = symbol
        self.timeframe = timeframe
        # yaml parses bare dates into datetime.date; keep ISO strings
        self.backtest_start = str(backtest_start) if backtest_start is not None else None
        self.backtest_end = str(backtest_end) if backtest_end is not None else None
        self.initial_equity = initial_equity
        self.strategy_file = Path(strategy_file) if strategy_file else Path("strategy.json")
        self.live_interval_s = live_interval_s
        self.live_history = live_history
        self.log_level = log_level
        self.log_dir = Path(log_dir) if log_dir else Path("logs")
        self.log_file = log_file
        self.trade_log_file = trade_log_file
