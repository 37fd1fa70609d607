#!/usr/bin/env python3
"""
Strategy Studio CLI: backtest | live | strategy
Usage:
  python main.py [--config config.yaml] backtest [--symbol AAPL] [--from ISO] [--to ISO] [--output result.json]
  python main.py [--config config.yaml] live [--symbol AAPL] [--ticks N]
  python main.py [--config config.yaml] strategy show|reset
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path

# Project root
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from strategy_studio.core.config import load_config
from strategy_studio.core.errors import ValidationError
from strategy_studio.core.logger import setup_logging
from strategy_studio.core.types import strategy_to_dict
from strategy_studio.backtesting.request import BacktestRequest, run_request
from strategy_studio.live.runner import LiveRunner
from strategy_studio.live.session import LiveSession, LiveTick
from strategy_studio.persistence.repository import JsonFileStrategyRepository, load_or_default
from strategy_studio.strategies.presets import default_strategy


def run_backtest(args: argparse.Namespace) -> int:
    """Backtest the saved strategy (or the default preset) on synthetic history."""
    config = load_config(args.config, ROOT)
    setup_logging(config.log_level, config.log_dir, config.log_file, config.trade_log_file)
    logger = logging.getLogger("strategy_studio")
    repo = JsonFileStrategyRepository(config.strategy_file)
    strategy = load_or_default(repo, default_strategy(config.timeframe))
    body = {
        "symbol": args.symbol or config.symbol,
        "from": args.from_date or config.backtest_start,
        "to": args.to_date or config.backtest_end,
        "strategy": strategy,
    }
    try:
        request = BacktestRequest.from_dict(body)
    except ValidationError as e:
        logger.error("Backtest rejected: %s", e)
        return 1
    result = run_request(request, config.initial_equity)
    m = result.metrics
    print("\n--- Backtest Results ---")
    print(f"Strategy: {strategy.name} ({strategy.timeframe})")
    print(f"Bars: {len(result.equity_series)}")
    print(f"Total trades: {m.total_trades} (wins: {m.winning_trades}, losses: {m.losing_trades})")
    print(f"Total return: {m.total_return_pct:.2f}%")
    print(f"Max drawdown: {m.max_drawdown_pct:.2f}%")
    print(f"Win rate: {m.win_rate*100:.1f}%")
    if result.trades:
        print("\n" + result.trades_frame().to_string(index=False))
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2)
        logger.info("Wrote result to %s", args.output)
    return 0


def run_live(args: argparse.Namespace) -> int:
    """Run the live replication loop until Ctrl+C or --ticks."""
    config = load_config(args.config, ROOT)
    setup_logging(config.log_level, config.log_dir, config.log_file, config.trade_log_file)
    logger = logging.getLogger("strategy_studio")
    repo = JsonFileStrategyRepository(config.strategy_file)
    strategy = load_or_default(repo, default_strategy(config.timeframe))
    session = LiveSession(history=config.live_history, initial_equity=config.initial_equity)

    @session.on_tick
    def _print_tick(tick: LiveTick) -> None:
        print(
            f"{tick.candle.timestamp:%Y-%m-%d %H:%M} close={tick.candle.close:.4f} "
            f"position={tick.position.side.value} equity={tick.equity:.2f}"
        )

    session.start(args.symbol or config.symbol, strategy)
    runner = LiveRunner(session, interval_s=config.live_interval_s)
    try:
        runner.run(max_ticks=args.ticks)
    except KeyboardInterrupt:
        logger.info("Shutdown by user")
    finally:
        runner.stop()
    m = session.metrics()
    print(f"\nTrades: {m.total_trades} | Return: {m.total_return_pct:.2f}% | Max DD: {m.max_drawdown_pct:.2f}%")
    return 0


def run_strategy(args: argparse.Namespace) -> int:
    """Show the saved strategy or reset it to the default preset."""
    config = load_config(args.config, ROOT)
    setup_logging(config.log_level, config.log_dir, config.log_file, config.trade_log_file)
    repo = JsonFileStrategyRepository(config.strategy_file)
    if args.action == "reset":
        repo.save(default_strategy(config.timeframe))
    strategy = load_or_default(repo, default_strategy(config.timeframe))
    print(json.dumps(strategy_to_dict(strategy), indent=2))
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Strategy Studio CLI")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    sub = parser.add_subparsers(dest="mode", required=True)

    bt = sub.add_parser("backtest", help="Backtest on synthetic history")
    bt.add_argument("--symbol", default=None)
    bt.add_argument("--from", dest="from_date", default=None, help="ISO start date/time")
    bt.add_argument("--to", dest="to_date", default=None, help="ISO end date/time (inclusive)")
    bt.add_argument("--output", type=Path, default=None, help="Write JSON result here")

    live = sub.add_parser("live", help="Simulated live replication")
    live.add_argument("--symbol", default=None)
    live.add_argument("--ticks", type=int, default=None, help="Stop after N ticks")

    st = sub.add_parser("strategy", help="Inspect or reset the saved strategy")
    st.add_argument("action", choices=["show", "reset"])

    args = parser.parse_args()
    if args.mode == "backtest":
        return run_backtest(args)
    if args.mode == "live":
        return run_live(args)
    return run_strategy(args)


if __name__ == "__main__":
    sys.exit(main())
