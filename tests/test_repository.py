"""Unit tests for persistence.repository."""

import json

from strategy_studio.core.types import Strategy, strategy_from_dict
from strategy_studio.persistence import (
    InMemoryStrategyRepository, JsonFileStrategyRepository, load_or_default,
)
from strategy_studio.strategies.presets import default_strategy


def test_json_round_trip(tmp_path):
    repo = JsonFileStrategyRepository(tmp_path / "nested" / "strategy.json")
    repo.save(default_strategy())
    assert repo.path.exists()
    assert not repo.path.with_suffix(".json.tmp").exists()
    assert repo.load() == default_strategy()
    assert json.loads(repo.path.read_text(encoding="utf-8"))["timeframe"] == "1m"


def test_missing_file(tmp_path):
    assert JsonFileStrategyRepository(tmp_path / "none.json").load() is None


def test_corrupt_file(tmp_path):
    path = tmp_path / "strategy.json"
    path.write_text("{not json", encoding="utf-8")
    assert JsonFileStrategyRepository(path).load() is None


def test_invalid_strategy_file(tmp_path):
    path = tmp_path / "strategy.json"
    path.write_text(json.dumps({"timeframe": "1w"}), encoding="utf-8")
    assert JsonFileStrategyRepository(path).load() is None


def test_load_or_default(tmp_path):
    fallback = default_strategy()
    assert load_or_default(JsonFileStrategyRepository(tmp_path / "x.json"), fallback) is fallback
    saved = Strategy(name="saved", timeframe="5m")
    repo = JsonFileStrategyRepository(tmp_path / "y.json")
    repo.save(saved)
    assert load_or_default(repo, fallback) == saved


def test_in_memory():
    repo = InMemoryStrategyRepository()
    assert repo.load() is None
    repo.save(default_strategy())
    assert load_or_default(repo, Strategy(name="other", timeframe="1h")) == default_strategy()


def test_malformed_params_file(tmp_path):
    path = tmp_path / "strategy.json"
    path.write_text(json.dumps({
        "entry": [{
            "left": {"type": "SMA", "params": [20]},
            "operator": ">",
            "right": 100,
        }],
    }), encoding="utf-8")
    repo = JsonFileStrategyRepository(path)
    assert repo.load() is None
    assert load_or_default(repo, default_strategy()) == default_strategy()


def test_non_finite_period_file(tmp_path):
    path = tmp_path / "strategy.json"
    # json.dumps writes Infinity, which json.load reads back as float("inf")
    path.write_text(json.dumps({
        "entry": [{
            "left": {"type": "RSI", "params": {"period": float("inf")}},
            "operator": "<",
            "right": 30,
        }],
    }), encoding="utf-8")
    assert JsonFileStrategyRepository(path).load() is None


def test_non_utf8_file(tmp_path):
    path = tmp_path / "strategy.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    assert JsonFileStrategyRepository(path).load() is None


def test_condition_ids_survive_save(tmp_path):
    editor = {
        "name": "ids",
        "timeframe": "5m",
        "entry": [{"id": "row-1", "left": {"type": "Price"}, "operator": ">", "right": 1}],
        "exit": [],
    }
    repo = JsonFileStrategyRepository(tmp_path / "strategy.json")
    repo.save(strategy_from_dict(editor))
    saved = json.loads(repo.path.read_text(encoding="utf-8"))
    assert saved["entry"][0]["id"] == "row-1"
    assert repo.load().entry[0].id == "row-1"
