"""Tests for best-score storage backends."""

import json

import pytest

from mazechase.persistence import InMemoryScoreStore, JsonScoreStore
from mazechase.schemas import SessionResult


def make_result(score: int, won: bool = False, ticks: int = 120) -> SessionResult:
    return SessionResult(score=score, won=won, ticks=ticks, best_score=score)


@pytest.mark.asyncio
async def test_in_memory_store_tracks_best_and_history():
    store = InMemoryScoreStore()
    await store.initialize()

    assert await store.load_best_score() == 0
    assert await store.save_result(make_result(120)) == 120
    assert await store.save_result(make_result(80)) == 120
    assert await store.save_result(make_result(300, won=True)) == 300
    assert await store.load_best_score() == 300

    results = await store.get_results()
    assert [r.score for r in results] == [300, 80, 120]
    assert [r.score for r in await store.get_results(limit=1)] == [300]

    await store.close()


@pytest.mark.asyncio
async def test_in_memory_store_starts_from_seed_value():
    store = InMemoryScoreStore(best_score=500)
    assert await store.save_result(make_result(200)) == 500


@pytest.mark.asyncio
async def test_json_store_missing_file_reads_empty(tmp_path):
    store = JsonScoreStore(tmp_path / "scores" / "best.json")
    await store.initialize()

    assert (tmp_path / "scores").is_dir()
    assert await store.load_best_score() == 0
    assert await store.get_results() == []


@pytest.mark.asyncio
async def test_json_store_round_trip(tmp_path):
    path = tmp_path / "highscore.json"
    store = JsonScoreStore(path)
    await store.initialize()

    await store.save_result(make_result(90))
    best = await store.save_result(make_result(40, ticks=30))
    assert best == 90

    payload = json.loads(path.read_text("utf-8"))
    assert payload["best_score"] == 90
    assert [entry["score"] for entry in payload["results"]] == [90, 40]

    # A fresh store sees what the first one wrote
    reopened = JsonScoreStore(str(path))
    assert await reopened.load_best_score() == 90
    results = await reopened.get_results(limit=5)
    assert [r.score for r in results] == [40, 90]
    assert results[0].ticks == 30
    assert results[0].ended_at.tzinfo is not None


@pytest.mark.asyncio
async def test_json_store_defaults_to_configured_path(tmp_path, monkeypatch):
    from mazechase.config import Config

    monkeypatch.setattr(Config, "SCORE_PATH", tmp_path / "default.json")
    store = JsonScoreStore()
    assert store.path == tmp_path / "default.json"

    await store.save_result(make_result(10))
    assert (tmp_path / "default.json").exists()


@pytest.mark.asyncio
async def test_json_store_corrupt_file_raises(tmp_path):
    path = tmp_path / "highscore.json"
    path.write_text("{not json", "utf-8")

    with pytest.raises(json.JSONDecodeError):
        await JsonScoreStore(path).load_best_score()
