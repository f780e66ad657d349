from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict

import pytest

from hugoland.config import EngineConfig
from hugoland.core.rng import RNG
from hugoland.data.snapshot_store import JsonSnapshotStore
from hugoland.domain.state import GameState
from hugoland.services import events as ev
from hugoland.services.engine import GameEngine
from hugoland.services.session import GameSession
from tests.helpers.fakes import T0, StubContentFactory


class _FailingStore:
    def load_snapshot(self) -> Dict[str, Any] | None:
        return None

    def save_snapshot(self, payload: Dict[str, Any]) -> None:
        raise OSError("disk full")


def _make_engine() -> GameEngine:
    return GameEngine(rng=RNG(41), factory=StubContentFactory(), clock=lambda: T0)


def _make_session(tmp_path: Path, **kwargs: Any) -> GameSession:
    return GameSession(_make_engine(), JsonSnapshotStore(tmp_path), **kwargs)


def test_first_load_creates_and_saves_a_new_game(tmp_path: Path) -> None:
    session = _make_session(tmp_path)
    try:
        state = session.load()
        session.flush()
    finally:
        session.stop()

    payload = json.loads((tmp_path / "hugoland_game_state.json").read_text(encoding="utf-8"))
    assert state.coins == 500
    assert payload["state"]["coins"] == 500


def test_applied_events_survive_a_restart(tmp_path: Path) -> None:
    first = _make_session(tmp_path)
    try:
        first.load()
        result = first.apply(ev.AddCoins(250))
    finally:
        first.stop()

    second = _make_session(tmp_path)
    try:
        reloaded = second.load()
    finally:
        second.stop()

    assert result.state.coins == 750
    assert reloaded.coins == 750


def test_corrupt_snapshot_falls_back_to_new_game(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)
    (tmp_path / "hugoland_game_state.json").write_text("{not json", encoding="utf-8")
    session = _make_session(tmp_path)
    try:
        state = session.load()
    finally:
        session.stop()

    assert state.coins == 500
    assert any("starting a new game" in record.getMessage() for record in caplog.records)


def test_unsupported_snapshot_version_falls_back(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)
    JsonSnapshotStore(tmp_path).save_snapshot({"save_version": 0, "state": {"coins": 9}})
    session = _make_session(tmp_path)
    try:
        state = session.load()
    finally:
        session.stop()

    assert state.coins == 500
    assert any(record.levelno == logging.WARNING for record in caplog.records)


def test_failed_save_keeps_memory_state(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR)
    session = GameSession(_make_engine(), _FailingStore())
    try:
        session.load()
        result = session.apply(ev.AddCoins(100))
        session.flush()
        state = session.state
    finally:
        session.stop()

    assert result.success is True
    assert state.coins == 600
    assert any("Failed to persist snapshot" in record.getMessage() for record in caplog.records)


def test_evaluators_run_after_successful_transitions(tmp_path: Path) -> None:
    def award_rich(state: GameState) -> GameState:
        if state.coins >= 1000 and not any(entry["id"] == "rich" for entry in state.achievements):
            state.achievements.append({"id": "rich"})
        return state

    session = _make_session(tmp_path, evaluators=[award_rich])
    try:
        session.load()
        rejected = session.apply(ev.SellItem("weapon", "missing"))
        result = session.apply(ev.AddCoins(600))
    finally:
        session.stop()

    assert rejected.success is False
    assert result.state.achievements == [{"id": "rich"}]
    assert session.state.achievements == [{"id": "rich"}]


def test_apply_before_load_is_an_error(tmp_path: Path) -> None:
    session = _make_session(tmp_path)
    try:
        with pytest.raises(RuntimeError):
            session.apply(ev.MineGem())
    finally:
        session.stop()


def test_apply_after_stop_is_refused(tmp_path: Path) -> None:
    session = _make_session(tmp_path)
    session.load()
    session.stop()

    with pytest.raises(RuntimeError, match="stopped"):
        session.apply(ev.AddCoins(100))

    assert session.state.coins == 500


def test_poller_applies_ticks_in_the_background(tmp_path: Path) -> None:
    calls = []
    enough = threading.Event()

    def count_ticks(state: GameState) -> GameState:
        calls.append(state.zone)
        if len(calls) >= 3:
            enough.set()
        return state

    session = _make_session(tmp_path, evaluators=[count_ticks], poll_interval_seconds=0.01)
    try:
        session.load()
        session.start()
        assert enough.wait(timeout=5) is True
    finally:
        session.stop()


def test_context_manager_saves_on_exit(tmp_path: Path) -> None:
    with _make_session(tmp_path, poll_interval_seconds=60) as session:
        session.apply(ev.AddGems(5))

    payload = JsonSnapshotStore(tmp_path).load_snapshot()
    assert payload is not None
    assert payload["state"]["gems"] == 55


def test_session_from_config_uses_configured_store(tmp_path: Path) -> None:
    config = EngineConfig(save_dir=str(tmp_path), storage_key="slot_1", seed=3)
    session = GameSession.from_config(config)
    try:
        session.load()
        session.flush()
    finally:
        session.stop()

    assert (tmp_path / "slot_1.json").exists()
