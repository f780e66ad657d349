"""Session driver: serializes events, polls timers and persists snapshots."""
from __future__ import annotations

import dataclasses
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from typing import Any, Callable, Dict, Sequence

from hugoland.config import EngineConfig
from hugoland.core.rng import RNG
from hugoland.data.snapshot_store import JsonSnapshotStore, SnapshotStore
from hugoland.domain.state import GameState
from hugoland.services.engine import GameEngine, TransitionResult
from hugoland.services.errors import SaveLoadError
from hugoland.services.events import GameEvent, Tick
from hugoland.services.save_service import SaveService

logger = logging.getLogger(__name__)

Evaluator = Callable[[GameState], GameState]


class GameSession:
    """
    Owns the single live state slot.

    User events and timer ticks both go through ``apply``, which holds one
    lock for the whole transition. Saves run on a single background worker so
    a transition never waits on disk, and a failed save leaves memory as is.
    """

    def __init__(
        self,
        engine: GameEngine,
        store: SnapshotStore,
        *,
        save_service: SaveService | None = None,
        evaluators: Sequence[Evaluator] = (),
        poll_interval_seconds: float = 30.0,
    ) -> None:
        self._engine = engine
        self._store = store
        self._save_service = save_service or SaveService(defaults_factory=engine.new_game)
        self._evaluators = list(evaluators)
        self._poll_interval = poll_interval_seconds
        self._lock = threading.Lock()
        self._state: GameState | None = None
        self._saver = ThreadPoolExecutor(max_workers=1, thread_name_prefix="hugoland-save")
        self._timer: threading.Timer | None = None
        self._running = False
        self._closed = False

    @classmethod
    def from_config(cls, config: EngineConfig, *, evaluators: Sequence[Evaluator] = ()) -> "GameSession":
        engine = GameEngine(
            rng=RNG(config.seed),
            market_refresh=timedelta(minutes=config.market_refresh_minutes),
        )
        store = JsonSnapshotStore(config.resolved_save_dir, key=config.storage_key)
        return cls(
            engine,
            store,
            evaluators=evaluators,
            poll_interval_seconds=config.poll_interval_seconds,
        )

    @property
    def state(self) -> GameState:
        with self._lock:
            if self._state is None:
                raise RuntimeError("Session has not been loaded.")
            return self._state

    # -----------------------
    # Lifecycle
    # -----------------------
    def load(self) -> GameState:
        """Load the last snapshot, falling back to a new game, then catch up timers."""
        state = self._load_or_create()
        with self._lock:
            self._state = state
        self.apply(Tick(self._engine.now()))
        return self.state

    def _load_or_create(self) -> GameState:
        try:
            payload = self._store.load_snapshot()
        except (OSError, ValueError) as exc:
            logger.warning("Could not read snapshot, starting a new game: %s", exc)
            return self._engine.new_game()
        if payload is None:
            logger.info("No snapshot found, starting a new game")
            return self._engine.new_game()
        try:
            state = self._save_service.deserialize(payload)
        except SaveLoadError as exc:
            logger.warning("Snapshot is corrupt, starting a new game: %s", exc)
            return self._engine.new_game()
        logger.info("Loaded snapshot at zone %d", state.zone)
        return state

    def start(self) -> None:
        """Begin polling the timed subsystems every poll interval."""
        with self._lock:
            if self._running:
                return
            self._running = True
        self._schedule_poll()

    def stop(self) -> None:
        """Stop polling and wait for pending saves. Later events are refused."""
        with self._lock:
            self._running = False
            self._closed = True
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
        self._saver.shutdown(wait=True)

    def flush(self) -> None:
        """Block until every save submitted so far has been written."""
        self._saver.submit(lambda: None).result()

    def __enter__(self) -> "GameSession":
        self.load()
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()

    # -----------------------
    # Transitions
    # -----------------------
    def apply(self, event: GameEvent) -> TransitionResult:
        with self._lock:
            if self._closed:
                raise RuntimeError("Session has been stopped.")
            if self._state is None:
                raise RuntimeError("Session has not been loaded.")
            result = self._engine.apply(self._state, event)
            if not result.success:
                return result
            state = result.state
            for evaluator in self._evaluators:
                state = evaluator(state)
            self._state = state
            payload = self._save_service.serialize(state)
            self._saver.submit(self._write, payload)
        return dataclasses.replace(result, state=state)

    def _write(self, payload: Dict[str, Any]) -> None:
        try:
            self._store.save_snapshot(payload)
        except Exception:
            logger.exception("Failed to persist snapshot")

    def _schedule_poll(self) -> None:
        timer = threading.Timer(self._poll_interval, self._poll)
        timer.daemon = True
        with self._lock:
            if not self._running:
                return
            self._timer = timer
        timer.start()

    def _poll(self) -> None:
        with self._lock:
            if not self._running:
                return
        try:
            self.apply(Tick(self._engine.now()))
        except Exception:
            logger.exception("Scheduled tick failed")
        finally:
            self._schedule_poll()
