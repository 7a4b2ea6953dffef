"""EngineManager: singleton wrapper that runs the SimulationClock on a background thread.

The API reads from an atomically-swapped immutable Snapshot and pushes
intents into the clock's CommandQueue; the GameStateMachine is only touched
by whoever holds the engine lock (Single-Writer preserved).
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING

from mazerun.core.snapshot import Snapshot
from mazerun.engine.clock import SimulationClock
from mazerun.engine.command_queue import CommandQueue
from mazerun.engine.game_state import GameStateMachine
from mazerun.systems.rng import DeterministicRNG
from mazerun.utils.event_log import EventLog, SimEvent

if TYPE_CHECKING:
    from mazerun.config import MazeConfig
    from mazerun.core.enums import Direction
    from mazerun.core.grid import Grid

logger = logging.getLogger(__name__)


class EngineManager:
    """Owns one GameStateMachine + SimulationClock and the thread that drives them.

    Real time is converted to virtual milliseconds (scaled by ``speed``) and
    fed to the clock once per frame. Everything the API reads goes through
    the latest published Snapshot or the EventLog; intents go through the
    clock's CommandQueue.
    """

    def __init__(self, config: MazeConfig) -> None:
        self.config = config
        self._speed: float = 1.0  # virtual ms per real ms

        # Simulation components (built in _build)
        self._commands = CommandQueue()
        self._state: GameStateMachine | None = None
        self._clock: SimulationClock | None = None

        # Thread-safe shared state. _engine_lock serialises every caller of
        # clock.advance and every rebuild; only its holder touches the state.
        self._engine_lock = threading.Lock()
        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: Snapshot | None = None
        self._event_log = EventLog()

        # Counters
        self._rounds_won: int = 0
        self._rounds_lost: int = 0

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def speed(self) -> float:
        return self._speed

    @speed.setter
    def speed(self, value: float) -> None:
        self._speed = max(0.1, min(value, 10.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def rounds_won(self) -> int:
        return self._rounds_won

    @property
    def rounds_lost(self) -> int:
        return self._rounds_lost

    # -- snapshot access --

    def get_snapshot(self) -> Snapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    def get_grid(self) -> Grid | None:
        """Return the grid of the current maze from the latest snapshot."""
        snap = self.get_snapshot()
        return snap.grid if snap else None

    # -- input --

    def submit_intent(self, direction: Direction) -> bool:
        """Queue a directional intent. False if the clock has been stopped."""
        return self._commands.push(direction)

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="engine-loop", daemon=True)
        self._thread.start()
        logger.info("EngineManager started (frame=%.3fs, speed=%.1fx)", self.config.frame_seconds, self._speed)

    def pause(self) -> None:
        self._paused.set()
        logger.info("EngineManager paused at %d ms", self._current_time())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("EngineManager resumed at %d ms", self._current_time())

    def step(self) -> None:
        """Advance exactly one ``step_ms`` of virtual time (must be paused).

        Without a running engine thread the step runs on the calling thread,
        serialised with every other writer by the engine lock.
        """
        if not self._running.is_set():
            self._advance(self.config.step_ms)
            return
        if not self._paused.is_set():
            self.pause()
        self._step_requested.set()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        self._thread = None
        logger.info("EngineManager stopped.")

    def reset(self) -> None:
        """Stop, rebuild, and leave stopped with a fresh snapshot published."""
        self.stop()
        with self._engine_lock:
            if self._clock:
                self._clock.stop()
            self._event_log.clear()
            self._commands = CommandQueue()
            self._rounds_won = 0
            self._rounds_lost = 0
            self._build()
        logger.info("EngineManager reset.")

    # -- internals --

    def _build(self) -> None:
        """Construct all simulation components from config.

        Called from ``__init__`` or with ``_engine_lock`` held.
        """
        cfg = self.config
        rng = DeterministicRNG(cfg.world_seed)
        self._state = GameStateMachine(cfg, rng)
        self._clock = SimulationClock(cfg, self._state, self._commands)
        self._publish_snapshot_and_events()

    def _advance(self, ms: int) -> None:
        with self._engine_lock:
            assert self._clock is not None
            self._clock.advance(ms)
            self._publish_snapshot_and_events()

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Engine thread started.")
        last = time.perf_counter()
        carry_ms = 0.0

        try:
            while not self._stop_requested.is_set():
                if self._paused.is_set() and not self._step_requested.is_set():
                    time.sleep(0.01)
                    last = time.perf_counter()
                    continue

                if self._step_requested.is_set():
                    self._step_requested.clear()
                    self._advance(self.config.step_ms)
                    last = time.perf_counter()
                    continue

                now = time.perf_counter()
                carry_ms += (now - last) * 1000.0 * self._speed
                last = now
                whole_ms = int(carry_ms)
                carry_ms -= whole_ms
                self._advance(whole_ms)

                time.sleep(self.config.frame_seconds)
        except Exception:
            logger.exception("Engine thread crashed at %d ms", self._current_time())
            raise
        finally:
            self._running.clear()
            logger.info("Engine thread exited.")

    def _publish_snapshot_and_events(self) -> None:
        """Swap snapshot + push events produced since the last publish."""
        assert self._state is not None
        snap = self._state.snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap

        events: list[SimEvent] = self._state.drain_events()
        if events:
            self._event_log.append_many(events)
            self._rounds_won += sum(1 for e in events if e.category == "win")
            self._rounds_lost += sum(1 for e in events if e.category == "loss")

    def _current_time(self) -> int:
        if self._clock:
            return self._clock.now_ms
        return 0
