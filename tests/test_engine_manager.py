"""Tests for the EngineManager outside the HTTP layer: stepping and resets."""

import sys
import os
import threading
import time

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from mazerun.api.engine_manager import EngineManager
from mazerun.config import MazeConfig
from mazerun.core.enums import Direction
from mazerun.engine.clock import SimulationClock


class TestConcurrentSteps:
    def test_steps_from_many_threads_never_overlap(self, monkeypatch):
        manager = EngineManager(MazeConfig(world_seed=42, autostart=False))
        original = SimulationClock.advance
        gate = threading.Lock()
        inside = 0
        peak = 0

        def slow_advance(clock, ms):
            nonlocal inside, peak
            with gate:
                inside += 1
                peak = max(peak, inside)
            try:
                time.sleep(0.05)
                original(clock, ms)
            finally:
                with gate:
                    inside -= 1

        monkeypatch.setattr(SimulationClock, "advance", slow_advance)

        threads = [threading.Thread(target=manager.step) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5.0)

        assert peak == 1
        assert manager.get_snapshot().time_ms == 400

    def test_step_and_reset_race_leaves_consistent_state(self):
        manager = EngineManager(MazeConfig(world_seed=42, autostart=False))
        threads = [threading.Thread(target=manager.step) for _ in range(3)]
        threads.append(threading.Thread(target=manager.reset))
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5.0)

        snap = manager.get_snapshot()
        assert snap.time_ms % manager.config.step_ms == 0
        assert snap.time_ms <= 300


class TestReset:
    def test_reset_opens_a_fresh_intent_queue(self):
        manager = EngineManager(MazeConfig(world_seed=42, autostart=False))
        assert manager.submit_intent(Direction.RIGHT)
        manager.reset()
        assert manager.submit_intent(Direction.RIGHT)

    def test_reset_clears_counters_and_log(self):
        manager = EngineManager(MazeConfig(world_seed=42, autostart=False))
        for _ in range(5):
            manager.step()
        manager.reset()
        assert manager.get_snapshot().time_ms == 0
        assert manager.rounds_won == 0
        assert manager.rounds_lost == 0
        assert len(manager.event_log) == 0
