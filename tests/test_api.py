"""Tests for the REST API: state, map, input, control, speed, config, stats.

Runs the real app (lifespan included) with autostart off, so the engine
only advances when a test asks for a step.
"""

import sys
import os
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from mazerun.api.app import create_app
from mazerun.api.dependencies import get_engine_manager, set_engine_manager
from mazerun.config import MazeConfig
from mazerun.core.models import Vector2


@pytest.fixture
def client():
    app = create_app(MazeConfig(world_seed=42, autostart=False), configure_logging=False)
    with TestClient(app) as c:
        yield c


def _manager(client):
    return client.app.state.engine_manager


class TestState:
    def test_initial_state(self, client):
        resp = client.get("/api/v1/state")
        assert resp.status_code == 200
        data = resp.json()
        assert data["time_ms"] == 0
        assert data["player"] == {"x": 0, "y": 0, "has_power": False, "power_ticks_remaining": 0}
        assert data["round"]["ticks_remaining"] == 30
        assert data["round"]["dimension"] == "normal"
        assert data["round"]["outcome"] == "playing"
        assert data["round"]["loss_cause"] == "none"
        assert all(a["kind"] == "zombie" for a in data["adversaries"])
        assert len(data["portals"]) <= 2

    def test_503_without_snapshot(self):
        stub = MagicMock()
        stub.get_snapshot.return_value = None
        app = create_app(MazeConfig(autostart=False), configure_logging=False)
        app.dependency_overrides[get_engine_manager] = lambda: stub
        with TestClient(app) as c:
            assert c.get("/api/v1/state").status_code == 503
            assert c.get("/api/v1/map").status_code == 503

    def test_negative_since_rejected(self, client):
        assert client.get("/api/v1/state", params={"since_ms": -1}).status_code == 422


class TestMap:
    def test_rle_covers_grid(self, client):
        data = client.get("/api/v1/map").json()
        assert data["size"] == 10
        assert data["maze_epoch"] == 0
        rle = data["grid"]
        assert sum(rle[1::2]) == 100
        assert set(rle[0::2]) <= {0, 1}
        assert rle[0] == 0  # entry is floor

    def test_matches_engine_grid(self, client):
        rle = client.get("/api/v1/map").json()["grid"]
        assert rle == _manager(client).get_grid().run_length_encode()


class TestInput:
    def test_intent_is_queued_then_applied_on_step(self, client):
        resp = client.post("/api/v1/input/right")
        assert resp.status_code == 200
        assert resp.json()["status"] == "queued"
        assert resp.json()["direction"] == "right"

        snap = _manager(client).get_snapshot()
        target = Vector2(1, 0)
        # a portal sends the player back to the entry of a fresh maze
        expected_x = 1 if snap.grid.is_floor(target) and target not in snap.portals else 0

        assert client.post("/api/v1/control/step").json()["time_ms"] == 100
        player = client.get("/api/v1/state").json()["player"]
        assert (player["x"], player["y"]) == (expected_x, 0)

    def test_unknown_direction_rejected(self, client):
        assert client.post("/api/v1/input/diagonal").status_code == 422

    def test_intents_accepted_after_reset(self, client):
        client.post("/api/v1/control/reset")
        resp = client.post("/api/v1/input/down")
        assert resp.json()["status"] == "queued"


class TestControl:
    def test_step_advances_virtual_time(self, client):
        for _ in range(3):
            client.post("/api/v1/control/step")
        assert client.get("/api/v1/state").json()["time_ms"] == 300

    def test_ten_seconds_of_steps_tick_the_countdown(self, client):
        for _ in range(100):
            client.post("/api/v1/control/step")
        assert client.get("/api/v1/state").json()["round"]["ticks_remaining"] == 20

    def test_pause_when_not_running(self, client):
        resp = client.post("/api/v1/control/pause")
        assert resp.json()["status"] == "error"

    def test_start_then_reset(self, client):
        assert client.post("/api/v1/control/start").json()["status"] == "ok"
        assert client.post("/api/v1/control/start").json()["status"] == "noop"
        assert client.get("/api/v1/stats").json()["running"] is True

        resp = client.post("/api/v1/control/reset")
        assert resp.json()["status"] == "ok"
        assert resp.json()["time_ms"] == 0
        stats = client.get("/api/v1/stats").json()
        assert stats["running"] is False
        assert stats["rounds_won"] == 0
        assert stats["rounds_lost"] == 0

    def test_reset_restores_same_maze(self, client):
        before = client.get("/api/v1/map").json()["grid"]
        for _ in range(5):
            client.post("/api/v1/control/step")
        client.post("/api/v1/control/reset")
        assert client.get("/api/v1/map").json()["grid"] == before

    def test_unknown_action_rejected(self, client):
        assert client.post("/api/v1/control/explode").status_code == 422


class TestSpeedAndConfig:
    def test_speed_round_trip(self, client):
        assert client.post("/api/v1/speed", params={"factor": 2.5}).json()["status"] == "ok"
        assert client.get("/api/v1/config").json()["speed"] == 2.5

    def test_speed_out_of_range(self, client):
        assert client.post("/api/v1/speed", params={"factor": 20}).status_code == 422

    def test_config_values(self, client):
        data = client.get("/api/v1/config").json()
        assert data["world_seed"] == 42
        assert data["maze_size"] == 10
        assert data["adversary_cap"] == 12
        assert data["adversary_interval_ms"] == 700
        assert data["reset_delay_ms"] == 2000


class TestStats:
    def test_loss_counted(self, client):
        # No moves: 30 s of steps ends the round on time.
        for _ in range(300):
            client.post("/api/v1/control/step")
        stats = client.get("/api/v1/stats").json()
        assert stats["rounds_lost"] == 1
        assert stats["rounds_won"] == 0
        events = client.get("/api/v1/state", params={"since_ms": 29_000}).json()["events"]
        assert any(e["category"] == "loss" for e in events)


class TestDependencies:
    def test_unset_manager_raises(self):
        set_engine_manager(None)
        with pytest.raises(RuntimeError):
            get_engine_manager()
