"""MazeArena: scenario fixture for the game state machine and clock.

Builds a hand-made maze (open floor by default) with exactly the entities
a test asks for, wires a GameStateMachine and SimulationClock around it,
and exposes small helpers for moving the player and advancing time.

Usage:
    arena = MazeArena(hazards=[(1, 0)])
    arena.move("right")
    assert arena.state.outcome == Outcome.LOST
"""

from __future__ import annotations

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from mazerun.config import MazeConfig
from mazerun.core.enums import AdversaryKind, Dimension, Direction
from mazerun.core.grid import Grid
from mazerun.core.models import Adversary, Vector2
from mazerun.core.world_state import MazeWorld
from mazerun.engine.clock import SimulationClock
from mazerun.engine.game_state import GameStateMachine
from mazerun.systems.rng import DeterministicRNG


def make_config(**overrides) -> MazeConfig:
    return MazeConfig(**overrides)


def build_world(
    rows: list[str] | None = None,
    size: int = 10,
    dimension: Dimension = Dimension.NORMAL,
    portals=(),
    hazards=(),
    power_items=(),
    adversaries=(),
) -> MazeWorld:
    """Hand-made maze instance. ``adversaries`` takes (x, y) or (x, y, kind)."""
    grid = Grid.from_rows(rows) if rows else Grid(size)
    advs: list[Adversary] = []
    for entry in adversaries:
        kind = entry[2] if len(entry) > 2 else AdversaryKind.ZOMBIE
        advs.append(Adversary(pos=Vector2(entry[0], entry[1]), kind=kind))
    return MazeWorld(
        grid=grid,
        dimension=dimension,
        portals=frozenset(Vector2(x, y) for x, y in portals),
        hazards=frozenset(Vector2(x, y) for x, y in hazards),
        power_items={Vector2(x, y) for x, y in power_items},
        adversaries=advs,
    )


class MazeArena:
    """A GameStateMachine + SimulationClock around one hand-made maze."""

    def __init__(self, seed: int = 42, config: MazeConfig | None = None, **world_kwargs) -> None:
        self.config = config or make_config(world_seed=seed)
        self.rng = DeterministicRNG(self.config.world_seed)
        self.world = build_world(**world_kwargs)
        self.state = GameStateMachine(self.config, self.rng, world=self.world)
        self.clock = SimulationClock(self.config, self.state)

    @property
    def player(self):
        return self.state.player

    def place_player(self, x: int, y: int) -> None:
        self.state.player.pos = Vector2(x, y)

    def move(self, *directions: str) -> list[bool]:
        """Apply intents directly (no clock involved)."""
        return [self.state.apply_player_intent(Direction[d.upper()]) for d in directions]

    def submit(self, *directions: str) -> None:
        """Queue intents on the clock; they apply on the next advance."""
        for d in directions:
            self.clock.submit(Direction[d.upper()])

    def advance(self, ms: int) -> None:
        self.clock.advance(ms)

    def task(self, name: str):
        return next(t for t in self.clock.tasks() if t.name == name)
