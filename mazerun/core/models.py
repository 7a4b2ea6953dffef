"""Core data models: Vector2, Adversary, PlayerState, RoundState."""

from __future__ import annotations

from dataclasses import dataclass

from mazerun.core.enums import AdversaryKind, Dimension, Direction, LossCause, Outcome


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def manhattan(self, other: Vector2) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


# Enumeration order matters: greedy chasing breaks ties by it.
DIRECTION_OFFSETS: dict[Direction, Vector2] = {
    Direction.UP: Vector2(0, -1),
    Direction.DOWN: Vector2(0, 1),
    Direction.LEFT: Vector2(-1, 0),
    Direction.RIGHT: Vector2(1, 0),
}


@dataclass(frozen=True, slots=True)
class Adversary:
    """A mobile adversary: position plus kind tag, nothing else."""

    pos: Vector2
    kind: AdversaryKind

    def moved_to(self, pos: Vector2) -> Adversary:
        return Adversary(pos=pos, kind=self.kind)


@dataclass(slots=True)
class PlayerState:
    """Mutable player state."""

    pos: Vector2 = Vector2(0, 0)
    has_power: bool = False
    power_ticks_remaining: int = 0

    def clear_power(self) -> None:
        self.has_power = False
        self.power_ticks_remaining = 0


@dataclass(slots=True)
class RoundState:
    """Mutable round state: countdown, dimension and outcome."""

    ticks_remaining: int = 30
    dimension: Dimension = Dimension.NORMAL
    outcome: Outcome = Outcome.PLAYING
    loss_cause: LossCause = LossCause.NONE

    @property
    def playing(self) -> bool:
        return self.outcome == Outcome.PLAYING
