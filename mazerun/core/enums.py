"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Material(IntEnum):
    """Cell kinds on the maze grid."""

    FLOOR = 0
    WALL = 1


@unique
class Direction(IntEnum):
    """The four directional intents a player can send."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


@unique
class Dimension(IntEnum):
    """Maze theme. Portals toggle between the two."""

    NORMAL = 0
    ALT = 1     # the "water" dimension

    def toggled(self) -> Dimension:
        return Dimension.ALT if self is Dimension.NORMAL else Dimension.NORMAL


@unique
class Outcome(IntEnum):
    """Round outcome. WON and LOST are transient; the clock resets them."""

    PLAYING = 0
    WON = 1
    LOST = 2


@unique
class LossCause(IntEnum):
    """Why a round ended in LOST."""

    NONE = 0
    TIME = 1
    HAZARD = 2
    ADVERSARY = 3


@unique
class AdversaryKind(IntEnum):
    """Adversary variants. Behaviour is shared; kind only drives data tables."""

    ZOMBIE = 0
    SNAKE = 1
    CROCODILE = 2


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    MAP_GEN = 0
    PLACEMENT = 1
    SPAWN = 2
    AI_DECISION = 3
    REPRODUCTION = 4
