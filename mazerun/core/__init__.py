"""Core data models and maze representation."""

from mazerun.core.enums import AdversaryKind, Dimension, Direction, Domain, LossCause, Material, Outcome
from mazerun.core.models import Adversary, PlayerState, RoundState, Vector2
from mazerun.core.grid import Grid
from mazerun.core.world_state import MazeWorld
from mazerun.core.snapshot import Snapshot

__all__ = [
    "Adversary",
    "AdversaryKind",
    "Dimension",
    "Direction",
    "Domain",
    "Grid",
    "LossCause",
    "Material",
    "MazeWorld",
    "Outcome",
    "PlayerState",
    "RoundState",
    "Snapshot",
    "Vector2",
]
