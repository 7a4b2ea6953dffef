"""Engine systems: RNG, maze generation, entity placement."""

from mazerun.systems.rng import DeterministicRNG, RandomStream
from mazerun.systems.maze import MazeGenerator, has_path
from mazerun.systems.placement import PlacementAllocator
from mazerun.systems.generator import DIMENSION_ROSTER, MazeFactory

__all__ = [
    "DIMENSION_ROSTER",
    "DeterministicRNG",
    "MazeFactory",
    "MazeGenerator",
    "PlacementAllocator",
    "RandomStream",
    "has_path",
]
