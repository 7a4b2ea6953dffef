"""Maze generation with guaranteed entry-to-exit solvability.

Primary strategy is rejection sampling: scatter walls independently,
keep the grid only if a BFS from the entry reaches the exit. Because that
loop has no natural bound, attempts are capped; past the cap a constructive
generator carves a monotone path first and scatters walls around it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mazerun.core.enums import Domain, Material
from mazerun.core.grid import Grid
from mazerun.core.models import Vector2

if TYPE_CHECKING:
    from mazerun.config import MazeConfig
    from mazerun.systems.rng import DeterministicRNG, RandomStream

logger = logging.getLogger(__name__)


def has_path(grid: Grid) -> bool:
    """True if the exit corner is 4-directionally reachable from the entry."""
    return grid.has_path(grid.entry, grid.exit)


class MazeGenerator:
    """Produces solvable wall/floor grids."""

    __slots__ = ("_config", "_rng")

    def __init__(self, config: MazeConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng

    def generate(self, size: int, key: int = 0) -> Grid:
        """Return a solvable *size* x *size* grid.

        *key* separates the random streams of successive mazes in one run.
        """
        stream = self._rng.stream(Domain.MAP_GEN, key)
        cap = self._config.max_generation_attempts
        attempts = 0
        while cap <= 0 or attempts < cap:
            attempts += 1
            grid = self._sample(size, stream)
            if has_path(grid):
                logger.debug("Maze #%d accepted after %d attempt(s)", key, attempts)
                return grid

        logger.warning(
            "Maze #%d: no solvable sample in %d attempts (p=%.2f); carving a path instead",
            key, attempts, self._config.wall_probability,
        )
        return self._carve(size, stream)

    def _sample(self, size: int, stream: RandomStream) -> Grid:
        p = self._config.wall_probability
        grid = Grid(size)
        for y in range(size):
            for x in range(size):
                if stream.random() < p:
                    grid.set(Vector2(x, y), Material.WALL)
        grid.set(grid.entry, Material.FLOOR)
        grid.set(grid.exit, Material.FLOOR)
        return grid

    def _carve(self, size: int, stream: RandomStream) -> Grid:
        """Constructive fallback: random right/down walk, then walls elsewhere."""
        path: set[Vector2] = set()
        x = y = 0
        path.add(Vector2(x, y))
        while (x, y) != (size - 1, size - 1):
            if x == size - 1:
                y += 1
            elif y == size - 1:
                x += 1
            elif stream.chance(0.5):
                x += 1
            else:
                y += 1
            path.add(Vector2(x, y))

        grid = self._sample(size, stream)
        for pos in path:
            grid.set(pos, Material.FLOOR)
        return grid
