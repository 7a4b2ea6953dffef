"""Constrained random placement of entities on floor cells."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, AbstractSet

from mazerun.core.models import Vector2

if TYPE_CHECKING:
    from mazerun.core.grid import Grid
    from mazerun.systems.rng import RandomStream

logger = logging.getLogger(__name__)


class PlacementAllocator:
    """Scatters up to *count* entities per call under exclusion constraints.

    Each item gets a fixed budget of uniform whole-grid samples. An item
    that finds no valid cell within budget is dropped, so callers must
    accept lists shorter than requested.
    """

    __slots__ = ("_attempts",)

    def __init__(self, attempts_per_item: int = 50) -> None:
        self._attempts = attempts_per_item

    def place(
        self,
        grid: Grid,
        count: int,
        excluded: AbstractSet[Vector2],
        corner_restricted: bool,
        stream: RandomStream,
    ) -> list[Vector2]:
        positions: list[Vector2] = []
        taken: set[Vector2] = set()
        for item in range(count):
            pos = self._sample_one(grid, excluded, taken, corner_restricted, stream)
            if pos is None:
                logger.debug("Placement budget exhausted for item %d/%d", item + 1, count)
                continue
            positions.append(pos)
            taken.add(pos)
        return positions

    def _sample_one(
        self,
        grid: Grid,
        excluded: AbstractSet[Vector2],
        taken: set[Vector2],
        corner_restricted: bool,
        stream: RandomStream,
    ) -> Vector2 | None:
        size = grid.size
        for _ in range(self._attempts):
            pos = Vector2(stream.randrange(size), stream.randrange(size))
            if not grid.is_floor(pos) or grid.is_corner(pos):
                continue
            if pos in excluded or pos in taken:
                continue
            if corner_restricted and not (pos.x < 2 or pos.x > size - 3):
                continue
            return pos
        return None
