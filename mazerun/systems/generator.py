"""Maze factory: grid generation followed by category-ordered entity placement."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mazerun.core.enums import AdversaryKind, Dimension, Domain
from mazerun.core.models import Adversary, Vector2
from mazerun.core.world_state import MazeWorld
from mazerun.systems.maze import MazeGenerator
from mazerun.systems.placement import PlacementAllocator

if TYPE_CHECKING:
    from mazerun.config import MazeConfig
    from mazerun.systems.rng import DeterministicRNG, RandomStream

logger = logging.getLogger(__name__)


# Which kinds each dimension spawns; one is picked uniformly per adversary.
DIMENSION_ROSTER: dict[Dimension, tuple[AdversaryKind, ...]] = {
    Dimension.NORMAL: (AdversaryKind.ZOMBIE,),
    Dimension.ALT: (AdversaryKind.SNAKE, AdversaryKind.CROCODILE),
}


class MazeFactory:
    """Builds complete maze instances for a dimension.

    Placement runs portals, hazards, power items, then adversaries one at
    a time, each call excluding the union of everything placed before it,
    so no two entities share a cell at creation.
    """

    __slots__ = ("_config", "_rng", "_generator", "_allocator", "_serial")

    def __init__(self, config: MazeConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng
        self._generator = MazeGenerator(config, rng)
        self._allocator = PlacementAllocator(config.placement_attempts)
        self._serial = 0

    @property
    def built(self) -> int:
        """Number of mazes built so far."""
        return self._serial

    def adversary_count(self, dimension: Dimension) -> int:
        if dimension == Dimension.NORMAL:
            return self._config.adversary_count_normal
        return self._config.adversary_count_alt

    def build(self, dimension: Dimension) -> MazeWorld:
        key = self._serial
        self._serial += 1
        cfg = self._config

        grid = self._generator.generate(cfg.maze_size, key=key)
        stream = self._rng.stream(Domain.PLACEMENT, key)

        portals = self._allocator.place(grid, cfg.portal_count, set(), True, stream)
        excluded: set[Vector2] = set(portals)
        hazards = self._allocator.place(grid, cfg.hazard_count, excluded, False, stream)
        excluded.update(hazards)
        power_items = self._allocator.place(grid, cfg.power_item_count, excluded, False, stream)
        excluded.update(power_items)

        kind_stream = self._rng.stream(Domain.SPAWN, key)
        adversaries: list[Adversary] = []
        for _ in range(self.adversary_count(dimension)):
            placed = self._allocator.place(grid, 1, excluded, False, stream)
            if not placed:
                continue
            adversaries.append(Adversary(pos=placed[0], kind=self._roll_kind(dimension, kind_stream)))
            excluded.add(placed[0])

        logger.info(
            "Built maze #%d (%s): %d portals, %d hazards, %d power items, %d adversaries",
            key, dimension.name, len(portals), len(hazards), len(power_items), len(adversaries),
        )
        return MazeWorld(
            grid=grid,
            dimension=dimension,
            portals=frozenset(portals),
            hazards=frozenset(hazards),
            power_items=set(power_items),
            adversaries=adversaries,
        )

    @staticmethod
    def _roll_kind(dimension: Dimension, stream: RandomStream) -> AdversaryKind:
        return stream.choice(DIMENSION_ROSTER[dimension])
