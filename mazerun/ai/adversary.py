"""Adversary movement and reproduction policy.

Every tick each adversary takes one step: with ``chase_probability`` the
valid move closest (Manhattan) to the player, otherwise a uniformly random
valid move. Afterwards at most one adversary may reproduce into a free
neighbouring cell, until the population cap is reached.

The policy is pure: it reads the grid and positions and returns a new
adversary list. Installing that list is the game state machine's job.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, AbstractSet

from mazerun.core.enums import Domain
from mazerun.core.models import Adversary, Vector2

if TYPE_CHECKING:
    from mazerun.config import MazeConfig
    from mazerun.core.grid import Grid
    from mazerun.systems.rng import DeterministicRNG, RandomStream

logger = logging.getLogger(__name__)


def closest_move(moves: list[Vector2], target: Vector2) -> Vector2:
    """First move with minimal Manhattan distance to *target* (stable on ties)."""
    best = moves[0]
    best_dist = best.manhattan(target)
    for move in moves[1:]:
        dist = move.manhattan(target)
        if dist < best_dist:
            best, best_dist = move, dist
    return best


class AdversaryAI:
    """Per-tick policy for all adversaries of one maze."""

    __slots__ = ("_config", "_rng")

    def __init__(self, config: MazeConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng

    def step(
        self,
        grid: Grid,
        adversaries: list[Adversary],
        player_pos: Vector2,
        hazards: AbstractSet[Vector2],
        portals: AbstractSet[Vector2],
        tick: int,
    ) -> list[Adversary]:
        """Move every adversary, then maybe spawn one child. Returns a new list."""
        move_stream = self._rng.stream(Domain.AI_DECISION, tick)
        moved = [self.move(grid, adv, player_pos, move_stream) for adv in adversaries]

        child = self.reproduce(grid, moved, hazards, portals, self._rng.stream(Domain.REPRODUCTION, tick))
        if child is not None:
            moved.append(child)
        return moved

    def move(self, grid: Grid, adversary: Adversary, player_pos: Vector2, stream: RandomStream) -> Adversary:
        moves = grid.floor_neighbors(adversary.pos)
        if not moves:
            return adversary
        if stream.chance(self._config.chase_probability):
            return adversary.moved_to(closest_move(moves, player_pos))
        return adversary.moved_to(stream.choice(moves))

    def reproduce(
        self,
        grid: Grid,
        adversaries: list[Adversary],
        hazards: AbstractSet[Vector2],
        portals: AbstractSet[Vector2],
        stream: RandomStream,
    ) -> Adversary | None:
        """Roll for a single reproduction event; return the child, if any."""
        if not adversaries or len(adversaries) >= self._config.adversary_cap:
            return None
        if not stream.chance(self._config.reproduction_probability):
            return None

        parent = stream.choice(adversaries)
        occupied = {a.pos for a in adversaries}
        candidates = [
            pos for pos in grid.floor_neighbors(parent.pos)
            if pos not in occupied and pos not in hazards and pos not in portals
        ]
        if not candidates:
            return None

        child = Adversary(pos=stream.choice(candidates), kind=parent.kind)
        logger.debug("%s at %s spawned a child at %s", parent.kind.name, parent.pos, child.pos)
        return child
