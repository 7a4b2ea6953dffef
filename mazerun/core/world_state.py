"""One live maze instance: the grid plus every entity set placed on it."""

from __future__ import annotations

from dataclasses import dataclass, field

from mazerun.core.enums import Dimension
from mazerun.core.grid import Grid
from mazerun.core.models import Adversary, Vector2


@dataclass(slots=True)
class MazeWorld:
    """Grid and entity sets created together and destroyed together.

    Portals and hazards are fixed for the lifetime of the instance. Power
    items only shrink. Adversaries are replaced each AI tick by the list
    the AI returns.
    """

    grid: Grid
    dimension: Dimension = Dimension.NORMAL
    portals: frozenset[Vector2] = frozenset()
    hazards: frozenset[Vector2] = frozenset()
    power_items: set[Vector2] = field(default_factory=set)
    adversaries: list[Adversary] = field(default_factory=list)

    def adversaries_at(self, pos: Vector2) -> list[Adversary]:
        return [a for a in self.adversaries if a.pos == pos]

    def remove_adversaries_at(self, pos: Vector2) -> int:
        """Drop every adversary standing on *pos*; return how many went."""
        before = len(self.adversaries)
        self.adversaries = [a for a in self.adversaries if a.pos != pos]
        return before - len(self.adversaries)

    def take_power_item(self, pos: Vector2) -> bool:
        if pos in self.power_items:
            self.power_items.discard(pos)
            return True
        return False
