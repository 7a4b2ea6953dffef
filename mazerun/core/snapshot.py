"""Immutable snapshot of the simulation for readers on other threads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mazerun.core.enums import AdversaryKind, Dimension, LossCause, Outcome
from mazerun.core.grid import Grid
from mazerun.core.models import Vector2

if TYPE_CHECKING:
    from mazerun.engine.game_state import GameStateMachine


def _sorted_cells(cells) -> tuple[Vector2, ...]:
    return tuple(sorted(cells, key=lambda p: (p.y, p.x)))


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of one moment of the game, safe to share across threads.

    Entities carry position and kind only; there is no stable identity.
    The grid is shared, not copied, since the engine never edits a live grid.
    """

    time_ms: int
    maze_epoch: int
    grid: Grid
    player_pos: Vector2
    has_power: bool
    power_ticks_remaining: int
    portals: tuple[Vector2, ...]
    hazards: tuple[Vector2, ...]
    power_items: tuple[Vector2, ...]
    adversaries: tuple[tuple[Vector2, AdversaryKind], ...]
    ticks_remaining: int
    dimension: Dimension
    outcome: Outcome
    loss_cause: LossCause

    @classmethod
    def from_state(cls, state: GameStateMachine, time_ms: int = 0) -> Snapshot:
        world = state.world
        player = state.player
        rnd = state.round
        return cls(
            time_ms=time_ms,
            maze_epoch=state.maze_epoch,
            grid=world.grid,
            player_pos=player.pos,
            has_power=player.has_power,
            power_ticks_remaining=player.power_ticks_remaining,
            portals=_sorted_cells(world.portals),
            hazards=_sorted_cells(world.hazards),
            power_items=_sorted_cells(world.power_items),
            adversaries=tuple((a.pos, a.kind) for a in world.adversaries),
            ticks_remaining=rnd.ticks_remaining,
            dimension=rnd.dimension,
            outcome=rnd.outcome,
            loss_cause=rnd.loss_cause,
        )

    @property
    def adversary_count(self) -> int:
        return len(self.adversaries)

    def fingerprint(self) -> str:
        """Compact textual digest input used by replay comparisons."""
        parts = [
            f"t={self.time_ms}",
            f"epoch={self.maze_epoch}",
            "grid=" + "/".join(self.grid.to_rows()),
            f"player={self.player_pos.x},{self.player_pos.y}|{int(self.has_power)}|{self.power_ticks_remaining}",
            "portals=" + ";".join(f"{p.x},{p.y}" for p in self.portals),
            "hazards=" + ";".join(f"{p.x},{p.y}" for p in self.hazards),
            "power=" + ";".join(f"{p.x},{p.y}" for p in self.power_items),
            "adv=" + ";".join(f"{p.x},{p.y}:{k.name}" for p, k in self.adversaries),
            f"round={self.ticks_remaining}|{self.dimension.name}|{self.outcome.name}|{self.loss_cause.name}",
        ]
        return "\n".join(parts)
