"""GameStateMachine: the single owner of all mutable round state.

Nothing else mutates the maze, the player or the round. The AI, generator
and allocator hand back plain values which this class installs. All entry
points are called from one logical thread (the SimulationClock), so a
collision pass never interleaves with an adversary tick.

States: PLAYING -> WON, PLAYING -> LOST. Both terminal states are
transient; the clock calls ``reset_round`` after a fixed delay.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mazerun.ai.adversary import AdversaryAI
from mazerun.core.enums import Direction, LossCause, Outcome
from mazerun.core.models import DIRECTION_OFFSETS, PlayerState, RoundState, Vector2
from mazerun.core.snapshot import Snapshot
from mazerun.systems.generator import MazeFactory
from mazerun.utils.event_log import SimEvent

if TYPE_CHECKING:
    from mazerun.config import MazeConfig
    from mazerun.core.world_state import MazeWorld
    from mazerun.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


def _checked(world: MazeWorld) -> MazeWorld:
    """Reject a maze whose portal and hazard sets overlap."""
    shared = world.portals & world.hazards
    if shared:
        cells = ", ".join(sorted(repr(p) for p in shared))
        raise ValueError(f"portal and hazard share cell(s): {cells}")
    return world


class GameStateMachine:
    """Owns the live maze, player and round; resolves every interaction.

    Epoch counters let schedulers notice replacements without holding
    references into the state:

    - ``maze_epoch`` bumps whenever the grid and entity sets are replaced
    - ``round_epoch`` bumps on every win/loss reset
    - ``power_epoch`` bumps on every fresh power pickup
    """

    __slots__ = (
        "_config",
        "_factory",
        "_ai",
        "world",
        "player",
        "round",
        "maze_epoch",
        "round_epoch",
        "power_epoch",
        "adversary_ticks",
        "time_ms",
        "_events",
    )

    def __init__(
        self,
        config: MazeConfig,
        rng: DeterministicRNG,
        factory: MazeFactory | None = None,
        ai: AdversaryAI | None = None,
        world: MazeWorld | None = None,
    ) -> None:
        self._config = config
        self._factory = factory or MazeFactory(config, rng)
        self._ai = ai or AdversaryAI(config, rng)
        self.player = PlayerState()
        self.round = RoundState(ticks_remaining=config.round_ticks)
        self.maze_epoch = 0
        self.round_epoch = 0
        self.power_epoch = 0
        self.adversary_ticks = 0
        self.time_ms = 0
        self._events: list[SimEvent] = []
        self.world = _checked(world) if world is not None else self._factory.build(self.round.dimension)
        self.round.dimension = self.world.dimension

    # -- events --

    def _emit(self, category: str, message: str) -> None:
        self._events.append(SimEvent(time_ms=self.time_ms, category=category, message=message))

    def drain_events(self) -> list[SimEvent]:
        events, self._events = self._events, []
        return events

    # -- read side --

    @property
    def outcome(self) -> Outcome:
        return self.round.outcome

    def snapshot(self) -> Snapshot:
        return Snapshot.from_state(self, self.time_ms)

    # -- maze replacement --

    def install_maze(self, world: MazeWorld) -> None:
        """Swap in a new maze instance and put the player back on the entry.

        Raises ValueError if a portal and a hazard share a cell.
        """
        self.world = _checked(world)
        self.round.dimension = world.dimension
        self.player.pos = Vector2(0, 0)
        self.maze_epoch += 1

    def reset_round(self) -> None:
        """Fresh maze in the current dimension with initial timers."""
        self.player.clear_power()
        self.round.ticks_remaining = self._config.round_ticks
        self.round.outcome = Outcome.PLAYING
        self.round.loss_cause = LossCause.NONE
        self.install_maze(self._factory.build(self.round.dimension))
        self.round_epoch += 1
        logger.info("Round reset (%s dimension, maze epoch %d)", self.round.dimension.name, self.maze_epoch)
        self._emit("reset", f"New round in the {self.round.dimension.name.lower()} dimension")

    # -- player --

    def apply_player_intent(self, direction: Direction) -> bool:
        """Move one cell if possible. Returns True if the player moved."""
        if not self.round.playing:
            return False

        grid = self.world.grid
        target = self.player.pos + DIRECTION_OFFSETS[direction]
        if not grid.in_bounds(target) or not grid.is_floor(target):
            return False

        self.player.pos = target
        logger.debug("Player moved %s to %s", direction.name, target)

        if target == grid.exit:
            self._win()
            return True

        self.resolve_collisions()
        return True

    def resolve_collisions(self) -> None:
        """Resolve the player's cell against every entity set, in fixed order.

        Order: power item, adversary, portal, hazard. All checks use the
        position at entry; the pass ends as soon as the round is decided or
        the maze is replaced.
        """
        if not self.round.playing:
            return

        pos = self.player.pos
        world = self.world

        if world.take_power_item(pos):
            self._grant_power()

        if world.adversaries_at(pos):
            if self.player.has_power:
                removed = world.remove_adversaries_at(pos)
                self._emit("combat", f"Defeated {removed} adversar{'y' if removed == 1 else 'ies'} at {pos}")
            else:
                self._lose(LossCause.ADVERSARY)
                return

        if pos in world.portals:
            self._travel()
            return

        if pos in world.hazards:
            self._lose(LossCause.HAZARD)

    def _grant_power(self) -> None:
        self.player.has_power = True
        self.player.power_ticks_remaining = self._config.power_duration_ticks
        self.power_epoch += 1
        self._emit("pickup", f"Power for {self._config.power_duration_ticks} ticks")

    def _travel(self) -> None:
        new_dim = self.round.dimension.toggled()
        self.player.clear_power()
        self.install_maze(self._factory.build(new_dim))
        logger.info("Portal: switched to %s dimension (%d ticks left)", new_dim.name, self.round.ticks_remaining)
        self._emit("portal", f"Entered the {new_dim.name.lower()} dimension")

    # -- outcomes --

    def _win(self) -> None:
        self.round.outcome = Outcome.WON
        logger.info("Exit reached with %d ticks left", self.round.ticks_remaining)
        self._emit("win", "Found the exit")

    def _lose(self, cause: LossCause) -> None:
        self.round.outcome = Outcome.LOST
        self.round.loss_cause = cause
        logger.info("Round lost (%s) at %s", cause.name, self.player.pos)
        self._emit("loss", f"Lost: {cause.name.lower()}")

    # -- periodic processes --

    def tick_power(self) -> None:
        if not self.player.has_power:
            return
        self.player.power_ticks_remaining -= 1
        if self.player.power_ticks_remaining <= 0:
            self.player.clear_power()
            self._emit("power", "Power expired")

    def tick_clock(self) -> None:
        if not self.round.playing:
            return
        self.round.ticks_remaining -= 1
        if self.round.ticks_remaining <= 0:
            self.round.ticks_remaining = 0
            self._lose(LossCause.TIME)

    def advance_adversaries(self) -> None:
        """Run one AI tick. Does not trigger collision resolution."""
        if not self.round.playing:
            return
        self.adversary_ticks += 1
        world = self.world
        before = len(world.adversaries)
        world.adversaries = self._ai.step(
            world.grid,
            world.adversaries,
            self.player.pos,
            world.hazards,
            world.portals,
            tick=self.adversary_ticks,
        )
        if len(world.adversaries) > before:
            child = world.adversaries[-1]
            self._emit("spawn", f"A {child.kind.name.lower()} multiplied at {child.pos}")
