"""SimulationClock: schedules the periodic processes against virtual time.

Three periodic tasks (adversary AI, power countdown, master countdown)
and a one-shot auto-reset share one virtual millisecond clock. Queued
player intents are drained before and between task firings. Everything
runs to completion on the calling thread, so mutations never interleave.

After every callback the clock compares the state's epoch counters with
the ones it last saw and restarts the affected timer phases. A pending
reset is tagged with the maze epoch it was scheduled against and is
dropped if the maze has been replaced since.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from mazerun.engine.command_queue import CommandQueue

if TYPE_CHECKING:
    from mazerun.config import MazeConfig
    from mazerun.core.enums import Direction
    from mazerun.engine.game_state import GameStateMachine

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScheduledTask:
    """A timer on the virtual clock. Lower priority fires first on ties."""

    name: str
    priority: int
    interval_ms: int
    callback: Callable[[], None]
    next_due_ms: int
    repeat: bool = True
    active: bool = True

    def cancel(self) -> None:
        self.active = False

    def restart(self, now_ms: int) -> None:
        self.next_due_ms = now_ms + self.interval_ms
        self.active = True


class SimulationClock:
    """Drives a GameStateMachine through virtual time."""

    __slots__ = (
        "_config",
        "_state",
        "_commands",
        "_adversary_task",
        "_power_task",
        "_master_task",
        "_reset_task",
        "_seen_maze_epoch",
        "_seen_round_epoch",
        "_seen_power_epoch",
        "_stopped",
        "now_ms",
    )

    def __init__(
        self,
        config: MazeConfig,
        state: GameStateMachine,
        commands: CommandQueue | None = None,
    ) -> None:
        self._config = config
        self._state = state
        self._commands = commands or CommandQueue()
        self.now_ms = 0
        self._stopped = False

        self._adversary_task = ScheduledTask(
            "adversary", 0, config.adversary_interval_ms, state.advance_adversaries,
            config.adversary_interval_ms,
        )
        self._power_task = ScheduledTask(
            "power", 1, config.power_interval_ms, state.tick_power, config.power_interval_ms,
        )
        self._master_task = ScheduledTask(
            "master", 2, config.clock_interval_ms, state.tick_clock, config.clock_interval_ms,
        )
        self._reset_task: ScheduledTask | None = None

        self._seen_maze_epoch = state.maze_epoch
        self._seen_round_epoch = state.round_epoch
        self._seen_power_epoch = state.power_epoch
        state.time_ms = 0

    # -- public --

    @property
    def state(self) -> GameStateMachine:
        return self._state

    @property
    def commands(self) -> CommandQueue:
        return self._commands

    @property
    def reset_pending(self) -> bool:
        return self._reset_task is not None and self._reset_task.active

    @property
    def stopped(self) -> bool:
        return self._stopped

    def tasks(self) -> list[ScheduledTask]:
        tasks = [self._adversary_task, self._power_task, self._master_task]
        if self._reset_task is not None:
            tasks.append(self._reset_task)
        return tasks

    def submit(self, direction: Direction) -> bool:
        """Queue a player intent for the next ``advance``. False once stopped."""
        return self._commands.push(direction)

    def advance(self, ms: int) -> None:
        """Advance virtual time by *ms*, firing every task that falls due."""
        if ms < 0:
            raise ValueError(f"cannot advance by a negative duration ({ms} ms)")
        if self._stopped:
            return

        target = self.now_ms + ms
        self._drain_commands()
        while True:
            task = self._next_due(target)
            if task is None:
                break
            self._set_time(task.next_due_ms)
            self._fire(task)
            self._drain_commands()
        self._set_time(target)

    def stop(self) -> None:
        """Cancel every timer and close the intent queue. Safe to call more than once."""
        for task in self.tasks():
            task.cancel()
        self._commands.close()
        self._reset_task = None
        if not self._stopped:
            self._stopped = True
            logger.info("Clock stopped at %d ms", self.now_ms)

    # -- internals --

    def _set_time(self, now_ms: int) -> None:
        self.now_ms = now_ms
        self._state.time_ms = now_ms

    def _next_due(self, target_ms: int) -> ScheduledTask | None:
        due = [t for t in self.tasks() if t.active and t.next_due_ms <= target_ms]
        if not due:
            return None
        return min(due, key=lambda t: (t.next_due_ms, t.priority))

    def _fire(self, task: ScheduledTask) -> None:
        if task.repeat:
            task.next_due_ms += task.interval_ms
        else:
            task.active = False
        task.callback()
        self._sync()

    def _drain_commands(self) -> None:
        for direction in self._commands.drain():
            self._state.apply_player_intent(direction)
            self._sync()

    def _sync(self) -> None:
        state = self._state
        now = self.now_ms

        if state.maze_epoch != self._seen_maze_epoch:
            self._seen_maze_epoch = state.maze_epoch
            self._adversary_task.restart(now)
            if self._reset_task is not None:
                self._reset_task.cancel()
                self._reset_task = None

        if state.round_epoch != self._seen_round_epoch:
            self._seen_round_epoch = state.round_epoch
            self._master_task.restart(now)

        if state.power_epoch != self._seen_power_epoch:
            self._seen_power_epoch = state.power_epoch
            self._power_task.restart(now)

        if not state.round.playing and self._reset_task is None:
            epoch = state.maze_epoch
            self._reset_task = ScheduledTask(
                "reset", 3, self._config.reset_delay_ms,
                lambda: self._auto_reset(epoch),
                now + self._config.reset_delay_ms,
                repeat=False,
            )
            logger.debug("Auto-reset scheduled for %d ms (maze epoch %d)", self._reset_task.next_due_ms, epoch)

    def _auto_reset(self, epoch: int) -> None:
        self._reset_task = None
        if self._state.maze_epoch != epoch:
            logger.debug("Dropping stale reset for maze epoch %d", epoch)
            return
        self._state.reset_round()
