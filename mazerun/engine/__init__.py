"""Engine layer: game state machine, simulation clock, command queue."""

from mazerun.engine.command_queue import CommandQueue
from mazerun.engine.game_state import GameStateMachine
from mazerun.engine.clock import ScheduledTask, SimulationClock

__all__ = ["CommandQueue", "GameStateMachine", "ScheduledTask", "SimulationClock"]
