"""Simulation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MazeConfig:
    """Immutable configuration for the maze simulation."""

    # World
    world_seed: int = 42
    maze_size: int = 10

    # Maze generation
    wall_probability: float = 0.35
    max_generation_attempts: int = 500     # 0 = retry forever (no constructive fallback)

    # Placement
    placement_attempts: int = 50
    portal_count: int = 2
    hazard_count: int = 4
    power_item_count: int = 3
    adversary_count_normal: int = 5
    adversary_count_alt: int = 4

    # Adversary AI
    adversary_cap: int = 12
    chase_probability: float = 0.3
    reproduction_probability: float = 0.3

    # Round / power timers (in ticks of their own clocks)
    round_ticks: int = 30
    power_duration_ticks: int = 10

    # Clock cadences (virtual milliseconds)
    adversary_interval_ms: int = 700
    power_interval_ms: int = 1000
    clock_interval_ms: int = 1000
    reset_delay_ms: int = 2000

    # Engine thread
    frame_seconds: float = 0.05            # real seconds between clock advances
    step_ms: int = 100                     # virtual ms advanced by a single step
    autostart: bool = True

    # Logging
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.maze_size < 4:
            raise ValueError(f"maze_size must be >= 4, got {self.maze_size}")
        for name in ("wall_probability", "chase_probability", "reproduction_probability"):
            value = getattr(self, name)
            if not 0.0 <= value < 1.0:
                raise ValueError(f"{name} must be in [0, 1), got {value}")
        for name in ("adversary_interval_ms", "power_interval_ms", "clock_interval_ms",
                     "reset_delay_ms", "step_ms", "placement_attempts"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        for name in ("max_generation_attempts", "portal_count", "hazard_count",
                     "power_item_count", "adversary_count_normal", "adversary_count_alt",
                     "adversary_cap", "round_ticks", "power_duration_ticks"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
