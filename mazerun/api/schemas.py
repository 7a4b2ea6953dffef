"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Entities ---

class CellSchema(BaseModel):
    x: int
    y: int


class AdversarySchema(BaseModel):
    x: int
    y: int
    kind: str


class PlayerSchema(BaseModel):
    x: int
    y: int
    has_power: bool = False
    power_ticks_remaining: int = 0


class RoundSchema(BaseModel):
    ticks_remaining: int
    dimension: str
    outcome: str
    loss_cause: str = "none"


# --- Map ---

class MapResponse(BaseModel):
    size: int
    maze_epoch: int
    grid: list[int] = Field(description="RLE of Material values: [value, count, ...] (0=Floor, 1=Wall)")


# --- State ---

class EventSchema(BaseModel):
    time_ms: int
    category: str
    message: str


class GameStateResponse(BaseModel):
    time_ms: int
    maze_epoch: int
    player: PlayerSchema
    round: RoundSchema
    portals: list[CellSchema] = Field(default_factory=list)
    hazards: list[CellSchema] = Field(default_factory=list)
    power_items: list[CellSchema] = Field(default_factory=list)
    adversaries: list[AdversarySchema] = Field(default_factory=list)
    events: list[EventSchema] = Field(default_factory=list)


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    time_ms: int = 0


class InputResponse(BaseModel):
    status: str
    direction: str
    time_ms: int = 0


# --- Config ---

class MazeConfigResponse(BaseModel):
    world_seed: int
    maze_size: int
    wall_probability: float
    max_generation_attempts: int
    adversary_cap: int
    chase_probability: float
    reproduction_probability: float
    round_ticks: int
    power_duration_ticks: int
    adversary_interval_ms: int
    power_interval_ms: int
    clock_interval_ms: int
    reset_delay_ms: int
    speed: float


# --- Stats ---

class SimulationStats(BaseModel):
    time_ms: int
    maze_epoch: int
    rounds_won: int
    rounds_lost: int
    running: bool
    paused: bool
