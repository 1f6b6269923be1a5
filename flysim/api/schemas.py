"""Pydantic response models for the REST and WebSocket feeds.

Field aliases carry the camelCase wire names observers expect
(``isMoving``, ``currentTarget``); serialize with ``by_alias=True``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from flysim.core.snapshot import Snapshot
from flysim.core.vectors import Vector3


# --- Wire state ---

class Vector3Schema(BaseModel):
    x: float
    y: float
    z: float

    @classmethod
    def from_vector(cls, v: Vector3) -> Vector3Schema:
        return cls(x=v.x, y=v.y, z=v.z)


class FlySchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    position: Vector3Schema
    direction: Vector3Schema
    is_moving: bool = Field(alias="isMoving")
    is_flying: bool = Field(alias="isFlying")
    current_target: int | None = Field(None, alias="currentTarget")


class PoopSchema(BaseModel):
    id: int
    position: Vector3Schema


class GameStateSchema(BaseModel):
    """The broadcast payload: ``{"fly": {...}, "poops": [...]}``."""

    fly: FlySchema
    poops: list[PoopSchema] = Field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot, **extra) -> GameStateSchema:
        c = snapshot.creature
        return cls(
            fly=FlySchema(
                position=Vector3Schema.from_vector(c.position),
                direction=Vector3Schema.from_vector(c.facing),
                is_moving=c.is_moving,
                is_flying=c.is_flying,
                current_target=c.current_target_id,
            ),
            poops=[
                PoopSchema(id=t.id, position=Vector3Schema.from_vector(t.position))
                for t in snapshot.targets
            ],
            **extra,
        )


class WorldStateResponse(GameStateSchema):
    """Wire state plus engine diagnostics for polling clients."""

    tick: int
    clock: float
    behavior: str


# --- Events ---

class EventSchema(BaseModel):
    tick: int
    category: str
    message: str
    target_ids: list[int] = Field(default_factory=list)


class EventsResponse(BaseModel):
    since_tick: int | None = None
    events: list[EventSchema] = Field(default_factory=list)


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int = 0


# --- Config ---

class SimulationConfigResponse(BaseModel):
    arena_width: float
    min_height: float
    max_height: float
    walk_speed: float
    fly_speed: float
    turn_rate: float
    detection_radius: float
    interaction_radius: float
    target_capacity: int
    spawn_interval: float
    stall_threshold: float
    tick_interval: float
    broadcast_interval: float


# --- Stats ---

class SimulationStats(BaseModel):
    tick: int
    clock: float
    target_count: int
    total_spawned: int
    total_consumed: int
    running: bool
    paused: bool
