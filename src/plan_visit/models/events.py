"""
Typed events consumed by the mission controller.

Producers (navigation, vehicle supervisor, plan engine, operator) push these
into the event loop; the controller never calls back into them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class VehicleMode(str, Enum):
    SERVICE = "service"  # ready for a new plan
    CALIBRATION = "calibration"
    ERROR = "error"
    MANEUVER = "maneuver"
    EXTERNAL = "external"
    BOOT = "boot"


class PlanState(str, Enum):
    BLOCKED = "blocked"
    READY = "ready"
    INITIALIZING = "initializing"
    EXECUTING = "executing"


class PlanOutcome(str, Enum):
    NONE = "none"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class PositionEstimate:
    lat: float  # radians
    lon: float  # radians


@dataclass(frozen=True)
class VehicleStateEvent:
    op_mode: VehicleMode


@dataclass(frozen=True)
class PlanStatusEvent:
    state: PlanState
    progress: float = 0.0  # percent, negative when unknown
    last_outcome: PlanOutcome = PlanOutcome.NONE


@dataclass(frozen=True)
class ActivationRequest:
    pass


@dataclass(frozen=True)
class DeactivationRequest:
    reason: str = "requested"


@dataclass(frozen=True)
class ConfigurationUpdate:
    points_to_visit: list[float] = field(default_factory=list)  # degrees, flat lat/lon pairs


@dataclass(frozen=True)
class Tick:
    pass


Event = (
    PositionEstimate
    | VehicleStateEvent
    | PlanStatusEvent
    | ActivationRequest
    | DeactivationRequest
    | ConfigurationUpdate
    | Tick
)
