from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .events import PlanOutcome, VehicleMode
from .geo import Position, Waypoint


class ControllerState(str, Enum):
    DISABLED = "disabled"  # waypoint configuration invalid
    IDLE = "idle"  # valid configuration, not active
    ARMED = "armed"  # active, plan not built yet
    DISPATCHED = "dispatched"  # start request sent, not yet executing
    RUNNING = "running"  # plan confirmed executing


# everything the controller mutates while consuming events
@dataclass
class MissionState:
    waypoints: list[Waypoint] = field(default_factory=list)
    enabled: bool = False
    active: bool = False
    plan_sent: bool = False
    state: ControllerState = ControllerState.DISABLED
    vehicle_mode: VehicleMode = VehicleMode.BOOT
    in_mission: bool = False
    progress: float = 0.0
    last_outcome: PlanOutcome = PlanOutcome.NONE

    # last position estimate; None until the first one arrives
    position: Position | None = None

    # monotonic time of the last position estimate (liveness)
    position_stamp: float | None = None
