from __future__ import annotations

from .events import (  # noqa: F401
    ActivationRequest,
    ConfigurationUpdate,
    DeactivationRequest,
    Event,
    PlanOutcome,
    PlanState,
    PlanStatusEvent,
    PositionEstimate,
    Tick,
    VehicleMode,
    VehicleStateEvent,
)
from .geo import Position, Waypoint  # noqa: F401
from .mission_state import ControllerState, MissionState  # noqa: F401
from .mission_plan import (  # noqa: F401
    MANEUVER_IS_DONE,
    Goto,
    MissionPlan,
    PlanControl,
    PlanControlOp,
    PlanControlType,
    PlanManeuver,
    PlanTransition,
    SpeedUnits,
    ZUnits,
    plan_control_json_schema,
)
