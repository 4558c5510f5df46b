from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

MANEUVER_IS_DONE = "ManeuverIsDone"


class SpeedUnits(str, Enum):
    METERS_PS = "meters_ps"
    RPM = "rpm"
    PERCENTAGE = "percentage"


class ZUnits(str, Enum):
    NONE = "none"
    DEPTH = "depth"
    ALTITUDE = "altitude"
    HEIGHT = "height"


class Goto(BaseModel):
    """Straight transit to a point at fixed speed and depth/altitude."""

    lat: float
    lon: float
    speed: float = Field(ge=0)
    speed_units: SpeedUnits = SpeedUnits.METERS_PS
    z: float = 0.0
    z_units: ZUnits = ZUnits.DEPTH


class PlanManeuver(BaseModel):
    maneuver_id: str
    data: Goto


class PlanTransition(BaseModel):
    source_man: str
    dest_man: str
    conditions: str = MANEUVER_IS_DONE


class MissionPlan(BaseModel):
    """
    Sequential plan: every maneuver hands over to the next one when done.
    """
    plan_id: str
    description: str = ""
    start_man_id: str
    maneuvers: list[PlanManeuver] = Field(min_length=1)
    transitions: list[PlanTransition] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_chain(self) -> MissionPlan:
        ids = [m.maneuver_id for m in self.maneuvers]
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate maneuver ids in {ids}")
        if self.start_man_id != ids[0]:
            raise ValueError(f"start_man_id={self.start_man_id!r} is not the first maneuver {ids[0]!r}")
        if len(self.transitions) != len(ids) - 1:
            raise ValueError(
                f"expected {len(ids) - 1} transitions for {len(ids)} maneuvers, got {len(self.transitions)}"
            )
        for i, tr in enumerate(self.transitions):
            if (tr.source_man, tr.dest_man) != (ids[i], ids[i + 1]):
                raise ValueError(
                    f"transition[{i}] {tr.source_man}->{tr.dest_man} does not chain {ids[i]}->{ids[i + 1]}"
                )
        return self


class PlanControlType(str, Enum):
    REQUEST = "request"
    SUCCESS = "success"
    FAILURE = "failure"
    IN_PROGRESS = "in_progress"


class PlanControlOp(str, Enum):
    START = "start"
    STOP = "stop"
    LOAD = "load"
    GET = "get"


class PlanControl(BaseModel):
    """Plan start request addressed to a vehicle."""

    type: PlanControlType = PlanControlType.REQUEST
    op: PlanControlOp = PlanControlOp.START
    request_id: int = Field(ge=0, le=0xFFFF)
    plan_id: str
    arg: MissionPlan
    destination: int = Field(default=0, ge=0)


def plan_control_json_schema() -> dict:
    return PlanControl.model_json_schema()
