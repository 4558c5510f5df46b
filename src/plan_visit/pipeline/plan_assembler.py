from __future__ import annotations

from collections.abc import Sequence

from plan_visit.config import VisitSettings
from plan_visit.models.geo import Position, Waypoint
from plan_visit.models.mission_plan import (
    MANEUVER_IS_DONE,
    Goto,
    MissionPlan,
    PlanManeuver,
    PlanTransition,
    SpeedUnits,
)


def maneuver_id(seq: int) -> str:
    return f"Goto{seq}"


def _goto(lat: float, lon: float, settings: VisitSettings) -> Goto:
    return Goto(
        lat=lat,
        lon=lon,
        speed=settings.speed_mps,
        speed_units=SpeedUnits.METERS_PS,
        z=settings.z,
        z_units=settings.z_units,
    )


def assemble_plan(
    route: Sequence[int],
    waypoints: Sequence[Waypoint],
    origin: Position,
    settings: VisitSettings,
) -> MissionPlan:
    """
    Turn a visiting order into a chain of Goto maneuvers ending back at ``origin``.

    ``route`` holds 1-based waypoint indices (node 0 is the vehicle).
    ``origin`` is the position captured when the plan is built.
    """
    maneuvers: list[PlanManeuver] = []
    for seq, idx in enumerate(route):
        if not 1 <= idx <= len(waypoints):
            raise IndexError(f"route entry {idx} outside 1..{len(waypoints)}")
        wp = waypoints[idx - 1]
        maneuvers.append(PlanManeuver(maneuver_id=maneuver_id(seq), data=_goto(wp.lat, wp.lon, settings)))

    # return leg
    maneuvers.append(
        PlanManeuver(maneuver_id=maneuver_id(len(route)), data=_goto(origin.lat, origin.lon, settings))
    )

    transitions = [
        PlanTransition(source_man=a.maneuver_id, dest_man=b.maneuver_id, conditions=MANEUVER_IS_DONE)
        for a, b in zip(maneuvers[:-1], maneuvers[1:], strict=True)
    ]
    return MissionPlan(
        plan_id=settings.plan_id,
        description=settings.plan_description,
        start_man_id=maneuvers[0].maneuver_id,
        maneuvers=maneuvers,
        transitions=transitions,
    )
