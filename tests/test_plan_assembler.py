import math

import pytest
from pydantic import ValidationError

from plan_visit.config import VisitSettings
from plan_visit.models import MANEUVER_IS_DONE, MissionPlan, Position, SpeedUnits, Waypoint, ZUnits
from plan_visit.pipeline.plan_assembler import assemble_plan


WPS = [
    Waypoint(lat=math.radians(41.0), lon=math.radians(-8.0)),
    Waypoint(lat=math.radians(41.1), lon=math.radians(-8.1)),
    Waypoint(lat=math.radians(41.2), lon=math.radians(-8.2)),
]
ORIGIN = Position(lat=math.radians(40.9), lon=math.radians(-7.9))


def test_plan_shape_and_chain():
    plan = assemble_plan([3, 1, 2], WPS, ORIGIN, VisitSettings())
    assert len(plan.maneuvers) == 4
    assert len(plan.transitions) == 3
    assert [m.maneuver_id for m in plan.maneuvers] == ["Goto0", "Goto1", "Goto2", "Goto3"]
    assert plan.start_man_id == "Goto0"
    for i, tr in enumerate(plan.transitions):
        assert tr.source_man == f"Goto{i}"
        assert tr.dest_man == f"Goto{i + 1}"
        assert tr.conditions == MANEUVER_IS_DONE


def test_maneuvers_follow_route_and_return_to_origin():
    plan = assemble_plan([3, 1, 2], WPS, ORIGIN, VisitSettings())
    targets = [(m.data.lat, m.data.lon) for m in plan.maneuvers]
    assert targets[:3] == [(WPS[2].lat, WPS[2].lon), (WPS[0].lat, WPS[0].lon), (WPS[1].lat, WPS[1].lon)]
    assert targets[3] == (ORIGIN.lat, ORIGIN.lon)


def test_scenario_a_no_waypoints():
    plan = assemble_plan([], [], ORIGIN, VisitSettings())
    assert len(plan.maneuvers) == 1
    assert plan.transitions == []
    assert plan.start_man_id == "Goto0"
    assert (plan.maneuvers[0].data.lat, plan.maneuvers[0].data.lon) == (ORIGIN.lat, ORIGIN.lon)


def test_speed_depth_and_plan_identity():
    settings = VisitSettings(speed_mps=2.0, z=3.5, z_units=ZUnits.ALTITUDE, plan_id="Survey")
    plan = assemble_plan([1], WPS, ORIGIN, settings)
    assert plan.plan_id == "Survey"
    for m in plan.maneuvers:
        assert m.data.speed == 2.0
        assert m.data.speed_units == SpeedUnits.METERS_PS
        assert m.data.z == 3.5
        assert m.data.z_units == ZUnits.ALTITUDE


def test_defaults_match_vehicle_profile():
    plan = assemble_plan([2], WPS, ORIGIN, VisitSettings())
    assert plan.plan_id == "PlanVisit"
    assert plan.maneuvers[0].data.speed == 1.6
    assert plan.maneuvers[0].data.z == 0.0
    assert plan.maneuvers[0].data.z_units == ZUnits.DEPTH


def test_route_index_out_of_range():
    with pytest.raises(IndexError):
        assemble_plan([0], WPS, ORIGIN, VisitSettings())
    with pytest.raises(IndexError):
        assemble_plan([4], WPS, ORIGIN, VisitSettings())


def test_broken_chain_is_rejected():
    plan = assemble_plan([1, 2], WPS, ORIGIN, VisitSettings())
    data = plan.model_dump()
    data["transitions"][1]["source_man"] = "Goto0"
    with pytest.raises(ValidationError):
        MissionPlan.model_validate(data)

    data = plan.model_dump()
    data["start_man_id"] = "Goto1"
    with pytest.raises(ValidationError):
        MissionPlan.model_validate(data)
