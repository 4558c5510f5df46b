import math
import random

from plan_visit.config import VisitSettings, waypoints_from_degrees
from plan_visit.models import Position
from plan_visit.pipeline.plan_and_dispatch import run_pipeline
from plan_visit.report.plan_brief import write_plan_brief
from plan_visit.vis.route_plot import plot_route

POINTS = [41.1841, -8.7052, 41.1865, -8.7041, 41.1839, -8.7079]
ORIGIN = Position(lat=math.radians(41.1852), lon=math.radians(-8.7068))


def _result():
    wps = waypoints_from_degrees(POINTS)
    return wps, run_pipeline(ORIGIN, wps, VisitSettings(points_to_visit=POINTS), random.Random(11))


def test_brief_lists_route_and_maneuvers(tmp_path):
    _, res = _result()
    out = write_plan_brief(res, run_dir=tmp_path)
    text = out.read_text(encoding="utf-8")
    assert text.startswith("# Plan Brief: PlanVisit")
    order = " -> ".join(["0"] + [str(i) for i in res.tour.route] + ["0"])
    assert order in text
    for i in range(4):
        assert f"| Goto{i} |" in text
    assert "Start maneuver: `Goto0`, transitions: 3" in text


def test_route_plot_written(tmp_path):
    wps, res = _result()
    png = plot_route(ORIGIN, wps, res.tour.route, tmp_path / "tour.png")
    assert png.exists()
    assert png.stat().st_size > 0
