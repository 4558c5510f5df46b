from __future__ import annotations

import json
import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from plan_visit.config import VisitSettings
from plan_visit.geodesy import build_distance_matrix
from plan_visit.models.geo import Position, Waypoint
from plan_visit.models.mission_plan import MissionPlan, PlanControl, PlanControlOp, PlanControlType
from plan_visit.pipeline.plan_assembler import assemble_plan
from plan_visit.planner import TourResult, solve_tsp

logger = logging.getLogger(__name__)

Dispatch = Callable[[PlanControl], None]


@dataclass
class PipelineResult:
    matrix: np.ndarray
    tour: TourResult
    plan: MissionPlan
    request: PlanControl


def build_start_request(plan: MissionPlan, destination: int, rng: random.Random | None = None) -> PlanControl:
    rng = rng or random.Random()
    return PlanControl(
        type=PlanControlType.REQUEST,
        op=PlanControlOp.START,
        request_id=rng.getrandbits(16),
        plan_id=plan.plan_id,
        arg=plan,
        destination=destination,
    )


def run_pipeline(
    position: Position,
    waypoints: Sequence[Waypoint],
    settings: VisitSettings,
    rng: random.Random | None = None,
) -> PipelineResult:
    """Distance matrix -> exact tour -> mission plan -> start request, all inline."""
    matrix = build_distance_matrix(position, waypoints)
    tour = solve_tsp(matrix, max_nodes=settings.max_waypoints)
    plan = assemble_plan(tour.route, waypoints, position, settings)
    request = build_start_request(plan, settings.system_id, rng)
    logger.info(
        "plan %s: %d waypoints, route=%s, tour=%.1f m, request_id=%d",
        plan.plan_id,
        len(waypoints),
        tour.route,
        tour.cost,
        request.request_id,
    )
    return PipelineResult(matrix=matrix, tour=tour, plan=plan, request=request)


class NdjsonDispatcher:
    """Append every dispatched request as one JSON line."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def __call__(self, request: PlanControl) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(request.model_dump(mode="json")) + "\n")
