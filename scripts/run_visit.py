#!/usr/bin/env python3
"""Plan a visiting tour once from the command line and write the artifacts."""
from __future__ import annotations

import argparse
import json
import logging
import math
import os
import pathlib
import random
import sys

# ensure 'src' on path
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from plan_visit.config import load_settings, waypoints_from_degrees
from plan_visit.errors import PlanVisitError
from plan_visit.models import Position
from plan_visit.pipeline.plan_and_dispatch import NdjsonDispatcher, run_pipeline
from plan_visit.report.plan_brief import write_plan_brief
from plan_visit.vis.route_plot import plot_route


def main() -> int:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--config", default=None, help="JSON settings file (points_to_visit in degrees)")
    ap.add_argument("--lat", type=float, required=True, help="Vehicle latitude (deg)")
    ap.add_argument("--lon", type=float, required=True, help="Vehicle longitude (deg)")
    ap.add_argument("--out", default="runs", help="Output directory")
    ap.add_argument("--seed", type=int, default=None, help="Seed for the request id generator")
    ap.add_argument("--plot", action="store_true", help="Also save a PNG of the tour")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if os.getenv("PLANVISIT_VERBOSE") == "1" else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.config)
        waypoints = waypoints_from_degrees(settings.points_to_visit)
    except PlanVisitError as e:
        print("ERROR:", e, file=sys.stderr)
        return 2

    origin = Position(lat=math.radians(args.lat), lon=math.radians(args.lon))
    rng = random.Random(args.seed)
    result = run_pipeline(origin, waypoints, settings, rng)

    out_dir = pathlib.Path(args.out)
    NdjsonDispatcher(out_dir / "dispatch.ndjson")(result.request)
    brief = write_plan_brief(result, out_dir)
    print(json.dumps({"route": result.tour.route, "tour_m": round(result.tour.cost, 2), "brief": str(brief)}))
    if args.plot:
        png = plot_route(origin, waypoints, result.tour.route, out_dir / f"tour_{result.request.request_id}.png")
        print(f"Saved plot to {png}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
