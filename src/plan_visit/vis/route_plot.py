from __future__ import annotations

import math
from collections.abc import Sequence
from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # headless backend for CI and servers
import matplotlib.pyplot as plt

from plan_visit.models.geo import Position, Waypoint


def plot_route(
    origin: Position,
    waypoints: Sequence[Waypoint],
    route: Sequence[int],
    out_path: str | Path,
) -> Path:
    """Save a lon/lat plot (degrees) of the closed tour 0 -> route -> 0."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    tour = [origin] + [waypoints[i - 1] for i in route] + [origin]
    xs = [math.degrees(p.lon) for p in tour]
    ys = [math.degrees(p.lat) for p in tour]

    fig, ax = plt.subplots(figsize=(6, 6))
    ax.plot(xs, ys, "-", lw=1.5)
    ax.plot([math.degrees(wp.lon) for wp in waypoints], [math.degrees(wp.lat) for wp in waypoints], "o")
    ax.plot([xs[0]], [ys[0]], "s", markersize=8)
    for k, idx in enumerate(route):
        wp = waypoints[idx - 1]
        ax.annotate(f"{k}:{idx}", (math.degrees(wp.lon), math.degrees(wp.lat)), textcoords="offset points", xytext=(4, 4))
    ax.set_xlabel("Longitude (deg)")
    ax.set_ylabel("Latitude (deg)")
    ax.set_title("Visiting tour")
    ax.set_aspect("equal", adjustable="datalim")
    fig.savefig(out_path, dpi=120, bbox_inches="tight")
    plt.close(fig)
    return out_path
