from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from geographiclib.geodesic import Geodesic

from plan_visit.models.geo import Position, Waypoint

DistanceMatrix = np.ndarray  # (N+1, N+1) float64, metres; index 0 is the vehicle


def bearing_and_range(lat1: float, lon1: float, lat2: float, lon2: float) -> tuple[float, float]:
    """WGS84 initial bearing (rad, clockwise from north) and range (m) between two points in radians."""
    if lat1 == lat2 and lon1 == lon2:
        return 0.0, 0.0
    g = Geodesic.WGS84.Inverse(math.degrees(lat1), math.degrees(lon1), math.degrees(lat2), math.degrees(lon2))
    return math.radians(g["azi1"]), float(g["s12"])


def range_between(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    return bearing_and_range(lat1, lon1, lat2, lon2)[1]


def build_distance_matrix(position: Position, waypoints: Sequence[Waypoint]) -> DistanceMatrix:
    """
    Travel cost between the vehicle (node 0) and every waypoint (nodes 1..N).

    Costs are geodesic ranges; the matrix is symmetric with a zero diagonal.
    """
    nodes = [(position.lat, position.lon)] + [(wp.lat, wp.lon) for wp in waypoints]
    n = len(nodes)
    m = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(i + 1, n):
            r = range_between(nodes[i][0], nodes[i][1], nodes[j][0], nodes[j][1])
            m[i, j] = r
            m[j, i] = r
    return m
