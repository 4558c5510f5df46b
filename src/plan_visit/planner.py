from __future__ import annotations

import itertools
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)

Route = list[int]  # waypoint indices 1..N in visiting order


@dataclass(frozen=True)
class TourResult:
    route: Route
    cost: float  # closed tour length from node 0 back to node 0


def tour_cost(matrix: np.ndarray, route: Sequence[int]) -> float:
    """Cost of 0 -> route[0] -> ... -> route[-1] -> 0."""
    cost = 0.0
    k = 0
    for idx in route:
        cost += float(matrix[k, idx])
        k = idx
    return cost + float(matrix[k, 0])


def solve_tsp(matrix: np.ndarray, max_nodes: int | None = None) -> TourResult:
    """
    Exact brute-force TSP over all orderings of nodes 1..N, starting and ending at node 0.

    Permutations are generated in lexicographic order and only a strictly
    cheaper tour replaces the current best, so ties go to the first ordering
    found. Runtime is O(N!); there is no time limit. ``max_nodes`` only
    triggers a warning.
    """
    size = matrix.shape[0]
    if matrix.ndim != 2 or matrix.shape[1] != size or size == 0:
        raise ValueError(f"expected a non-empty square matrix, got shape {matrix.shape}")
    n = size - 1
    indices = list(range(1, size))
    if n <= 1:
        return TourResult(route=indices, cost=tour_cost(matrix, indices))

    if max_nodes is not None and n > max_nodes:
        logger.warning(
            "exhaustive search over %d waypoints (%d orderings) exceeds the ceiling of %d",
            n,
            math.factorial(n),
            max_nodes,
        )

    best: Route = indices
    best_cost = math.inf
    for perm in itertools.permutations(indices):
        c = tour_cost(matrix, perm)
        if c < best_cost:
            best_cost = c
            best = list(perm)
    logger.debug("best tour %s cost=%.2f m over %d waypoints", best, best_cost, n)
    return TourResult(route=best, cost=best_cost)
