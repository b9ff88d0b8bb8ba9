"""Nearest-neighbor construction heuristic."""

from __future__ import annotations

import random
from typing import Sequence

from ...models.domain import RoutePoint
from .base import OptimizationStrategy, TourProblem
from .models import Algorithm, OptimizationOptions, OptimizationResult


def build_nearest_neighbor_tour(problem: TourProblem) -> list[int]:
    """Greedy tour from the pinned start (or the first stop).

    Ties go to the candidate seen first in input order.
    """

    if problem.size == 0:
        return []
    start = problem.start_index if problem.start_index is not None else 0
    rows = problem.matrix.rows
    unvisited = [index for index in range(problem.size) if index != start]
    tour = [start]

    while unvisited:
        row = rows[tour[-1]]
        nearest_position = 0
        nearest_distance = row[unvisited[0]]
        for position in range(1, len(unvisited)):
            distance = row[unvisited[position]]
            if distance < nearest_distance:
                nearest_distance = distance
                nearest_position = position
        tour.append(unvisited.pop(nearest_position))
    return tour


class NearestNeighborStrategy(OptimizationStrategy):
    algorithm = Algorithm.NEAREST_NEIGHBOR

    def solve(self, problem: TourProblem, options: OptimizationOptions, rng: random.Random) -> list[int]:
        return build_nearest_neighbor_tour(problem)


def nearest_neighbor(
    points: Sequence[RoutePoint],
    options: OptimizationOptions | None = None,
    *,
    rng: random.Random | None = None,
) -> OptimizationResult:
    return NearestNeighborStrategy().run(points, options, rng=rng)
