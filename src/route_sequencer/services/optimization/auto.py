"""Size-based algorithm selection."""

from __future__ import annotations

import random
from typing import Sequence

from ...config import settings
from ...models.domain import RoutePoint
from .base import OptimizationStrategy, TourProblem
from .genetic import evolve
from .models import Algorithm, OptimizationOptions, OptimizationResult
from .nearest_neighbor import build_nearest_neighbor_tour
from .two_opt import improve_tour

NN_TWO_OPT_PATH = "nearest_neighbor+two_opt"
GENETIC_PATH = "genetic"


def select_path(stop_count: int) -> str:
    """Small and large inputs get NN + 2-opt; the middle tier gets the genetic search."""

    if stop_count <= settings.auto_small_max or stop_count > settings.auto_medium_max:
        return NN_TWO_OPT_PATH
    return GENETIC_PATH


class AutoStrategy(OptimizationStrategy):
    algorithm = Algorithm.AUTO

    def label(self, problem: TourProblem) -> str:
        return f"auto({select_path(problem.size)})"

    def solve(self, problem: TourProblem, options: OptimizationOptions, rng: random.Random) -> list[int]:
        path = select_path(problem.size)
        problem.metadata["auto_path"] = path
        if path == GENETIC_PATH:
            generations = options.max_iterations or settings.auto_genetic_generations
            return evolve(problem, options, rng, generations)

        seed_tour = build_nearest_neighbor_tour(problem)
        max_passes = options.max_iterations or settings.two_opt_max_iterations
        return improve_tour(problem, seed_tour, max_passes)


def auto(
    points: Sequence[RoutePoint],
    options: OptimizationOptions | None = None,
    *,
    rng: random.Random | None = None,
) -> OptimizationResult:
    return AutoStrategy().run(points, options, rng=rng)
