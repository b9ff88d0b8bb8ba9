"""Ant colony optimization."""

from __future__ import annotations

import logging
import math
import random
from typing import Sequence

import numpy as np

from ...config import settings
from ...models.domain import RoutePoint
from .base import OptimizationStrategy, TourProblem
from .models import Algorithm, OptimizationOptions, OptimizationResult

logger = logging.getLogger(__name__)

# Coincident stops would give an infinite visibility; treat them as this far apart.
MIN_EDGE_KM = 1e-6


class AntColonyStrategy(OptimizationStrategy):
    """Pheromone-guided tour construction with evaporation and deposit."""

    algorithm = Algorithm.ANT_COLONY

    def __init__(self, *, alpha: float | None = None, beta: float | None = None) -> None:
        self.alpha = settings.pheromone_alpha if alpha is None else alpha
        self.beta = settings.pheromone_beta if beta is None else beta

    def solve(self, problem: TourProblem, options: OptimizationOptions, rng: random.Random) -> list[int]:
        n = problem.size
        if n <= 1:
            return problem.initial_tour()

        ant_count = options.ant_count or settings.ant_count
        iterations = options.max_iterations or settings.ant_colony_iterations
        evaporation = options.evaporation_rate if options.evaporation_rate is not None else settings.evaporation_rate

        visibility = (1.0 / np.maximum(problem.matrix.values, MIN_EDGE_KM)) ** self.beta
        pheromone = np.ones((n, n))

        best_tour = problem.initial_tour()
        best_cost = problem.cost(best_tour)
        completed = 0

        for iteration in range(iterations):
            if problem.deadline.expired():
                logger.debug(f"Ant colony stopped by deadline after {iteration} iterations")
                break

            tours = [self._construct_tour(problem, pheromone, visibility, rng) for _ in range(ant_count)]
            costs = [problem.cost(tour) for tour in tours]
            for tour, cost in zip(tours, costs):
                if cost < best_cost:
                    best_cost = cost
                    best_tour = tour

            pheromone *= 1.0 - evaporation
            for tour, cost in zip(tours, costs):
                self._deposit(pheromone, tour, cost, closed=problem.round_trip)
            completed = iteration + 1

        problem.metadata["iterations"] = completed
        problem.metadata["ant_count"] = ant_count
        return best_tour

    def _construct_tour(
        self,
        problem: TourProblem,
        pheromone: np.ndarray,
        visibility: np.ndarray,
        rng: random.Random,
    ) -> list[int]:
        n = problem.size
        start = problem.start_index if problem.start_index is not None else rng.randrange(n)
        unvisited = np.ones(n, dtype=bool)
        unvisited[start] = False
        tour = [start]

        for _ in range(n - 1):
            current = tour[-1]
            candidates = np.flatnonzero(unvisited)
            weights = pheromone[current, candidates] ** self.alpha * visibility[current, candidates]
            total = float(weights.sum())
            if not math.isfinite(total) or total <= 0.0:
                choice = int(candidates[rng.randrange(len(candidates))])
            else:
                threshold = rng.random() * total
                # side="right" skips zero-weight candidates, even when threshold is 0.
                position = int(np.searchsorted(np.cumsum(weights), threshold, side="right"))
                if position >= len(candidates):
                    position = int(np.flatnonzero(weights > 0.0)[-1])
                choice = int(candidates[position])
            unvisited[choice] = False
            tour.append(choice)
        return tour

    @staticmethod
    def _deposit(pheromone: np.ndarray, tour: Sequence[int], cost: float, *, closed: bool) -> None:
        if not math.isfinite(cost) or cost <= 0.0:
            return
        amount = 1.0 / cost
        origins = list(tour[:-1])
        targets = list(tour[1:])
        if closed:
            origins.append(tour[-1])
            targets.append(tour[0])
        np.add.at(pheromone, (origins, targets), amount)
        np.add.at(pheromone, (targets, origins), amount)


def ant_colony(
    points: Sequence[RoutePoint],
    options: OptimizationOptions | None = None,
    *,
    rng: random.Random | None = None,
) -> OptimizationResult:
    return AntColonyStrategy().run(points, options, rng=rng)
