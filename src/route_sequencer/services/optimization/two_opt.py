"""2-opt edge-exchange local search."""

from __future__ import annotations

import logging
import random
from typing import Sequence

from ...config import settings
from ...models.domain import RoutePoint
from .base import OptimizationStrategy, TourProblem
from .models import Algorithm, OptimizationOptions, OptimizationResult

logger = logging.getLogger(__name__)

# Minimum gain (km) for a reversal to count as an improvement.
IMPROVEMENT_EPSILON_KM = 1e-10


def improve_tour(problem: TourProblem, tour: Sequence[int], max_passes: int) -> list[int]:
    """First-improvement 2-opt.

    Each pass scans segments ``[i..j]`` with ``1 <= i < j <= n-1`` and applies
    the first reversal that shortens the tour, then starts a new pass. The
    first stop never moves. Only the two boundary edges change under a
    reversal, so each candidate is priced in constant time.
    """

    route = list(tour)
    n = len(route)
    if n <= 3:
        return route

    rows = problem.matrix.rows
    closed = problem.round_trip
    passes = 0
    moves = 0
    improved = True

    while improved and passes < max_passes:
        if problem.deadline.expired():
            logger.debug(f"2-opt stopped by deadline after {passes} passes")
            break
        improved = False
        passes += 1
        for i in range(1, n - 1):
            before_segment = route[i - 1]
            segment_head = route[i]
            for j in range(i + 1, n):
                segment_tail = route[j]
                if j + 1 < n:
                    after_segment = route[j + 1]
                elif closed:
                    after_segment = route[0]
                else:
                    after_segment = None

                current = rows[before_segment][segment_head]
                candidate = rows[before_segment][segment_tail]
                if after_segment is not None:
                    current += rows[segment_tail][after_segment]
                    candidate += rows[segment_head][after_segment]

                if candidate < current - IMPROVEMENT_EPSILON_KM:
                    route[i : j + 1] = route[i : j + 1][::-1]
                    improved = True
                    moves += 1
                    break
            if improved:
                break

    problem.metadata["two_opt_passes"] = passes
    problem.metadata["two_opt_moves"] = moves
    return route


class TwoOptStrategy(OptimizationStrategy):
    """Refine the caller's order (start point moved to the front) with 2-opt."""

    algorithm = Algorithm.TWO_OPT

    def solve(self, problem: TourProblem, options: OptimizationOptions, rng: random.Random) -> list[int]:
        max_passes = options.max_iterations or settings.two_opt_max_iterations
        return improve_tour(problem, problem.initial_tour(), max_passes)


def two_opt(
    points: Sequence[RoutePoint],
    options: OptimizationOptions | None = None,
    *,
    rng: random.Random | None = None,
) -> OptimizationResult:
    return TwoOptStrategy().run(points, options, rng=rng)
