"""Base classes for route optimization strategies."""

from __future__ import annotations

import logging
import random
import time
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Sequence

from ...config import settings
from ...errors import InvalidInputError
from ...models.domain import RoutePoint
from .matrix import DistanceMatrix
from .models import Algorithm, OptimizationOptions, OptimizationResult

logger = logging.getLogger(__name__)


class Deadline:
    """Soft wall-clock budget checked between iterations."""

    def __init__(self, time_limit_ms: float | None) -> None:
        self.time_limit_ms = time_limit_ms
        self._expires_at = None if time_limit_ms is None else time.perf_counter() + time_limit_ms / 1000.0
        self.reached = False

    def expired(self) -> bool:
        if self._expires_at is None:
            return False
        if time.perf_counter() >= self._expires_at:
            self.reached = True
        return self.reached


class TourProblem:
    """Everything a strategy needs for one call: the point arena, its distance
    matrix, the pinned start (if any), round-trip pricing and the deadline."""

    def __init__(
        self,
        points: Sequence[RoutePoint],
        *,
        start_point: RoutePoint | None = None,
        round_trip: bool = False,
        time_limit_ms: float | None = None,
    ) -> None:
        self.points: tuple[RoutePoint, ...] = tuple(points)
        self.matrix = DistanceMatrix.from_points(self.points)
        self.round_trip = round_trip
        self.start_index = self._resolve_start(start_point)
        self.deadline = Deadline(time_limit_ms)
        self.metadata: dict = {}

    @classmethod
    def from_options(cls, points: Sequence[RoutePoint], options: OptimizationOptions) -> "TourProblem":
        return cls(
            points,
            start_point=options.start_point,
            round_trip=options.round_trip,
            time_limit_ms=options.time_limit_ms,
        )

    def _resolve_start(self, start_point: RoutePoint | None) -> int | None:
        if start_point is None:
            return None
        for index, point in enumerate(self.points):
            if point.id == start_point.id:
                return index
        raise InvalidInputError(
            f"Start point '{start_point.id}' is not one of the stops being sequenced.",
            point_ids=[start_point.id],
        )

    @property
    def size(self) -> int:
        return len(self.points)

    @property
    def first_free_position(self) -> int:
        """Positions before this index are frozen by the start-point contract."""
        return 1 if self.start_index is not None else 0

    def cost(self, tour: Sequence[int]) -> float:
        return self.matrix.tour_length(tour, closed=self.round_trip)

    def initial_tour(self) -> list[int]:
        """The caller's order, with the pinned start moved to the front."""
        tour = list(range(self.size))
        if self.start_index is not None:
            tour.remove(self.start_index)
            tour.insert(0, self.start_index)
        return tour


def estimate_duration_min(distance_km: float, stop_count: int) -> float:
    travel = distance_km / settings.average_speed_kmh * 60.0
    return travel + stop_count * settings.service_minutes_per_stop


class OptimizationStrategy(ABC):
    """Contract for route optimization strategies."""

    algorithm: Algorithm

    @abstractmethod
    def solve(self, problem: TourProblem, options: OptimizationOptions, rng: random.Random) -> list[int]:
        raise NotImplementedError

    def label(self, problem: TourProblem) -> str:
        return self.algorithm.value

    def run(
        self,
        points: Sequence[RoutePoint],
        options: OptimizationOptions | None = None,
        *,
        rng: random.Random | None = None,
    ) -> OptimizationResult:
        started = time.perf_counter()
        options = options or OptimizationOptions(algorithm=self.algorithm)
        rng = rng or random.Random(options.seed)

        problem = TourProblem.from_options(points, options)
        if problem.size < 2:
            logger.warning(f"{self.algorithm.value} called with {problem.size} stop(s); nothing to sequence")
        tour = self.solve(problem, options, rng)
        result = build_result(problem, tour, algorithm=self.label(problem), started=started)
        logger.info(
            f"{result.algorithm} sequenced {problem.size} stops: "
            f"{result.total_distance_km:.3f} km in {result.processing_time_ms:.1f} ms"
        )
        return result


def build_result(problem: TourProblem, tour: Sequence[int], *, algorithm: str, started: float) -> OptimizationResult:
    if sorted(tour) != list(range(problem.size)):
        raise RuntimeError(f"{algorithm} produced a tour that is not a permutation of the input stops.")

    route = [replace(problem.points[index], sequence=position) for position, index in enumerate(tour, start=1)]
    distance = problem.cost(tour)
    closing_stop = None
    if problem.round_trip and len(route) > 1:
        closing_stop = replace(route[0], sequence=len(route) + 1)

    metadata = dict(problem.metadata)
    if closing_stop is not None:
        metadata["closing_leg_km"] = problem.matrix.between(tour[-1], tour[0])
    metadata["stops"] = problem.size
    metadata["round_trip"] = problem.round_trip
    metadata["deadline_reached"] = problem.deadline.reached
    metadata["legs_km"] = problem.matrix.leg_lengths(tour)

    return OptimizationResult(
        route=route,
        total_distance_km=distance,
        total_duration_estimate_min=estimate_duration_min(distance, len(route)),
        algorithm=algorithm,
        processing_time_ms=(time.perf_counter() - started) * 1000.0,
        closing_stop=closing_stop,
        metadata=metadata,
    )
