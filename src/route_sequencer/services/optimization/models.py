"""Optimization domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ...config import settings
from ...models.domain import RoutePoint


class Algorithm(str, Enum):
    NEAREST_NEIGHBOR = "nearest_neighbor"
    TWO_OPT = "two_opt"
    GENETIC = "genetic"
    ANT_COLONY = "ant_colony"
    AUTO = "auto"


@dataclass(slots=True)
class OptimizationOptions:
    """Per-call tuning. ``None`` means "use the configured default"."""

    algorithm: Algorithm = field(default_factory=lambda: Algorithm(settings.default_algorithm))
    max_iterations: Optional[int] = None
    time_limit_ms: Optional[float] = None
    round_trip: bool = False
    start_point: Optional[RoutePoint] = None
    population_size: Optional[int] = None
    mutation_rate: Optional[float] = None
    ant_count: Optional[int] = None
    evaporation_rate: Optional[float] = None
    seed: Optional[int] = None


@dataclass(slots=True)
class Improvement:
    distance_saved_km: float
    time_saved_min: float
    percent_improvement: float


@dataclass(slots=True)
class OptimizationResult:
    route: List[RoutePoint]
    total_distance_km: float
    total_duration_estimate_min: float
    algorithm: str
    processing_time_ms: float
    improvement: Optional[Improvement] = None
    closing_stop: Optional[RoutePoint] = None
    metadata: dict = field(default_factory=dict)
