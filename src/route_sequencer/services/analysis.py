"""Quick statistics for a set of stops, without optimizing it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..models.domain import RoutePoint
from .geospatial import Bounds, compute_bounds, total_distance_km
from .optimization.base import estimate_duration_min


@dataclass(slots=True)
class PointSetAnalysis:
    stop_count: int
    total_distance_km: float
    estimated_duration_min: float
    bounds: Optional[Bounds]


def analyze_points(points: Sequence[RoutePoint], *, round_trip: bool = False) -> PointSetAnalysis:
    distance = total_distance_km(points, round_trip=round_trip)
    return PointSetAnalysis(
        stop_count=len(points),
        total_distance_km=distance,
        estimated_duration_min=estimate_duration_min(distance, len(points)),
        bounds=compute_bounds(points),
    )
