"""Route sequencing engine and HTTP API."""

from .errors import InvalidInputError
from .models.domain import RoutePoint, TimeWindow
from .services.geospatial import distance_km, haversine_km, total_distance_km, validate_points
from .services.optimization import (
    Algorithm,
    Improvement,
    OptimizationOptions,
    OptimizationResult,
    ant_colony,
    auto,
    compare_algorithms,
    genetic,
    nearest_neighbor,
    optimize,
    two_opt,
)

__all__ = [
    "Algorithm",
    "Improvement",
    "InvalidInputError",
    "OptimizationOptions",
    "OptimizationResult",
    "RoutePoint",
    "TimeWindow",
    "ant_colony",
    "auto",
    "compare_algorithms",
    "distance_km",
    "genetic",
    "haversine_km",
    "nearest_neighbor",
    "optimize",
    "total_distance_km",
    "two_opt",
    "validate_points",
]
