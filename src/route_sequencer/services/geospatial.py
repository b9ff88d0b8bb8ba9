"""Geospatial helper functions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from shapely.geometry import MultiPoint, box

from ..errors import InvalidInputError
from ..models.domain import RoutePoint

EARTH_RADIUS_KM = 6371.0


@dataclass(slots=True)
class Bounds:
    north: float
    south: float
    east: float
    west: float
    center_lat: float
    center_lng: float


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: RoutePoint, b: RoutePoint) -> float:
    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def total_distance_km(points: Sequence[RoutePoint], *, round_trip: bool = False) -> float:
    """Sum of consecutive legs; ``round_trip`` adds the leg back to the first point."""

    if len(points) < 2:
        return 0.0
    total = sum(distance_km(points[i], points[i + 1]) for i in range(len(points) - 1))
    if round_trip:
        total += distance_km(points[-1], points[0])
    return total


def validate_points(points: Sequence[RoutePoint]) -> None:
    """Strict input check: finite, in-range coordinates and unique ids.

    The optimizers themselves do not validate; callers that need the strict
    contract run this first.
    """

    invalid: list[str] = []
    for point in points:
        if not (math.isfinite(point.lat) and math.isfinite(point.lng)):
            invalid.append(point.id)
        elif not (-90.0 <= point.lat <= 90.0 and -180.0 <= point.lng <= 180.0):
            invalid.append(point.id)
    if invalid:
        raise InvalidInputError(
            f"{len(invalid)} point(s) have missing or out-of-range coordinates.",
            point_ids=invalid,
        )

    seen: set[str] = set()
    duplicates: list[str] = []
    for point in points:
        if point.id in seen:
            duplicates.append(point.id)
        seen.add(point.id)
    if duplicates:
        raise InvalidInputError(f"Duplicate point ids: {', '.join(duplicates)}", point_ids=duplicates)


def filter_by_radius(
    points: Sequence[RoutePoint],
    origin_lat: float,
    origin_lng: float,
    max_distance_km: float,
) -> list[RoutePoint]:
    """Keep the points within ``max_distance_km`` of the origin, preserving order."""

    return [
        point
        for point in points
        if haversine_km(origin_lat, origin_lng, point.lat, point.lng) <= max_distance_km
    ]


def compute_bounds(points: Sequence[RoutePoint]) -> Bounds | None:
    """Bounding box of the points and the center of that box."""

    if not points:
        return None
    west, south, east, north = MultiPoint([(point.lng, point.lat) for point in points]).bounds
    center = box(west, south, east, north).centroid if west != east and south != north else None
    center_lng = center.x if center is not None else (west + east) / 2
    center_lat = center.y if center is not None else (south + north) / 2
    return Bounds(
        north=north,
        south=south,
        east=east,
        west=west,
        center_lat=center_lat,
        center_lng=center_lng,
    )
