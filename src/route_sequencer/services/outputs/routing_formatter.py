"""Serializers for optimization outputs."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict

from ..optimization.models import OptimizationResult


def result_to_json(result: OptimizationResult) -> dict:
    return {
        "route": [asdict(point) for point in result.route],
        "total_distance_km": result.total_distance_km,
        "total_duration_estimate_min": result.total_duration_estimate_min,
        "algorithm": result.algorithm,
        "processing_time_ms": result.processing_time_ms,
        "improvement": asdict(result.improvement) if result.improvement else None,
        "closing_stop": asdict(result.closing_stop) if result.closing_stop else None,
        "metadata": result.metadata,
    }


def result_to_csv(result: OptimizationResult) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "point_id",
        "label",
        "lat",
        "lng",
        "distance_from_prev_km",
        "algorithm",
        "total_distance_km",
        "total_duration_estimate_min",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()

    legs = result.metadata.get("legs_km") or [0.0] * len(result.route)
    stops = list(zip(result.route, legs))
    if result.closing_stop is not None:
        stops.append((result.closing_stop, result.metadata.get("closing_leg_km", 0.0)))

    for point, leg in stops:
        writer.writerow(
            {
                "sequence": point.sequence,
                "point_id": point.id,
                "label": point.label,
                "lat": point.lat,
                "lng": point.lng,
                "distance_from_prev_km": leg,
                "algorithm": result.algorithm,
                "total_distance_km": result.total_distance_km,
                "total_duration_estimate_min": result.total_duration_estimate_min,
            }
        )
    return buffer.getvalue()
