"""Routing orchestration service."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Sequence

from ...config import settings
from ...models.domain import RoutePoint
from ...schemas.routing import (
    AnalysisRequest,
    AnalysisResponse,
    BoundsModel,
    ComparisonResponse,
    FilterInfo,
    OptimizationOptionsModel,
    OptimizationRequest,
    OptimizationResponse,
    OptimizationResultModel,
)
from ..analysis import analyze_points
from ..geospatial import filter_by_radius, total_distance_km, validate_points
from ..optimization import (
    Algorithm,
    OptimizationOptions,
    OptimizationResult,
    compare_algorithms,
    improvement_over,
    optimize,
)
from ..outputs.routing_formatter import result_to_csv, result_to_json

logger = logging.getLogger(__name__)


def _build_options(payload: OptimizationOptionsModel, points: Sequence[RoutePoint]) -> OptimizationOptions:
    start_point = None
    if payload.start_point_id is not None:
        start_point = next((point for point in points if point.id == payload.start_point_id), None)
        if start_point is None:
            raise ValueError(f"Start point '{payload.start_point_id}' is not among the submitted stops.")

    return OptimizationOptions(
        algorithm=Algorithm(payload.algorithm or settings.default_algorithm),
        max_iterations=payload.max_iterations,
        time_limit_ms=payload.time_limit_ms,
        round_trip=payload.round_trip,
        start_point=start_point,
        population_size=payload.population_size,
        mutation_rate=payload.mutation_rate,
        ant_count=payload.ant_count,
        evaporation_rate=payload.evaporation_rate,
        seed=payload.seed,
    )


def _prepare_points(payload: OptimizationRequest) -> tuple[list[RoutePoint], FilterInfo]:
    points = [point.to_domain() for point in payload.points]
    validate_points(points)

    location = payload.location_filter
    if location is None:
        return points, FilterInfo(applied=False, original_count=len(points), filtered_count=len(points))

    radius = location.max_distance_km or settings.default_filter_radius_km
    filtered = filter_by_radius(points, location.lat, location.lng, radius)
    info = FilterInfo(
        applied=True,
        original_count=len(points),
        filtered_count=len(filtered),
        max_distance_km=radius,
    )
    logger.info(f"Location filter applied: {info.original_count} -> {info.filtered_count} stops (radius {radius} km)")
    if len(filtered) < 2:
        raise ValueError(
            f"Only {len(filtered)} stop(s) found within {radius} km of the given location. "
            "Increase the radius or remove the location filter."
        )
    return filtered, info


def _result_model(result: OptimizationResult) -> OptimizationResultModel:
    return OptimizationResultModel.model_validate(result_to_json(result))


def run_optimization(payload: OptimizationRequest) -> tuple[OptimizationResult, FilterInfo]:
    points, filter_info = _prepare_points(payload)
    options = _build_options(payload.options, points)
    logger.info(f"Optimizing {len(points)} stops with algorithm '{options.algorithm.value}'")
    return optimize(points, options), filter_info


def optimize_route(payload: OptimizationRequest) -> OptimizationResponse:
    result, filter_info = run_optimization(payload)

    original_points = [point.to_domain() for point in payload.points]
    if filter_info.applied:
        kept = {point.id for point in result.route}
        original_points = [point for point in original_points if point.id in kept]
    original_distance = total_distance_km(original_points, round_trip=payload.options.round_trip)
    saving = improvement_over(original_distance, result.total_distance_km)
    result.improvement = saving

    return OptimizationResponse(
        result=_result_model(result),
        original_distance_km=original_distance,
        distance_saved_km=saving.distance_saved_km,
        percent_improvement=saving.percent_improvement,
        filter_info=filter_info,
    )


def compare_route(payload: OptimizationRequest) -> ComparisonResponse:
    points, filter_info = _prepare_points(payload)
    options = _build_options(payload.options, points)
    results = compare_algorithms(points, options)
    best_algorithm = min(results, key=lambda name: results[name].total_distance_km)
    return ComparisonResponse(
        results={name: _result_model(result) for name, result in results.items()},
        best_algorithm=best_algorithm,
        filter_info=filter_info,
    )


def export_route_csv(payload: OptimizationRequest) -> str:
    result, _ = run_optimization(payload)
    return result_to_csv(result)


def analyze_route(payload: AnalysisRequest) -> AnalysisResponse:
    points = [point.to_domain() for point in payload.points]
    validate_points(points)
    analysis = analyze_points(points, round_trip=payload.round_trip)
    return AnalysisResponse(
        stop_count=analysis.stop_count,
        total_distance_km=analysis.total_distance_km,
        estimated_duration_min=analysis.estimated_duration_min,
        bounds=BoundsModel(**asdict(analysis.bounds)) if analysis.bounds else None,
    )
