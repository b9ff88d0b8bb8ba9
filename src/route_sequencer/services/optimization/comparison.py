"""Benchmark every algorithm against the nearest-neighbor baseline."""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Sequence

from ...config import settings
from ...models.domain import RoutePoint
from .dispatcher import get_strategy
from .models import Algorithm, Improvement, OptimizationOptions, OptimizationResult

logger = logging.getLogger(__name__)

COMPARED_ALGORITHMS = (
    Algorithm.NEAREST_NEIGHBOR,
    Algorithm.TWO_OPT,
    Algorithm.GENETIC,
    Algorithm.ANT_COLONY,
    Algorithm.AUTO,
)


def improvement_over(baseline_km: float, candidate_km: float) -> Improvement:
    saved = baseline_km - candidate_km
    percent = saved / baseline_km * 100.0 if baseline_km > 0 else 0.0
    return Improvement(
        distance_saved_km=saved,
        time_saved_min=saved * settings.time_saved_factor,
        percent_improvement=percent,
    )


def compare_algorithms(
    points: Sequence[RoutePoint],
    options: OptimizationOptions | None = None,
    *,
    rng: random.Random | None = None,
) -> dict[str, OptimizationResult]:
    """Run all algorithms on the same stops and options.

    Every result gets an ``improvement`` relative to the nearest-neighbor run.
    """

    base_options = options or OptimizationOptions()
    results: dict[str, OptimizationResult] = {}
    for algorithm in COMPARED_ALGORITHMS:
        run_options = replace(base_options, algorithm=algorithm)
        results[algorithm.value] = get_strategy(algorithm).run(points, run_options, rng=rng)

    baseline = results[Algorithm.NEAREST_NEIGHBOR.value].total_distance_km
    for name, result in results.items():
        result.improvement = improvement_over(baseline, result.total_distance_km)
        logger.debug(f"{name}: {result.total_distance_km:.3f} km ({result.improvement.percent_improvement:+.1f}%)")
    return results
