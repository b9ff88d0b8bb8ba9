"""Factory for optimization strategies based on user selection."""

from __future__ import annotations

import random
from typing import Sequence

from ...models.domain import RoutePoint
from .ant_colony import AntColonyStrategy
from .auto import AutoStrategy
from .base import OptimizationStrategy
from .genetic import GeneticStrategy
from .models import Algorithm, OptimizationOptions, OptimizationResult
from .nearest_neighbor import NearestNeighborStrategy
from .two_opt import TwoOptStrategy


def get_strategy(algorithm: Algorithm | str) -> OptimizationStrategy:
    try:
        selected = Algorithm(algorithm)
    except ValueError as exc:
        raise ValueError(f"Unknown optimization algorithm '{algorithm}'.") from exc

    match selected:
        case Algorithm.NEAREST_NEIGHBOR:
            return NearestNeighborStrategy()
        case Algorithm.TWO_OPT:
            return TwoOptStrategy()
        case Algorithm.GENETIC:
            return GeneticStrategy()
        case Algorithm.ANT_COLONY:
            return AntColonyStrategy()
        case Algorithm.AUTO:
            return AutoStrategy()


def optimize(
    points: Sequence[RoutePoint],
    options: OptimizationOptions | None = None,
    *,
    rng: random.Random | None = None,
) -> OptimizationResult:
    options = options or OptimizationOptions()
    strategy = get_strategy(options.algorithm)
    return strategy.run(points, options, rng=rng)
