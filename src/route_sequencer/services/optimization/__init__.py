"""Route optimization engine."""

from .ant_colony import AntColonyStrategy, ant_colony
from .auto import AutoStrategy, auto
from .comparison import COMPARED_ALGORITHMS, compare_algorithms, improvement_over
from .dispatcher import get_strategy, optimize
from .genetic import GeneticStrategy, genetic
from .models import Algorithm, Improvement, OptimizationOptions, OptimizationResult
from .nearest_neighbor import NearestNeighborStrategy, nearest_neighbor
from .two_opt import TwoOptStrategy, two_opt

__all__ = [
    "Algorithm",
    "AntColonyStrategy",
    "AutoStrategy",
    "COMPARED_ALGORITHMS",
    "GeneticStrategy",
    "Improvement",
    "NearestNeighborStrategy",
    "OptimizationOptions",
    "OptimizationResult",
    "TwoOptStrategy",
    "ant_colony",
    "auto",
    "compare_algorithms",
    "genetic",
    "get_strategy",
    "improvement_over",
    "nearest_neighbor",
    "optimize",
    "two_opt",
]
