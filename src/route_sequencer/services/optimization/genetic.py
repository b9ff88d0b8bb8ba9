"""Genetic algorithm over visiting orders."""

from __future__ import annotations

import logging
import random
from typing import Sequence

from ...config import settings
from ...models.domain import RoutePoint
from .base import OptimizationStrategy, TourProblem
from .models import Algorithm, OptimizationOptions, OptimizationResult
from .nearest_neighbor import build_nearest_neighbor_tour

logger = logging.getLogger(__name__)


def fitness(distance_km: float) -> float:
    return 1.0 / (1.0 + distance_km)


def random_tour(base: Sequence[int], rng: random.Random, lower: int = 0) -> list[int]:
    """Shuffle ``base`` from position ``lower`` onwards."""
    head = list(base[:lower])
    tail = list(base[lower:])
    rng.shuffle(tail)
    return head + tail


def tournament_select(
    population: Sequence[list[int]],
    scores: Sequence[float],
    rng: random.Random,
    size: int,
) -> list[int]:
    best = rng.randrange(len(population))
    for _ in range(size - 1):
        competitor = rng.randrange(len(population))
        if scores[competitor] > scores[best]:
            best = competitor
    return population[best]


def order_crossover(
    parent_a: Sequence[int],
    parent_b: Sequence[int],
    rng: random.Random,
    lower: int = 0,
) -> list[int]:
    """Order crossover (OX).

    A random slice ``[start, end]`` of ``parent_a`` is copied in place; the
    remaining positions are filled left to right with ``parent_b``'s genes in
    ``parent_b`` order, skipping genes the child already holds. The child is
    always a permutation of the parents' genes.
    """

    n = len(parent_a)
    start = rng.randrange(lower, n)
    end = rng.randrange(start, n)

    child: list[int | None] = [None] * n
    child[start : end + 1] = parent_a[start : end + 1]
    taken = set(parent_a[start : end + 1])
    donors = (gene for gene in parent_b if gene not in taken)
    for position in range(n):
        if child[position] is None:
            child[position] = next(donors)
    return child  # type: ignore[return-value]


def swap_mutation(tour: list[int], rng: random.Random, lower: int = 0) -> None:
    i = rng.randrange(lower, len(tour))
    j = rng.randrange(lower, len(tour))
    tour[i], tour[j] = tour[j], tour[i]


def evolve(problem: TourProblem, options: OptimizationOptions, rng: random.Random, generations: int) -> list[int]:
    """Run the GA and return the best tour seen in any generation."""

    n = problem.size
    if n <= 3:
        return problem.initial_tour()

    lower = problem.first_free_position
    population_size = max(2, options.population_size or min(settings.genetic_max_population, 2 * n))
    mutation_rate = options.mutation_rate if options.mutation_rate is not None else settings.genetic_mutation_rate
    elite_count = max(1, int(population_size * settings.genetic_elite_fraction))
    tournament_size = settings.genetic_tournament_size

    seed_tour = build_nearest_neighbor_tour(problem)
    population = [seed_tour] + [random_tour(seed_tour, rng, lower) for _ in range(population_size - 1)]

    best_tour = list(seed_tour)
    best_cost = problem.cost(seed_tour)
    completed = 0

    for generation in range(generations):
        if problem.deadline.expired():
            logger.debug(f"Genetic search stopped by deadline after {generation} generations")
            break

        costs = [problem.cost(tour) for tour in population]
        scores = [fitness(cost) for cost in costs]
        ranked = sorted(range(len(population)), key=lambda k: scores[k], reverse=True)

        leader = ranked[0]
        if costs[leader] < best_cost:
            best_cost = costs[leader]
            best_tour = list(population[leader])

        next_population = [list(population[k]) for k in ranked[:elite_count]]
        while len(next_population) < population_size:
            parent_a = tournament_select(population, scores, rng, tournament_size)
            parent_b = tournament_select(population, scores, rng, tournament_size)
            child = order_crossover(parent_a, parent_b, rng, lower)
            if rng.random() < mutation_rate:
                swap_mutation(child, rng, lower)
            next_population.append(child)

        population = next_population
        completed = generation + 1

    for tour in population:
        cost = problem.cost(tour)
        if cost < best_cost:
            best_cost = cost
            best_tour = list(tour)

    problem.metadata["generations"] = completed
    problem.metadata["population_size"] = population_size
    return best_tour


class GeneticStrategy(OptimizationStrategy):
    algorithm = Algorithm.GENETIC

    def solve(self, problem: TourProblem, options: OptimizationOptions, rng: random.Random) -> list[int]:
        generations = options.max_iterations or settings.genetic_generations
        return evolve(problem, options, rng, generations)


def genetic(
    points: Sequence[RoutePoint],
    options: OptimizationOptions | None = None,
    *,
    rng: random.Random | None = None,
) -> OptimizationResult:
    return GeneticStrategy().run(points, options, rng=rng)
