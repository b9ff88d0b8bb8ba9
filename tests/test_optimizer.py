import logging
import random

import pytest

from route_sequencer.config import settings
from route_sequencer.models.domain import RoutePoint
from route_sequencer.services.geospatial import haversine_km
from route_sequencer.services.optimization import (
    Algorithm,
    OptimizationOptions,
    get_strategy,
    optimize,
)
from route_sequencer.services.optimization.ant_colony import AntColonyStrategy
from route_sequencer.services.optimization.base import Deadline
from route_sequencer.services.optimization.genetic import GeneticStrategy
from route_sequencer.services.optimization.nearest_neighbor import NearestNeighborStrategy

ALL_ALGORITHMS = list(Algorithm)


def _point(pid: str, lat: float, lng: float) -> RoutePoint:
    return RoutePoint(id=pid, lat=lat, lng=lng)


def _scattered(count: int, seed: int) -> list[RoutePoint]:
    rng = random.Random(seed)
    return [_point(f"R{i}", 40.4 + rng.random() * 0.1, -3.7 + rng.random() * 0.1) for i in range(count)]


def test_get_strategy_accepts_enum_and_string():
    assert isinstance(get_strategy(Algorithm.GENETIC), GeneticStrategy)
    assert isinstance(get_strategy("ant_colony"), AntColonyStrategy)


def test_unknown_algorithm_is_rejected():
    with pytest.raises(ValueError, match="Unknown optimization algorithm"):
        get_strategy("simulated_annealing")


def test_default_algorithm_comes_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "default_algorithm", "nearest_neighbor")

    result = optimize(_scattered(8, 1))

    assert result.algorithm == "nearest_neighbor"


@pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
def test_degenerate_inputs_for_every_algorithm(algorithm):
    options = OptimizationOptions(algorithm=algorithm, max_iterations=3)

    empty = optimize([], options)
    single = optimize([_point("ONLY", 1.0, 2.0)], options)

    assert empty.route == []
    assert empty.total_distance_km == 0.0
    assert [point.id for point in single.route] == ["ONLY"]
    assert single.route[0].sequence == 1
    assert single.total_distance_km == 0.0


@pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
def test_every_algorithm_returns_a_permutation_with_start_first(algorithm):
    points = _scattered(11, 2)
    options = OptimizationOptions(algorithm=algorithm, max_iterations=8, ant_count=4, start_point=points[4])

    result = optimize(points, options, rng=random.Random(10))

    assert sorted(point.id for point in result.route) == sorted(point.id for point in points)
    assert result.route[0].id == points[4].id
    assert [point.sequence for point in result.route] == list(range(1, 12))
    assert result.processing_time_ms >= 0.0


def test_round_trip_adds_closing_stop_and_return_leg():
    points = [_point("A", 0.0, 0.0), _point("B", 0.0, 1.0), _point("C", 0.0, 2.0)]
    one_degree = haversine_km(0.0, 0.0, 0.0, 1.0)

    result = optimize(points, OptimizationOptions(algorithm=Algorithm.NEAREST_NEIGHBOR, round_trip=True))

    assert [point.id for point in result.route] == ["A", "B", "C"]
    assert result.total_distance_km == pytest.approx(4 * one_degree)
    assert result.closing_stop.id == "A"
    assert result.closing_stop.sequence == 4
    assert result.metadata["closing_leg_km"] == pytest.approx(2 * one_degree)
    assert result.metadata["round_trip"] is True


def test_open_route_has_no_closing_stop():
    result = optimize(_scattered(5, 3), OptimizationOptions(algorithm=Algorithm.TWO_OPT))

    assert result.closing_stop is None
    assert "closing_leg_km" not in result.metadata
    assert len(result.metadata["legs_km"]) == 5
    assert result.metadata["legs_km"][0] == 0.0
    assert sum(result.metadata["legs_km"]) == pytest.approx(result.total_distance_km)


def test_time_limit_stops_long_runs_early():
    points = _scattered(15, 4)
    options = OptimizationOptions(algorithm=Algorithm.GENETIC, max_iterations=10000, time_limit_ms=0.001)

    result = optimize(points, options, rng=random.Random(0))

    assert result.metadata["deadline_reached"] is True
    assert result.metadata["generations"] < 10000
    assert sorted(point.id for point in result.route) == sorted(point.id for point in points)


def test_without_time_limit_deadline_is_not_reported():
    result = optimize(_scattered(6, 5), OptimizationOptions(algorithm=Algorithm.NEAREST_NEIGHBOR))

    assert result.metadata["deadline_reached"] is False


def test_deadline_without_limit_never_expires():
    deadline = Deadline(None)

    assert deadline.expired() is False
    assert deadline.reached is False


def test_duration_estimate_uses_speed_and_service_time(monkeypatch):
    monkeypatch.setattr(settings, "average_speed_kmh", 60.0)
    monkeypatch.setattr(settings, "service_minutes_per_stop", 2.0)
    points = [_point("A", 0.0, 0.0), _point("B", 0.0, 1.0)]

    result = optimize(points, OptimizationOptions(algorithm=Algorithm.NEAREST_NEIGHBOR))

    assert result.total_duration_estimate_min == pytest.approx(result.total_distance_km + 4.0)


def test_run_logs_summary(caplog):
    caplog.set_level(logging.INFO)

    NearestNeighborStrategy().run(_scattered(4, 6))

    assert any("nearest_neighbor sequenced 4 stops" in message for message in caplog.messages)


def test_empty_input_logs_warning(caplog):
    caplog.set_level(logging.WARNING)

    optimize([], OptimizationOptions(algorithm=Algorithm.GENETIC))

    assert any("genetic called with 0 stop(s)" in message for message in caplog.messages)


@pytest.mark.parametrize(
    ("algorithm", "counter"),
    [(Algorithm.TWO_OPT, "two_opt_passes"), (Algorithm.ANT_COLONY, "iterations")],
)
def test_time_limit_stops_local_search_and_colony_early(algorithm, counter):
    points = _scattered(150, 8)
    options = OptimizationOptions(algorithm=algorithm, max_iterations=5000, time_limit_ms=0.001)

    result = optimize(points, options, rng=random.Random(0))

    assert result.metadata["deadline_reached"] is True
    assert result.metadata[counter] < 5000
    assert sorted(point.id for point in result.route) == sorted(point.id for point in points)


def test_options_default_algorithm_comes_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "default_algorithm", "two_opt")

    options = OptimizationOptions(max_iterations=5)
    result = optimize(_scattered(8, 9), options)

    assert options.algorithm is Algorithm.TWO_OPT
    assert result.algorithm == "two_opt"
