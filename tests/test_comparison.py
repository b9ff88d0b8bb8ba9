import random

import pytest

from route_sequencer.config import settings
from route_sequencer.models.domain import RoutePoint
from route_sequencer.services.optimization import OptimizationOptions, compare_algorithms
from route_sequencer.services.optimization.comparison import improvement_over


def _points(count: int, seed: int = 6) -> list[RoutePoint]:
    rng = random.Random(seed)
    return [RoutePoint(id=f"C{i}", lat=51.4 + rng.random() * 0.2, lng=-0.2 + rng.random() * 0.2) for i in range(count)]


@pytest.fixture
def results():
    options = OptimizationOptions(max_iterations=10, ant_count=5, seed=3)
    return compare_algorithms(_points(9), options)


def test_reports_every_algorithm(results):
    assert set(results) == {"nearest_neighbor", "two_opt", "genetic", "ant_colony", "auto"}
    assert results["auto"].algorithm == "auto(genetic)"


def test_improvement_is_measured_against_nearest_neighbor(results):
    baseline = results["nearest_neighbor"]

    assert baseline.improvement.percent_improvement == 0.0
    assert baseline.improvement.distance_saved_km == 0.0
    for result in results.values():
        expected = baseline.total_distance_km - result.total_distance_km
        assert result.improvement.distance_saved_km == pytest.approx(expected)
        assert result.improvement.time_saved_min == pytest.approx(expected * settings.time_saved_factor)


def test_every_result_covers_all_stops(results):
    for result in results.values():
        assert sorted(point.id for point in result.route) == sorted(f"C{i}" for i in range(9))


def test_zero_baseline_reports_zero_percent():
    saving = improvement_over(0.0, 0.0)

    assert saving.percent_improvement == 0.0
    assert saving.distance_saved_km == 0.0


def test_improvement_over_positive_baseline(monkeypatch):
    monkeypatch.setattr(settings, "time_saved_factor", 0.5)

    saving = improvement_over(10.0, 7.5)

    assert saving.distance_saved_km == pytest.approx(2.5)
    assert saving.percent_improvement == pytest.approx(25.0)
    assert saving.time_saved_min == pytest.approx(1.25)


def test_coincident_stops_compare_cleanly():
    points = [RoutePoint(id=f"Z{i}", lat=1.0, lng=1.0) for i in range(4)]

    results = compare_algorithms(points, OptimizationOptions(max_iterations=3, seed=1))

    for result in results.values():
        assert result.total_distance_km == 0.0
        assert result.improvement.percent_improvement == 0.0
