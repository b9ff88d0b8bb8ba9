import random

import pytest

from route_sequencer.config import settings
from route_sequencer.models.domain import RoutePoint
from route_sequencer.services.optimization import Algorithm, OptimizationOptions, auto
from route_sequencer.services.optimization.auto import GENETIC_PATH, NN_TWO_OPT_PATH, select_path


def _points(count: int) -> list[RoutePoint]:
    rng = random.Random(count)
    return [RoutePoint(id=f"S{i}", lat=-33.9 + rng.random() * 0.2, lng=18.4 + rng.random() * 0.2) for i in range(count)]


@pytest.mark.parametrize(
    ("count", "expected"),
    [
        (2, "auto(nearest_neighbor+two_opt)"),
        (5, "auto(nearest_neighbor+two_opt)"),
        (6, "auto(genetic)"),
        (20, "auto(genetic)"),
        (21, "auto(nearest_neighbor+two_opt)"),
        (40, "auto(nearest_neighbor+two_opt)"),
    ],
)
def test_algorithm_tag_follows_stop_count(count, expected):
    options = OptimizationOptions(algorithm=Algorithm.AUTO, max_iterations=5)

    result = auto(_points(count), options, rng=random.Random(0))

    assert result.algorithm == expected
    assert len(result.route) == count


def test_thresholds_come_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "auto_small_max", 2)
    monkeypatch.setattr(settings, "auto_medium_max", 4)

    assert select_path(2) == NN_TWO_OPT_PATH
    assert select_path(3) == GENETIC_PATH
    assert select_path(4) == GENETIC_PATH
    assert select_path(5) == NN_TWO_OPT_PATH


def test_genetic_tier_uses_auto_generation_budget(monkeypatch):
    monkeypatch.setattr(settings, "auto_genetic_generations", 7)

    result = auto(_points(10), OptimizationOptions(algorithm=Algorithm.AUTO), rng=random.Random(4))

    assert result.metadata["auto_path"] == GENETIC_PATH
    assert result.metadata["generations"] == 7


def test_start_point_is_honoured_on_both_paths():
    small = _points(4)
    medium = _points(12)

    small_result = auto(small, OptimizationOptions(start_point=small[3]))
    medium_result = auto(medium, OptimizationOptions(start_point=medium[7], max_iterations=10), rng=random.Random(1))

    assert small_result.route[0].id == small[3].id
    assert medium_result.route[0].id == medium[7].id
