import csv
import io

import pytest

from route_sequencer.models.domain import RoutePoint, TimeWindow
from route_sequencer.services.optimization import Algorithm, OptimizationOptions, optimize
from route_sequencer.services.outputs.routing_formatter import result_to_csv, result_to_json


def _points() -> list[RoutePoint]:
    return [
        RoutePoint(id="A", lat=21.50, lng=39.20, label="Warehouse"),
        RoutePoint(id="B", lat=21.52, lng=39.22, label="Shop", time_window=TimeWindow("08:00", "10:00")),
        RoutePoint(id="C", lat=21.55, lng=39.25, label="Clinic", priority=2),
    ]


def _rows(text: str) -> list[dict]:
    return list(csv.DictReader(io.StringIO(text)))


def test_csv_has_one_row_per_stop():
    result = optimize(_points(), OptimizationOptions(algorithm=Algorithm.NEAREST_NEIGHBOR))

    rows = _rows(result_to_csv(result))

    assert [row["point_id"] for row in rows] == ["A", "B", "C"]
    assert [row["sequence"] for row in rows] == ["1", "2", "3"]
    assert rows[0]["label"] == "Warehouse"
    assert float(rows[0]["distance_from_prev_km"]) == 0.0
    assert all(row["algorithm"] == "nearest_neighbor" for row in rows)
    assert sum(float(row["distance_from_prev_km"]) for row in rows) == pytest.approx(float(rows[0]["total_distance_km"]))


def test_csv_round_trip_repeats_first_stop():
    result = optimize(_points(), OptimizationOptions(algorithm=Algorithm.NEAREST_NEIGHBOR, round_trip=True))

    rows = _rows(result_to_csv(result))

    assert [row["point_id"] for row in rows] == ["A", "B", "C", "A"]
    assert rows[-1]["sequence"] == "4"
    assert float(rows[-1]["distance_from_prev_km"]) > 0.0


def test_json_payload_keeps_optional_point_fields():
    result = optimize(_points(), OptimizationOptions(algorithm=Algorithm.NEAREST_NEIGHBOR))

    payload = result_to_json(result)

    assert payload["algorithm"] == "nearest_neighbor"
    assert payload["improvement"] is None
    assert payload["closing_stop"] is None
    assert payload["route"][1]["time_window"] == {"start": "08:00", "end": "10:00"}
    assert payload["route"][2]["priority"] == 2
    assert payload["metadata"]["stops"] == 3
