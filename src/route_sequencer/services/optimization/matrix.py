"""Dense great-circle distance matrix over a fixed set of stops."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ...models.domain import RoutePoint
from ..geospatial import EARTH_RADIUS_KM


class DistanceMatrix:
    """Pairwise haversine distances (km), indexed by position in the point arena.

    Tours are lists of indices into this matrix, so reordering never copies or
    drops the underlying points.
    """

    def __init__(self, values: np.ndarray) -> None:
        self.values = values
        # Plain lists are much faster than numpy scalar indexing in the tight loops.
        self.rows: list[list[float]] = values.tolist()

    @classmethod
    def from_points(cls, points: Sequence[RoutePoint]) -> "DistanceMatrix":
        if not points:
            return cls(np.zeros((0, 0)))

        lat = np.radians(np.array([point.lat for point in points], dtype=float))
        lng = np.radians(np.array([point.lng for point in points], dtype=float))
        d_phi = lat[:, None] - lat[None, :]
        d_lambda = lng[:, None] - lng[None, :]

        a = np.sin(d_phi / 2) ** 2 + np.cos(lat)[:, None] * np.cos(lat)[None, :] * np.sin(d_lambda / 2) ** 2
        a = np.clip(a, 0.0, 1.0)
        values = EARTH_RADIUS_KM * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

        # Mirror the upper triangle so d(i, j) == d(j, i) bit for bit.
        values = np.triu(values, 1) + np.triu(values, 1).T
        return cls(values)

    def __len__(self) -> int:
        return len(self.rows)

    def between(self, i: int, j: int) -> float:
        return self.rows[i][j]

    def tour_length(self, tour: Sequence[int], *, closed: bool = False) -> float:
        if len(tour) < 2:
            return 0.0
        rows = self.rows
        total = 0.0
        for a, b in zip(tour, tour[1:]):
            total += rows[a][b]
        if closed:
            total += rows[tour[-1]][tour[0]]
        return total

    def leg_lengths(self, tour: Sequence[int]) -> list[float]:
        """Distance from the previous stop for every stop of the tour (0 for the first)."""

        if not tour:
            return []
        rows = self.rows
        return [0.0] + [rows[a][b] for a, b in zip(tour, tour[1:])]
