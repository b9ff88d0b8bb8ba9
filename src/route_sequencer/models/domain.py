"""Domain models for route stops."""

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True, frozen=True)
class TimeWindow:
    """Delivery window expressed as caller-formatted strings (e.g. ``"08:00"``)."""

    start: str
    end: str


@dataclass(slots=True, frozen=True)
class RoutePoint:
    """A stop to be sequenced.

    Points are never mutated by the optimizers; results carry copies with
    ``sequence`` filled in (1-based).
    """

    id: str
    lat: float
    lng: float
    label: str = ""
    priority: Optional[int] = None
    time_window: Optional[TimeWindow] = None
    sequence: Optional[int] = None
