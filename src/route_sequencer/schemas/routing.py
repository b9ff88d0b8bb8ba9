"""Routing request/response schemas."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from ..models.domain import RoutePoint, TimeWindow

AlgorithmName = Literal["nearest_neighbor", "two_opt", "genetic", "ant_colony", "auto"]


class TimeWindowModel(BaseModel):
    start: str
    end: str


class RoutePointModel(BaseModel):
    id: str = Field(..., min_length=1)
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)
    label: str = ""
    priority: Optional[int] = Field(None, ge=1, le=10)
    time_window: Optional[TimeWindowModel] = None
    sequence: Optional[int] = None

    def to_domain(self) -> RoutePoint:
        window = TimeWindow(start=self.time_window.start, end=self.time_window.end) if self.time_window else None
        return RoutePoint(
            id=self.id,
            lat=self.lat,
            lng=self.lng,
            label=self.label,
            priority=self.priority,
            time_window=window,
        )


class OptimizationOptionsModel(BaseModel):
    algorithm: Optional[AlgorithmName] = Field(
        default=None,
        description="Algorithm to run. Defaults to the configured default algorithm.",
    )
    max_iterations: Optional[int] = Field(None, ge=1, le=10000)
    time_limit_ms: Optional[float] = Field(None, gt=0, le=300000)
    round_trip: bool = False
    start_point_id: Optional[str] = Field(default=None, description="Id of the stop the route must start from.")
    population_size: Optional[int] = Field(None, ge=2, le=1000)
    mutation_rate: Optional[float] = Field(None, ge=0.0, le=1.0)
    ant_count: Optional[int] = Field(None, ge=1, le=1000)
    evaporation_rate: Optional[float] = Field(None, ge=0.0, le=1.0)
    seed: Optional[int] = Field(default=None, description="Seed for reproducible stochastic runs.")


class LocationFilter(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)
    max_distance_km: Optional[float] = Field(None, gt=0)


class OptimizationRequest(BaseModel):
    points: List[RoutePointModel]
    options: OptimizationOptionsModel = Field(default_factory=OptimizationOptionsModel)
    location_filter: Optional[LocationFilter] = Field(
        default=None,
        description="Only sequence stops within a radius of this location.",
    )


class ImprovementModel(BaseModel):
    distance_saved_km: float
    time_saved_min: float
    percent_improvement: float


class OptimizationResultModel(BaseModel):
    route: List[RoutePointModel]
    total_distance_km: float
    total_duration_estimate_min: float
    algorithm: str
    processing_time_ms: float
    improvement: Optional[ImprovementModel] = None
    closing_stop: Optional[RoutePointModel] = None
    metadata: dict


class FilterInfo(BaseModel):
    applied: bool
    original_count: int
    filtered_count: int
    max_distance_km: Optional[float] = None


class OptimizationResponse(BaseModel):
    result: OptimizationResultModel
    original_distance_km: float
    distance_saved_km: float
    percent_improvement: float
    filter_info: FilterInfo


class ComparisonResponse(BaseModel):
    results: Dict[str, OptimizationResultModel]
    best_algorithm: str
    filter_info: FilterInfo


class AnalysisRequest(BaseModel):
    points: List[RoutePointModel]
    round_trip: bool = False


class BoundsModel(BaseModel):
    north: float
    south: float
    east: float
    west: float
    center_lat: float
    center_lng: float


class AnalysisResponse(BaseModel):
    stop_count: int
    total_distance_km: float
    estimated_duration_min: float
    bounds: Optional[BoundsModel] = None
