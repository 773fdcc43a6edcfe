"""Evacuation route request/response schemas."""

from __future__ import annotations

import math
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DifficultyLevel = Literal["easy", "moderate", "hard"]
RouteStatus = Literal["open", "congested", "closed"]


class RoutePreferencesModel(BaseModel):
    shortest_distance: bool = False
    fastest_time: bool = False
    avoid_congestion: bool = False


class OptimizeRouteRequest(BaseModel):
    from_location: str = Field(..., min_length=1)
    to_location: str = Field(..., min_length=1)
    preferences: Optional[RoutePreferencesModel] = None


class OptimizationFactorsModel(BaseModel):
    traffic: str
    weather: str
    capacity_status: str
    estimated_delay: int


class RankedRouteModel(BaseModel):
    """Best route plus optimization metadata; store columns such as ``id`` pass through."""

    model_config = ConfigDict(extra="allow")

    name: str
    from_location: str
    to_location: str
    distance_km: Optional[float] = None
    estimated_time_minutes: Optional[int] = None
    capacity: Optional[int] = None
    current_usage: Optional[int] = None
    difficulty_level: Optional[str] = None
    current_status: str
    ai_optimized: bool = True
    optimization_factors: OptimizationFactorsModel


class NewRouteRequest(BaseModel):
    name: str = Field(..., min_length=1)
    from_location: str = Field(..., min_length=1)
    to_location: str = Field(..., min_length=1)
    route_points: List[List[float]] = Field(default_factory=list, description="[lng, lat] pairs.")
    distance_km: Optional[float] = Field(None, ge=0)
    estimated_time_minutes: Optional[int] = Field(None, ge=0)
    difficulty_level: Optional[DifficultyLevel] = None
    capacity: Optional[int] = Field(None, ge=0)


class RouteStatusUpdate(BaseModel):
    current_status: RouteStatus
    current_usage: Optional[int] = Field(None, ge=0)


class CapacityStatusResponse(BaseModel):
    total_capacity: int
    total_usage: int
    utilization_percentage: float
    open_routes: int
    closed_routes: int
    total_routes: int


class DirectRouteRequest(BaseModel):
    start: tuple[float, float] = Field(..., description="(lat, lng) of the evacuee.")
    end: tuple[float, float] = Field(..., description="(lat, lng) of the destination.")
    use_routing_service: bool = Field(
        default=True,
        description="Ask OSRM first; False always returns the straight-line route.",
    )

    @field_validator("start", "end")
    @classmethod
    def _check_coordinate(cls, value: tuple[float, float]) -> tuple[float, float]:
        lat, lng = value
        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise ValueError("coordinates must be finite numbers")
        if not (-90 <= lat <= 90 and -180 <= lng <= 180):
            raise ValueError("coordinates must be (lat, lng) within valid ranges")
        return value


class RouteOptionModel(BaseModel):
    distance_km: float
    duration_minutes: float
    polyline: List[tuple[float, float]]
    route_type: str
    geojson: dict[str, Any]


class DirectRouteResponse(BaseModel):
    routes: List[RouteOptionModel]
    fallback: bool
