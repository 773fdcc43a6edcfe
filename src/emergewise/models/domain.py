"""Domain models for incidents and evacuation routes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

ROUTE_FIELDS = (
    "name",
    "from_location",
    "to_location",
    "distance_km",
    "estimated_time_minutes",
    "capacity",
    "current_usage",
    "difficulty_level",
    "current_status",
)


@dataclass(slots=True, frozen=True)
class IncidentDescriptor:
    """Incident as reported by a responder or citizen."""

    type: str
    description: str
    location: str


@dataclass(slots=True)
class RouteCandidate:
    """Evacuation route row as stored in the ``evacuation_routes`` table."""

    name: str
    from_location: str
    to_location: str
    distance_km: Optional[float] = None
    estimated_time_minutes: Optional[int] = None
    capacity: Optional[int] = None
    current_usage: Optional[int] = None
    difficulty_level: Optional[str] = None
    current_status: str = "open"
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "RouteCandidate":
        distance = row.get("distance_km")
        minutes = row.get("estimated_time_minutes")
        capacity = row.get("capacity")
        usage = row.get("current_usage")
        return cls(
            name=str(row.get("name") or ""),
            from_location=str(row.get("from_location") or ""),
            to_location=str(row.get("to_location") or ""),
            distance_km=float(distance) if distance is not None else None,
            estimated_time_minutes=int(minutes) if minutes is not None else None,
            capacity=int(capacity) if capacity is not None else None,
            current_usage=int(usage) if usage is not None else None,
            difficulty_level=row.get("difficulty_level"),
            current_status=row.get("current_status") or "open",
            raw={key: value for key, value in row.items() if key not in ROUTE_FIELDS},
        )

    def utilization_pct(self) -> float | None:
        """Usage as a percentage of capacity; None when either is missing or capacity is zero."""
        if not self.capacity or self.current_usage is None:
            return None
        return self.current_usage / self.capacity * 100

    def to_dict(self) -> dict[str, Any]:
        payload = dict(self.raw)
        payload.update({name: getattr(self, name) for name in ROUTE_FIELDS})
        return payload


@dataclass(slots=True)
class OptimizationFactors:
    traffic: str = "moderate"
    weather: str = "clear"
    capacity_status: str = "unknown"
    estimated_delay: int = 0


@dataclass(slots=True)
class RankedRoute:
    """Winning candidate plus the metadata attached by the ranker."""

    route: RouteCandidate
    optimization_factors: OptimizationFactors
    ai_optimized: bool = True
    synthesized: bool = False

    def to_dict(self) -> dict[str, Any]:
        payload = self.route.to_dict()
        payload["ai_optimized"] = self.ai_optimized
        payload["optimization_factors"] = {
            "traffic": self.optimization_factors.traffic,
            "weather": self.optimization_factors.weather,
            "capacity_status": self.optimization_factors.capacity_status,
            "estimated_delay": self.optimization_factors.estimated_delay,
        }
        return payload


@dataclass(slots=True)
class ResourceRequirements:
    medical_teams: int
    fire_teams: int
    police_units: int
    shelters: int
    estimated_affected: int


@dataclass(slots=True)
class FallbackRoute:
    """Point-to-point route; ``polyline`` holds (lat, lon) pairs."""

    distance_km: float
    duration_minutes: float
    polyline: list[tuple[float, float]]
    route_type: str
