"""Lookup tables used by the severity, resource and route scoring services.

Every table ships with built-in defaults. A JSON file referenced by
``EMERGEWISE_SCORING_TABLES_FILE`` can override any subset of them, e.g.::

    {"routes": {"city_distances_km": {"pune-mumbai": 150}}}

Sections or keys left out of the file keep their defaults.
"""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import settings


class _Table(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class SeverityTables(_Table):
    type_scores: dict[str, int] = Field(
        default_factory=lambda: {
            "earthquake": 8,
            "flood": 7,
            "fire": 6,
            "weather": 5,
            "accident": 4,
            "hazmat": 7,
            "medical": 3,
            "other": 3,
        }
    )
    default_type_score: int = 5
    high_keywords: tuple[str, ...] = (
        "multiple casualties",
        "building collapse",
        "major damage",
        "widespread",
        "critical",
        "emergency",
        "immediate",
        "severe",
        "massive",
        "extensive",
    )
    medium_keywords: tuple[str, ...] = ("injury", "damage", "blocked", "minor", "moderate", "some")
    high_keyword_points: int = 2
    medium_keyword_points: int = 1
    high_density_areas: tuple[str, ...] = (
        "mumbai",
        "delhi",
        "bangalore",
        "chennai",
        "kolkata",
        "hyderabad",
        "pune",
        "ahmedabad",
        "surat",
        "jaipur",
        "lucknow",
        "kanpur",
    )
    location_points: int = 1
    min_score: int = 1
    max_score: int = 10
    fallback_score: int = 5


class ResourceMultipliers(_Table):
    medical_teams: float
    fire_teams: float
    police_units: float
    shelters: float
    estimated_affected: float


class ResourceTables(_Table):
    by_type: dict[str, ResourceMultipliers] = Field(
        default_factory=lambda: {
            "earthquake": ResourceMultipliers(
                medical_teams=2, fire_teams=1.5, police_units=1, shelters=3, estimated_affected=100
            ),
            "flood": ResourceMultipliers(
                medical_teams=1.5, fire_teams=1, police_units=1, shelters=4, estimated_affected=150
            ),
            "fire": ResourceMultipliers(
                medical_teams=1, fire_teams=3, police_units=0.5, shelters=1, estimated_affected=50
            ),
        }
    )
    default: ResourceMultipliers = ResourceMultipliers(
        medical_teams=1, fire_teams=0.5, police_units=1, shelters=1, estimated_affected=25
    )


class RouteTables(_Table):
    city_distances_km: dict[str, float] = Field(
        default_factory=lambda: {
            "delhi-mumbai": 1400,
            "mumbai-bangalore": 980,
            "delhi-bangalore": 2150,
            "chennai-bangalore": 350,
            "kolkata-delhi": 1470,
        }
    )
    default_distance_km: float = 50
    minutes_per_km: float = 3
    base_score: float = 100
    distance_weight: float = 2
    time_weight: float = 0.5
    utilization_weight: float = 0.3
    difficulty_adjustments: dict[str, float] = Field(
        default_factory=lambda: {"easy": 0, "moderate": -5, "hard": -15}
    )
    capacity_low_below_pct: float = 30
    capacity_moderate_below_pct: float = 70


class RiskTables(_Table):
    location_risks: dict[str, dict[str, float]] = Field(
        default_factory=lambda: {
            "mumbai": {"flood": 8.5, "earthquake": 4.2, "fire": 6.1, "weather": 7.3},
            "delhi": {"flood": 5.8, "earthquake": 6.7, "fire": 7.2, "weather": 6.9},
            "chennai": {"flood": 9.1, "earthquake": 3.8, "fire": 5.9, "weather": 8.2},
            "kolkata": {"flood": 8.8, "earthquake": 5.1, "fire": 6.3, "weather": 7.8},
            "bangalore": {"flood": 6.2, "earthquake": 4.5, "fire": 6.8, "weather": 5.9},
        }
    )
    hazards: tuple[str, ...] = ("flood", "earthquake", "fire", "weather")
    default_risk: float = 5.0


class ScoringTables(_Table):
    severity: SeverityTables = SeverityTables()
    resources: ResourceTables = ResourceTables()
    routes: RouteTables = RouteTables()
    risk: RiskTables = RiskTables()


def load_scoring_tables_file(path: Path) -> ScoringTables:
    """Parse a calibration file into a full table set."""
    if not path.exists():
        raise FileNotFoundError(f"Scoring tables file not found: {path}")
    return ScoringTables.model_validate_json(path.read_text(encoding="utf-8"))


@functools.lru_cache(maxsize=1)
def get_scoring_tables(source: Optional[Path] = None) -> ScoringTables:
    """Return the active tables: the calibration file when configured, else the defaults."""

    path = source or settings.scoring_tables_file
    if path is None:
        return ScoringTables()
    return load_scoring_tables_file(path)
