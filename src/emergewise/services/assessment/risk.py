"""Area risk assessment and evacuation recommendations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ...data.scoring_tables import RiskTables, get_scoring_tables
from ...models.domain import ResourceRequirements
from .resources import ResourcePredictor
from .severity import severity_from_level

IMMEDIATE_ACTIONS: dict[str, list[str]] = {
    "earthquake": [
        "Drop, Cover, and Hold On",
        "Stay away from windows and heavy objects",
        "If outdoors, move away from buildings",
    ],
    "flood": [
        "Move to higher ground immediately",
        "Avoid walking or driving through flood water",
        "Turn off utilities if safe to do so",
    ],
    "fire": [
        "Evacuate immediately if safe",
        "Stay low to avoid smoke",
        "Call emergency services",
    ],
}
DEFAULT_ACTIONS = ["Follow local emergency procedures", "Contact emergency services"]

# (hazard, threshold, recommendations added when the hazard risk exceeds it)
RISK_RECOMMENDATIONS = (
    ("flood", 7.0, ["Install flood warning systems", "Prepare sandbags and drainage equipment"]),
    ("earthquake", 6.0, ["Conduct earthquake drills regularly", "Secure heavy furniture and equipment"]),
    ("fire", 6.0, ["Install fire detection systems", "Maintain clear evacuation routes"]),
)

BASE_EVACUATION_MINUTES = 30
DENSE_AREA_THRESHOLD = 1000
BUSY_AREA_THRESHOLD = 500


@dataclass(slots=True)
class RiskAssessment:
    location: str
    overall_risk_score: float
    risk_factors: dict[str, float]
    recommendations: list[str]


@dataclass(slots=True)
class EvacuationRecommendation:
    immediate_actions: list[str]
    evacuation_priority: str
    estimated_time: int
    resources_needed: Optional[ResourceRequirements]
    recommended_routes: list[dict] = field(default_factory=list)


def location_risk(location: str, hazard: str, tables: RiskTables | None = None) -> float:
    tables = tables or get_scoring_tables().risk
    text = location.lower()
    for city, risks in tables.location_risks.items():
        if city in text:
            return risks.get(hazard, tables.default_risk)
    return tables.default_risk


def assess_location_risk(location: str, tables: RiskTables | None = None) -> RiskAssessment:
    tables = tables or get_scoring_tables().risk
    factors = {hazard: location_risk(location, hazard, tables) for hazard in tables.hazards}
    overall = sum(factors.values()) / len(factors) if factors else tables.default_risk

    recommendations: list[str] = []
    for hazard, threshold, advice in RISK_RECOMMENDATIONS:
        if factors.get(hazard, 0.0) > threshold:
            recommendations.extend(advice)

    return RiskAssessment(
        location=location,
        overall_risk_score=round(overall, 1),
        risk_factors=factors,
        recommendations=recommendations,
    )


def evacuation_priority(level: str, population_density: float) -> str:
    if level == "critical" or population_density > DENSE_AREA_THRESHOLD:
        return "immediate"
    if level == "high" or population_density > BUSY_AREA_THRESHOLD:
        return "urgent"
    return "standard"


def evacuation_time_minutes(population_density: float, level: str) -> int:
    minutes = BASE_EVACUATION_MINUTES
    if population_density > DENSE_AREA_THRESHOLD:
        minutes += 20
    if level == "critical":
        minutes += 15
    return minutes


def evacuation_recommendations(
    location: str,
    incident_type: str,
    level: str,
    population_density: float = 0.0,
    *,
    predictor: ResourcePredictor | None = None,
    recommended_routes: list[dict] | None = None,
) -> EvacuationRecommendation:
    """Bundle actions, priority, timing and resource needs for an affected area."""

    predictor = predictor or ResourcePredictor()
    return EvacuationRecommendation(
        immediate_actions=list(IMMEDIATE_ACTIONS.get(incident_type, DEFAULT_ACTIONS)),
        evacuation_priority=evacuation_priority(level, population_density),
        estimated_time=evacuation_time_minutes(population_density, level),
        resources_needed=predictor.predict(incident_type, severity_from_level(level)),
        recommended_routes=recommended_routes or [],
    )
