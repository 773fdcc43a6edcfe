"""Rule-based incident severity estimation."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ...data.scoring_tables import SeverityTables, get_scoring_tables
from ...models.domain import IncidentDescriptor

logger = logging.getLogger(__name__)

SEVERITY_LEVELS = (
    (8, "critical"),
    (6, "high"),
    (4, "medium"),
)
LEVEL_SCORES = {"low": 3, "medium": 5, "high": 7, "critical": 9}


@dataclass(slots=True)
class SeverityBreakdown:
    base_score: int
    keyword_score: int
    location_score: int
    final_score: int


class SeverityEstimator:
    """Scores an incident from its type, description keywords and location.

    Scoring never raises: an unexpected failure is logged and the table's
    fallback score is returned so incident intake is never blocked.
    """

    def __init__(self, tables: SeverityTables | None = None) -> None:
        self.tables = tables or get_scoring_tables().severity

    def base_score(self, incident_type: str) -> int:
        return self.tables.type_scores.get(incident_type.strip().lower(), self.tables.default_type_score)

    def keyword_score(self, description: str) -> int:
        text = description.lower()
        high = sum(1 for keyword in self.tables.high_keywords if keyword in text)
        medium = sum(1 for keyword in self.tables.medium_keywords if keyword in text)
        return high * self.tables.high_keyword_points + medium * self.tables.medium_keyword_points

    def location_score(self, location: str) -> int:
        text = location.lower()
        if any(area in text for area in self.tables.high_density_areas):
            return self.tables.location_points
        return 0

    def breakdown(self, incident_type: str, description: str, location: str) -> SeverityBreakdown:
        base = self.base_score(incident_type)
        keywords = self.keyword_score(description)
        density = self.location_score(location)
        final = min(self.tables.max_score, max(self.tables.min_score, base + keywords + density))
        return SeverityBreakdown(base_score=base, keyword_score=keywords, location_score=density, final_score=final)

    def assess(self, incident_type: str, description: str, location: str) -> SeverityBreakdown:
        try:
            result = self.breakdown(incident_type, description, location)
        except Exception:
            logger.exception(f"Severity estimation failed for incident type '{incident_type}'")
            fallback = self.tables.fallback_score
            return SeverityBreakdown(base_score=fallback, keyword_score=0, location_score=0, final_score=fallback)
        logger.info(
            f"Severity calculated: type={incident_type} base={result.base_score} "
            f"keywords={result.keyword_score} location={result.location_score} final={result.final_score}"
        )
        return result

    def estimate(self, incident_type: str, description: str, location: str) -> int:
        return self.assess(incident_type, description, location).final_score

    def assess_incident(self, incident: IncidentDescriptor) -> SeverityBreakdown:
        return self.assess(incident.type, incident.description, incident.location)


def severity_level(score: int) -> str:
    """Map a 1-10 score onto the alert vocabulary used by the dashboards."""
    for threshold, level in SEVERITY_LEVELS:
        if score >= threshold:
            return level
    return "low"


def severity_from_level(level: str) -> int:
    return LEVEL_SCORES.get(level, 5)
