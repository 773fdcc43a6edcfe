"""Incident assessment service exports."""

from .resources import ResourcePredictor
from .risk import assess_location_risk, evacuation_recommendations
from .severity import SeverityEstimator, severity_from_level, severity_level

__all__ = [
    "SeverityEstimator",
    "ResourcePredictor",
    "severity_level",
    "severity_from_level",
    "assess_location_risk",
    "evacuation_recommendations",
]
