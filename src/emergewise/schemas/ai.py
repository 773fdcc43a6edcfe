"""Incident assessment request/response schemas."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

SeverityLevel = Literal["low", "medium", "high", "critical"]


class SeverityRequest(BaseModel):
    type: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)


class SeverityBreakdownModel(BaseModel):
    base_score: int
    keyword_score: int
    location_score: int
    final_score: int


class SeverityResponse(BaseModel):
    ai_severity_score: int = Field(..., ge=1, le=10)
    severity_level: SeverityLevel
    confidence: float
    breakdown: Optional[SeverityBreakdownModel] = None


class ResourcePredictionRequest(SeverityRequest):
    severity: float = Field(..., ge=0)


class ResourceRequirementsModel(BaseModel):
    medical_teams: int = Field(..., ge=0)
    fire_teams: int = Field(..., ge=0)
    police_units: int = Field(..., ge=0)
    shelters: int = Field(..., ge=0)
    estimated_affected: int = Field(..., ge=0)


class ResourcePredictionResponse(BaseModel):
    predicted_requirements: Optional[ResourceRequirementsModel]
    confidence: float
    factors_considered: List[str]


class RiskAssessmentRequest(BaseModel):
    location: str = Field(..., min_length=1)
    incident_types: Optional[List[str]] = None


class RiskAssessmentResponse(BaseModel):
    location: str
    overall_risk_score: float
    risk_factors: Dict[str, float]
    recommendations: List[str]
    last_updated: str


class EvacuationRecommendationRequest(BaseModel):
    location: str = Field(..., min_length=1)
    incident_type: str = Field(..., min_length=1)
    severity: SeverityLevel = "medium"
    population_density: float = Field(default=0.0, ge=0)


class RecommendedRouteModel(BaseModel):
    name: str
    estimated_time: Optional[int] = None
    capacity: str


class EvacuationRecommendationModel(BaseModel):
    immediate_actions: List[str]
    evacuation_priority: Literal["immediate", "urgent", "standard"]
    recommended_routes: List[RecommendedRouteModel]
    estimated_time: int
    resources_needed: Optional[ResourceRequirementsModel]


class EvacuationRecommendationResponse(BaseModel):
    recommendations: EvacuationRecommendationModel
    confidence: float
    generated_at: str
