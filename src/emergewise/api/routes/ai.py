"""Incident assessment endpoints."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from ...data.routes_repository import CandidateFetchError, RoutesRepository
from ...models.domain import IncidentDescriptor
from ...schemas.ai import (
    EvacuationRecommendationRequest,
    EvacuationRecommendationResponse,
    ResourcePredictionRequest,
    ResourcePredictionResponse,
    RiskAssessmentRequest,
    RiskAssessmentResponse,
    SeverityRequest,
    SeverityResponse,
)
from ...services.assessment import (
    ResourcePredictor,
    SeverityEstimator,
    assess_location_risk,
    evacuation_recommendations,
    severity_level,
)
from ...services.routing.ranker import RouteRanker
from ..deps import get_resource_predictor, get_route_ranker, get_routes_repository, get_severity_estimator

router = APIRouter(prefix="/ai", tags=["ai"])

logger = logging.getLogger(__name__)

SEVERITY_CONFIDENCE = 0.85
RESOURCE_CONFIDENCE = 0.78
RECOMMENDATION_CONFIDENCE = 0.82
RESOURCE_FACTORS = ["incident_type", "severity_level", "location_density", "historical_data"]
MAX_RECOMMENDED_ROUTES = 2


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.post("/severity", response_model=SeverityResponse, status_code=status.HTTP_200_OK)
def calculate_severity(
    payload: SeverityRequest,
    estimator: SeverityEstimator = Depends(get_severity_estimator),
) -> SeverityResponse:
    incident = IncidentDescriptor(type=payload.type, description=payload.description, location=payload.location)
    result = estimator.assess_incident(incident)
    return SeverityResponse(
        ai_severity_score=result.final_score,
        severity_level=severity_level(result.final_score),
        confidence=SEVERITY_CONFIDENCE,
        breakdown=asdict(result),
    )


@router.post("/predict-resources", response_model=ResourcePredictionResponse, status_code=status.HTTP_200_OK)
def predict_resources(
    payload: ResourcePredictionRequest,
    predictor: ResourcePredictor = Depends(get_resource_predictor),
) -> ResourcePredictionResponse:
    requirements = predictor.predict(payload.type, payload.severity)
    return ResourcePredictionResponse(
        predicted_requirements=asdict(requirements) if requirements else None,
        confidence=RESOURCE_CONFIDENCE,
        factors_considered=RESOURCE_FACTORS,
    )


@router.post("/risk-assessment", response_model=RiskAssessmentResponse, status_code=status.HTTP_200_OK)
def risk_assessment(payload: RiskAssessmentRequest) -> RiskAssessmentResponse:
    assessment = assess_location_risk(payload.location)
    return RiskAssessmentResponse(**asdict(assessment), last_updated=_now())


@router.post(
    "/evacuation-recommendations",
    response_model=EvacuationRecommendationResponse,
    status_code=status.HTTP_200_OK,
)
def recommend_evacuation(
    payload: EvacuationRecommendationRequest,
    repository: RoutesRepository = Depends(get_routes_repository),
    ranker: RouteRanker = Depends(get_route_ranker),
    predictor: ResourcePredictor = Depends(get_resource_predictor),
) -> EvacuationRecommendationResponse:
    # Routes are advisory here; a store outage should not hide the other advice.
    try:
        candidates = repository.fetch_open_candidates(payload.location)
    except CandidateFetchError as exc:
        logger.warning(f"Recommended routes unavailable for '{payload.location}': {exc}")
        candidates = []

    routes = [
        {
            "name": route.name,
            "estimated_time": route.estimated_time_minutes,
            "capacity": ranker.capacity_status(route),
        }
        for route in ranker.order(candidates)[:MAX_RECOMMENDED_ROUTES]
    ]
    recommendation = evacuation_recommendations(
        payload.location,
        payload.incident_type,
        payload.severity,
        payload.population_density,
        predictor=predictor,
        recommended_routes=routes,
    )
    return EvacuationRecommendationResponse(
        recommendations=asdict(recommendation),
        confidence=RECOMMENDATION_CONFIDENCE,
        generated_at=_now(),
    )
