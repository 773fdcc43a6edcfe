"""Request-scoped dependencies shared by the route modules."""

from __future__ import annotations

from fastapi import Request

from ..data.routes_repository import RoutesRepository
from ..data.scoring_tables import get_scoring_tables
from ..services.assessment import ResourcePredictor, SeverityEstimator
from ..services.realtime import ConnectionHub
from ..services.routing.ranker import RouteRanker
from ..services.routing.service import build_ranker


def get_hub(request: Request) -> ConnectionHub:
    return request.app.state.hub


def get_routes_repository() -> RoutesRepository:
    return RoutesRepository()


def get_severity_estimator() -> SeverityEstimator:
    return SeverityEstimator(get_scoring_tables().severity)


def get_resource_predictor() -> ResourcePredictor:
    return ResourcePredictor(get_scoring_tables().resources)


def get_route_ranker() -> RouteRanker:
    return build_ranker()
