"""Evacuation route optimization service."""

from __future__ import annotations

from ...config import settings
from ...data.routes_repository import RoutesRepository
from ...models.domain import RankedRoute
from ...schemas.evacuation import OptimizeRouteRequest
from .ranker import RoutePreferences, RouteRanker


def build_ranker() -> RouteRanker:
    return RouteRanker(missing_metric_policy=settings.missing_metric_policy)


def optimize_evacuation_route(
    payload: OptimizeRouteRequest,
    repository: RoutesRepository | None = None,
    ranker: RouteRanker | None = None,
) -> RankedRoute:
    """Pick the best open route leaving ``from_location``.

    A failed read raises ``CandidateFetchError``; an empty read synthesizes a
    route from the city-pair table.
    """

    repository = repository or RoutesRepository()
    ranker = ranker or build_ranker()

    candidates = repository.fetch_open_candidates(payload.from_location)
    preferences = RoutePreferences(**payload.preferences.model_dump()) if payload.preferences else None
    return ranker.rank(
        candidates,
        preferences,
        from_location=payload.from_location,
        to_location=payload.to_location,
    )
