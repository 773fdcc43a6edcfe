"""Evacuation route ranking."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Literal, Sequence

from ...data.scoring_tables import RouteTables, get_scoring_tables
from ...models.domain import OptimizationFactors, RankedRoute, RouteCandidate

logger = logging.getLogger(__name__)

MissingMetricPolicy = Literal["best_case", "worst_case"]


@dataclass(slots=True)
class RoutePreferences:
    shortest_distance: bool = False
    fastest_time: bool = False
    avoid_congestion: bool = False


class RouteRanker:
    """Orders candidate routes and annotates the winner.

    ``shortest_distance`` wins over ``fastest_time``; with neither set the
    balanced score is used. Python's sort is stable, so candidates that tie
    keep their input order and the first one wins.
    """

    def __init__(
        self,
        tables: RouteTables | None = None,
        missing_metric_policy: MissingMetricPolicy = "best_case",
    ) -> None:
        self.tables = tables or get_scoring_tables().routes
        self.missing_metric_policy = missing_metric_policy

    def _metric(self, value: float | None) -> float:
        if value is not None:
            return value
        return 0.0 if self.missing_metric_policy == "best_case" else math.inf

    def score(self, route: RouteCandidate) -> float:
        tables = self.tables
        score = tables.base_score
        if route.distance_km:
            score -= route.distance_km * tables.distance_weight
        if route.estimated_time_minutes:
            score -= route.estimated_time_minutes * tables.time_weight
        utilization = route.utilization_pct()
        if utilization is not None:
            score -= utilization * tables.utilization_weight
        score += tables.difficulty_adjustments.get(route.difficulty_level or "", 0)
        return max(0.0, score)

    def capacity_status(self, route: RouteCandidate) -> str:
        utilization = route.utilization_pct()
        if utilization is None:
            return "unknown"
        if utilization < self.tables.capacity_low_below_pct:
            return "low"
        if utilization < self.tables.capacity_moderate_below_pct:
            return "moderate"
        return "high"

    def order(self, candidates: Sequence[RouteCandidate], preferences: RoutePreferences | None = None) -> list[RouteCandidate]:
        preferences = preferences or RoutePreferences()
        if preferences.shortest_distance:
            return sorted(candidates, key=lambda route: self._metric(route.distance_km))
        if preferences.fastest_time:
            return sorted(candidates, key=lambda route: self._metric(route.estimated_time_minutes))
        return sorted(candidates, key=self.score, reverse=True)

    def estimate_distance_km(self, from_location: str, to_location: str) -> float:
        """City-pair lookup in either direction; unknown pairs count as a local route."""
        origin = from_location.strip().lower()
        destination = to_location.strip().lower()
        distances = self.tables.city_distances_km
        forward = distances.get(f"{origin}-{destination}")
        if forward is not None:
            return forward
        return distances.get(f"{destination}-{origin}", self.tables.default_distance_km)

    def synthesize(self, from_location: str, to_location: str) -> RankedRoute:
        distance = self.estimate_distance_km(from_location, to_location)
        route = RouteCandidate(
            name=f"Optimized route from {from_location} to {to_location}",
            from_location=from_location,
            to_location=to_location,
            distance_km=distance,
            estimated_time_minutes=math.ceil(distance * self.tables.minutes_per_km),
            difficulty_level="moderate",
            current_status="open",
            raw={"route_points": []},
        )
        return RankedRoute(
            route=route,
            optimization_factors=OptimizationFactors(capacity_status="low"),
            synthesized=True,
        )

    def rank(
        self,
        candidates: Sequence[RouteCandidate],
        preferences: RoutePreferences | None = None,
        *,
        from_location: str = "",
        to_location: str = "",
    ) -> RankedRoute:
        if not candidates:
            logger.info(f"No stored routes from '{from_location}', synthesizing a route to '{to_location}'")
            return self.synthesize(from_location, to_location)

        best = self.order(candidates, preferences)[0]
        logger.info(f"Route optimized: from={from_location} to={to_location} selected={best.name}")
        return RankedRoute(
            route=best,
            optimization_factors=OptimizationFactors(capacity_status=self.capacity_status(best)),
        )
