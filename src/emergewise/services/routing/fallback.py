"""Point-to-point evacuation routing with a straight-line fallback."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol, Sequence

from ...config import settings
from ...models.domain import FallbackRoute
from ..geospatial import haversine_km, polyline_to_geometry
from .osrm_client import LatLng, OSRMClient, RoutingServiceError

logger = logging.getLogger(__name__)

DIRECT_ROUTE_TYPE = "Direct Line (Emergency)"


class RouteProvider(Protocol):
    def route(self, start: LatLng, end: LatLng, profile: str = "driving") -> list[FallbackRoute]:
        ...


def straight_line_route(start: LatLng, end: LatLng, speed_kmh: float | None = None) -> FallbackRoute:
    """Great-circle route between two points; pure math, never fails for finite input."""
    speed = speed_kmh or settings.fallback_speed_kmh
    distance = haversine_km(start[0], start[1], end[0], end[1])
    return FallbackRoute(
        distance_km=distance,
        duration_minutes=distance / speed * 60,
        polyline=[tuple(start), tuple(end)],
        route_type=DIRECT_ROUTE_TYPE,
    )


def plan_route(
    start: LatLng,
    end: LatLng,
    provider: RouteProvider | None = None,
    profiles: Sequence[str] | None = None,
) -> list[FallbackRoute]:
    """Return route options fastest first, or the straight line when routing is unavailable."""

    if provider is None:
        try:
            provider = OSRMClient()
        except RoutingServiceError as e:
            logger.info(f"{e} Using direct route.")
            return [straight_line_route(start, end)]

    routes: list[FallbackRoute] = []
    for profile in profiles or settings.osrm_profiles:
        try:
            routes.extend(provider.route(start, end, profile=profile))
        except RoutingServiceError as e:
            logger.warning(f"Error calculating {profile} route: {e}")

    if not routes:
        logger.warning("No routes found from routing service. Using direct route.")
        return [straight_line_route(start, end)]
    return sorted(routes, key=lambda route: route.duration_minutes)


def nearest_open_route(lat: float, lng: float, routes: Iterable[dict[str, Any]]) -> dict[str, Any] | None:
    """Open route whose first ``route_points`` entry ([lng, lat]) is closest to the user."""

    nearest: dict[str, Any] | None = None
    min_distance = float("inf")
    for route in routes:
        points = route.get("route_points") or []
        if route.get("current_status") != "open" or not points:
            continue
        route_lng, route_lat = points[0][0], points[0][1]
        distance = haversine_km(lat, lng, route_lat, route_lng)
        if distance < min_distance:
            min_distance = distance
            nearest = route
    return nearest


def to_geojson_feature(route: FallbackRoute) -> dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": polyline_to_geometry(route.polyline),
        "properties": {
            "route_type": route.route_type,
            "distance_km": round(route.distance_km, 3),
            "duration_minutes": round(route.duration_minutes, 1),
        },
    }
