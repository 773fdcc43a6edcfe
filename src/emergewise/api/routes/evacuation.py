"""Evacuation route endpoints."""

from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool

from ...data.routes_repository import CandidateFetchError, RoutesRepository, summarize_capacity
from ...schemas.evacuation import (
    CapacityStatusResponse,
    DirectRouteRequest,
    DirectRouteResponse,
    NewRouteRequest,
    OptimizeRouteRequest,
    RankedRouteModel,
    RouteStatusUpdate,
)
from ...services.realtime import ConnectionHub
from ...services.routing.fallback import (
    DIRECT_ROUTE_TYPE,
    nearest_open_route,
    plan_route,
    straight_line_route,
    to_geojson_feature,
)
from ...services.routing.ranker import RouteRanker
from ...services.routing.service import optimize_evacuation_route
from ..deps import get_hub, get_route_ranker, get_routes_repository

router = APIRouter(prefix="/evacuation", tags=["evacuation"])

logger = logging.getLogger(__name__)


def _store_error(action: str, exc: Exception) -> HTTPException:
    logger.exception(f"Error {action}: {exc}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}: {str(exc)}",
    )


def _invalid_request(action: str, exc: ValueError) -> HTTPException:
    logger.warning(f"Rejected request to {action}: {exc}")
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("", status_code=status.HTTP_200_OK)
def list_routes(
    route_status: str | None = Query(default=None, alias="status", description="Filter by current_status"),
    repository: RoutesRepository = Depends(get_routes_repository),
) -> list[dict]:
    try:
        return repository.list_routes(status=route_status)
    except Exception as exc:
        raise _store_error("fetch evacuation routes", exc) from exc


@router.post("/optimize", response_model=RankedRouteModel, status_code=status.HTTP_200_OK)
def optimize(
    payload: OptimizeRouteRequest,
    repository: RoutesRepository = Depends(get_routes_repository),
    ranker: RouteRanker = Depends(get_route_ranker),
) -> dict:
    try:
        return optimize_evacuation_route(payload, repository=repository, ranker=ranker).to_dict()
    except CandidateFetchError as exc:
        logger.error(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to optimize route: {str(exc)}",
        ) from exc


@router.post("/direct", response_model=DirectRouteResponse, status_code=status.HTTP_200_OK)
def direct_route(payload: DirectRouteRequest) -> DirectRouteResponse:
    """Point-to-point route options; falls back to a straight line when routing is unavailable."""
    if payload.use_routing_service:
        routes = plan_route(payload.start, payload.end)
    else:
        routes = [straight_line_route(payload.start, payload.end)]
    return DirectRouteResponse(
        routes=[{**asdict(route), "geojson": to_geojson_feature(route)} for route in routes],
        fallback=all(route.route_type == DIRECT_ROUTE_TYPE for route in routes),
    )


@router.get("/capacity-status", response_model=CapacityStatusResponse, status_code=status.HTTP_200_OK)
def capacity_status(repository: RoutesRepository = Depends(get_routes_repository)) -> dict:
    try:
        return summarize_capacity(repository.capacity_rows())
    except Exception as exc:
        raise _store_error("fetch route capacity status", exc) from exc


@router.get("/from/{location}", status_code=status.HTTP_200_OK)
def routes_from(location: str, repository: RoutesRepository = Depends(get_routes_repository)) -> list[dict]:
    try:
        return repository.list_routes(status="open", order_by="distance_km", from_location=location)
    except Exception as exc:
        raise _store_error("fetch routes", exc) from exc


@router.get("/nearest", status_code=status.HTTP_200_OK)
def nearest_route(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    repository: RoutesRepository = Depends(get_routes_repository),
) -> dict:
    """Open route whose starting point is closest to the caller."""
    try:
        routes = repository.list_routes(status="open")
    except Exception as exc:
        raise _store_error("fetch evacuation routes", exc) from exc
    route = nearest_open_route(lat, lng, routes)
    if route is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No open evacuation route with route points")
    return route


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_route(
    payload: NewRouteRequest,
    repository: RoutesRepository = Depends(get_routes_repository),
    hub: ConnectionHub = Depends(get_hub),
) -> dict:
    try:
        route = await run_in_threadpool(repository.insert_route, payload.model_dump())
    except ValueError as exc:
        raise _invalid_request("add evacuation route", exc) from exc
    except Exception as exc:
        raise _store_error("add evacuation route", exc) from exc
    await hub.emit("new_evacuation_route", route)
    return route


@router.patch("/{route_id}/status", status_code=status.HTTP_200_OK)
async def update_route_status(
    route_id: str,
    payload: RouteStatusUpdate,
    repository: RoutesRepository = Depends(get_routes_repository),
    hub: ConnectionHub = Depends(get_hub),
) -> dict:
    try:
        route = await run_in_threadpool(
            repository.update_status, route_id, payload.current_status, payload.current_usage
        )
    except ValueError as exc:
        raise _invalid_request("update route status", exc) from exc
    except Exception as exc:
        raise _store_error("update route status", exc) from exc
    if route is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Route {route_id} not found")
    await hub.emit("route_status_updated", route)
    return route
