"""Evacuation route access backed by the Supabase ``evacuation_routes`` table."""

from __future__ import annotations

import logging
from typing import Any

from supabase import Client

from ..db.supabase import get_supabase_client
from ..models.domain import RouteCandidate

ROUTES_TABLE = "evacuation_routes"

logger = logging.getLogger(__name__)


class CandidateFetchError(RuntimeError):
    """Raised when evacuation routes cannot be read from the store.

    Distinct from an empty result: callers must not fabricate a route from a
    failed read.
    """


class RoutesRepository:
    def __init__(self, client: Client | None = None) -> None:
        self._client = client

    @property
    def client(self) -> Client:
        client = self._client or get_supabase_client()
        if client is None:
            raise CandidateFetchError(
                "Supabase not configured. Set EMERGEWISE_SUPABASE_URL and EMERGEWISE_SUPABASE_KEY."
            )
        return client

    def fetch_open_candidates(self, from_location: str) -> list[RouteCandidate]:
        """Open routes whose origin contains ``from_location`` (case-insensitive)."""
        try:
            response = (
                self.client.table(ROUTES_TABLE)
                .select("*")
                .ilike("from_location", f"%{from_location}%")
                .eq("current_status", "open")
                .execute()
            )
        except CandidateFetchError:
            raise
        except Exception as exc:
            logger.error(f"Failed to fetch evacuation routes from '{from_location}': {exc}")
            raise CandidateFetchError(f"Failed to fetch evacuation routes: {exc}") from exc
        return [RouteCandidate.from_row(row) for row in (response.data or [])]

    def list_routes(self, status: str | None = None, order_by: str = "name", from_location: str | None = None) -> list[dict[str, Any]]:
        query = self.client.table(ROUTES_TABLE).select("*")
        if from_location:
            query = query.ilike("from_location", f"%{from_location}%")
        if status:
            query = query.eq("current_status", status)
        response = query.order(order_by).execute()
        return list(response.data or [])

    def insert_route(self, payload: dict[str, Any]) -> dict[str, Any]:
        row = {**payload, "current_status": "open", "current_usage": 0, "ai_optimized": True}
        response = self.client.table(ROUTES_TABLE).insert(row).execute()
        if not response.data:
            raise ValueError("Route insert returned no data.")
        logger.info(f"New evacuation route added: {response.data[0].get('id')}")
        return response.data[0]

    def update_status(self, route_id: str, current_status: str, current_usage: int | None = None) -> dict[str, Any] | None:
        changes: dict[str, Any] = {"current_status": current_status}
        if current_usage is not None:
            changes["current_usage"] = current_usage
        response = self.client.table(ROUTES_TABLE).update(changes).eq("id", route_id).execute()
        return response.data[0] if response.data else None

    def capacity_rows(self) -> list[dict[str, Any]]:
        response = (
            self.client.table(ROUTES_TABLE)
            .select("current_status, capacity, current_usage")
            .not_.is_("capacity", "null")
            .execute()
        )
        return list(response.data or [])


def summarize_capacity(rows: list[dict[str, Any]]) -> dict[str, Any]:
    total_capacity = sum(row.get("capacity") or 0 for row in rows)
    total_usage = sum(row.get("current_usage") or 0 for row in rows)
    return {
        "total_capacity": total_capacity,
        "total_usage": total_usage,
        "utilization_percentage": (total_usage / total_capacity) * 100 if total_capacity > 0 else 0,
        "open_routes": sum(1 for row in rows if row.get("current_status") == "open"),
        "closed_routes": sum(1 for row in rows if row.get("current_status") == "closed"),
        "total_routes": len(rows),
    }
