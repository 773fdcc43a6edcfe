"""Periodic maintenance jobs: stale alerts, daily statistics and resource capacity.

Each job receives the Supabase client and the broadcaster it publishes to;
jobs share no state with each other or with the scoring services.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable

from supabase import Client

from ..config import settings
from .realtime import Broadcaster

logger = logging.getLogger(__name__)

ALERTS_TABLE = "emergency_alerts"
INCIDENTS_TABLE = "incident_reports"
RESOURCES_TABLE = "emergency_resources"


def _mark_stale_alerts(client: Client, cutoff: datetime) -> int:
    response = (
        client.table(ALERTS_TABLE)
        .select("id")
        .eq("status", "active")
        .lt("created_at", cutoff.isoformat())
        .execute()
    )
    alert_ids = [row["id"] for row in (response.data or [])]
    if alert_ids:
        client.table(ALERTS_TABLE).update({"status": "monitoring"}).in_("id", alert_ids).execute()
    return len(alert_ids)


async def sweep_stale_alerts(
    client: Client,
    broadcaster: Broadcaster,
    *,
    max_age_minutes: int | None = None,
    now: datetime | None = None,
) -> int:
    """Move alerts active for longer than ``max_age_minutes`` to ``monitoring``."""
    age = max_age_minutes or settings.stale_alert_age_minutes
    cutoff = (now or datetime.now(timezone.utc)) - timedelta(minutes=age)
    updated = await asyncio.to_thread(_mark_stale_alerts, client, cutoff)
    if updated:
        logger.info(f"Updated {updated} stale alerts to monitoring status")
        await broadcaster.emit("alerts_status_updated", {"updated_count": updated, "new_status": "monitoring"})
    return updated


def build_daily_statistics(client: Client, day: datetime) -> dict[str, Any]:
    start = day.replace(hour=0, minute=0, second=0, microsecond=0)
    end = start + timedelta(days=1)

    alerts = (
        client.table(ALERTS_TABLE).select("*")
        .gte("created_at", start.isoformat()).lt("created_at", end.isoformat())
        .execute().data or []
    )
    incidents = (
        client.table(INCIDENTS_TABLE).select("*")
        .gte("created_at", start.isoformat()).lt("created_at", end.isoformat())
        .execute().data or []
    )
    resources = client.table(RESOURCES_TABLE).select("*").eq("available", True).execute().data or []

    return {
        "date": start.date().isoformat(),
        "alerts_created": len(alerts),
        "incidents_reported": len(incidents),
        "available_resources": len(resources),
        "critical_alerts": sum(1 for alert in alerts if alert.get("severity") == "critical"),
        "verified_incidents": sum(1 for incident in incidents if incident.get("verified")),
    }


async def publish_daily_statistics(client: Client, broadcaster: Broadcaster, *, now: datetime | None = None) -> dict[str, Any]:
    """Summarize the previous UTC day and send it to admin dashboards."""
    yesterday = (now or datetime.now(timezone.utc)) - timedelta(days=1)
    stats = await asyncio.to_thread(build_daily_statistics, client, yesterday)
    logger.info(f"Daily statistics generated: {stats}")
    await broadcaster.emit("daily_statistics", stats, room="role_admin")
    return stats


def find_overcrowded_resources(rows: list[dict[str, Any]], ratio: float) -> list[dict[str, Any]]:
    overcrowded = []
    for resource in rows:
        utilization = (resource.get("current_occupancy") or 0) / (resource.get("capacity") or 1)
        if utilization > ratio:
            overcrowded.append(
                {
                    "id": resource.get("id"),
                    "name": resource.get("name"),
                    "type": resource.get("type"),
                    "utilization": round(utilization * 100),
                }
            )
    return overcrowded


async def check_resource_capacity(
    client: Client,
    broadcaster: Broadcaster,
    *,
    ratio: float | None = None,
) -> list[dict[str, Any]]:
    def _load() -> list[dict[str, Any]]:
        response = (
            client.table(RESOURCES_TABLE)
            .select("*")
            .not_.is_("capacity", "null")
            .eq("available", True)
            .execute()
        )
        return list(response.data or [])

    rows = await asyncio.to_thread(_load)
    overcrowded = find_overcrowded_resources(rows, ratio or settings.capacity_warning_ratio)
    if overcrowded:
        logger.warning(f"Found {len(overcrowded)} overcrowded resources")
        await broadcaster.emit("capacity_warning", {"overcrowded_resources": overcrowded})
    return overcrowded


async def run_periodically(name: str, interval_seconds: float, job: Callable[[], Awaitable[Any]]) -> None:
    """Run ``job`` every ``interval_seconds`` until cancelled; a failed run is logged and retried next tick."""
    while True:
        try:
            await job()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception(f"Scheduled job '{name}' failed")
        await asyncio.sleep(interval_seconds)


def start_jobs(client: Client, broadcaster: Broadcaster) -> list[asyncio.Task]:
    jobs = [
        ("stale_alerts", settings.stale_alert_interval_seconds, lambda: sweep_stale_alerts(client, broadcaster)),
        ("resource_capacity", settings.capacity_check_interval_seconds, lambda: check_resource_capacity(client, broadcaster)),
        ("daily_statistics", settings.daily_stats_interval_seconds, lambda: publish_daily_statistics(client, broadcaster)),
    ]
    tasks = [asyncio.create_task(run_periodically(name, interval, job), name=name) for name, interval, job in jobs]
    logger.info(f"Started {len(tasks)} background jobs")
    return tasks
