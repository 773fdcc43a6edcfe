import asyncio
from datetime import datetime, timezone

from src.emergewise.services import jobs


def test_sweep_marks_stale_alerts_and_notifies(fake_supabase, broadcaster):
    fake_supabase.results[("emergency_alerts", "select")] = [{"id": 1}, {"id": 2}]
    now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

    updated = asyncio.run(jobs.sweep_stale_alerts(fake_supabase, broadcaster, max_age_minutes=60, now=now))

    assert updated == 2
    select_query, update_query = fake_supabase.executed
    assert ("lt", ("created_at", "2026-10-19T11:00:00+00:00"), {}) in select_query.calls
    assert update_query.calls[0] == ("update", ({"status": "monitoring"},), {})
    assert ("in_", ("id", [1, 2]), {}) in update_query.calls
    assert broadcaster.events == [
        ("alerts_status_updated", {"updated_count": 2, "new_status": "monitoring"}, None)
    ]


def test_sweep_without_stale_alerts_is_quiet(fake_supabase, broadcaster):
    updated = asyncio.run(jobs.sweep_stale_alerts(fake_supabase, broadcaster))

    assert updated == 0
    assert len(fake_supabase.executed) == 1
    assert broadcaster.events == []


def test_daily_statistics_go_to_admin_room(fake_supabase, broadcaster):
    fake_supabase.results[("emergency_alerts", "select")] = [{"severity": "critical"}, {"severity": "low"}]
    fake_supabase.results[("incident_reports", "select")] = [{"verified": True}, {"verified": False}, {}]
    fake_supabase.results[("emergency_resources", "select")] = [{"id": "shelter-1"}]
    now = datetime(2026, 10, 19, 0, 5, tzinfo=timezone.utc)

    stats = asyncio.run(jobs.publish_daily_statistics(fake_supabase, broadcaster, now=now))

    assert stats == {
        "date": "2026-10-18",
        "alerts_created": 2,
        "incidents_reported": 3,
        "available_resources": 1,
        "critical_alerts": 1,
        "verified_incidents": 1,
    }
    assert broadcaster.events == [("daily_statistics", stats, "role_admin")]


def test_find_overcrowded_resources_uses_ratio():
    rows = [
        {"id": 1, "name": "Stadium", "type": "shelter", "capacity": 100, "current_occupancy": 95},
        {"id": 2, "name": "School", "type": "shelter", "capacity": 100, "current_occupancy": 90},
        {"id": 3, "name": "Clinic", "type": "medical", "capacity": None, "current_occupancy": 3},
    ]

    overcrowded = jobs.find_overcrowded_resources(rows, 0.9)

    assert overcrowded == [
        {"id": 1, "name": "Stadium", "type": "shelter", "utilization": 95},
        {"id": 3, "name": "Clinic", "type": "medical", "utilization": 300},
    ]


def test_capacity_check_emits_warning(fake_supabase, broadcaster):
    fake_supabase.results[("emergency_resources", "select")] = [
        {"id": 1, "name": "Stadium", "type": "shelter", "capacity": 50, "current_occupancy": 50},
    ]

    overcrowded = asyncio.run(jobs.check_resource_capacity(fake_supabase, broadcaster, ratio=0.9))

    assert [item["id"] for item in overcrowded] == [1]
    assert broadcaster.events[0][0] == "capacity_warning"


def test_run_periodically_survives_failing_runs():
    calls = []

    async def flaky_job():
        calls.append(len(calls))
        if len(calls) == 1:
            raise RuntimeError("store unavailable")

    async def scenario():
        task = asyncio.create_task(jobs.run_periodically("flaky", 0, flaky_job))
        while len(calls) < 3:
            await asyncio.sleep(0)
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    asyncio.run(scenario())

    assert len(calls) >= 3
