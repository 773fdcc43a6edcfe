"""Supabase client for the Python backend."""

import logging
from functools import lru_cache
from supabase import create_client, Client
from ..config import settings


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logging.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None


# Tables used by the evacuation and alerting services:
#
#   evacuation_routes    candidate routes ranked by the route ranker
#   emergency_alerts     swept by the stale-alert job
#   incident_reports     counted by the daily statistics job
#   emergency_resources  polled by the capacity job
#
# from .db.supabase import get_supabase_client
#
# client = get_supabase_client()
# result = client.table('evacuation_routes') \
#     .select('*') \
#     .ilike('from_location', '%delhi%') \
#     .eq('current_status', 'open') \
#     .execute()
