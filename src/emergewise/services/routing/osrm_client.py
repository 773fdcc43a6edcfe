"""HTTP client for the OSRM route service."""

from __future__ import annotations

import logging
import time

import httpx

from ...config import settings
from ...models.domain import FallbackRoute

logger = logging.getLogger(__name__)

LatLng = tuple[float, float]


class RoutingServiceError(RuntimeError):
    """OSRM is unconfigured, unreachable or answered without a usable route."""


class OSRMClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.osrm_base_url or "").rstrip("/")
        if not self.base_url:
            raise RoutingServiceError("OSRM base URL is not configured.")
        self.timeout = timeout if timeout is not None else settings.osrm_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.osrm_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.osrm_backoff_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(timeout=httpx.Timeout(self.timeout, connect=5.0), transport=self._transport)

    def _get_json(self, url: str, params: dict) -> dict:
        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(url, params=params)
                    response.raise_for_status()
                    return response.json()
                except (httpx.TimeoutException, httpx.NetworkError) as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise RoutingServiceError(
                            f"Failed to reach OSRM service at {self.base_url}: {e}"
                        ) from e
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))  # Exponential backoff
                    logger.debug(f"OSRM request failed, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}): {e}")
                    time.sleep(wait_time)
                except (httpx.HTTPError, ValueError) as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise RoutingServiceError(f"OSRM request failed: {e}") from e
                    time.sleep(self.backoff_seconds * attempt)
        finally:
            client.close()

    def route(self, start: LatLng, end: LatLng, profile: str = "driving") -> list[FallbackRoute]:
        """Return the primary route and any alternatives between two points.

        Distances come back in metres and durations in seconds; both are
        converted to km and minutes. Geometry is returned as (lat, lon) pairs.
        """
        coordinate_str = f"{start[1]},{start[0]};{end[1]},{end[0]}"
        params = {
            "overview": "full",
            "geometries": "geojson",
            "steps": "false",
            "alternatives": "true",
        }
        url = f"{self.base_url}/route/v1/{profile}/{coordinate_str}"
        data = self._get_json(url, params)
        if data.get("code") != "Ok":
            raise RoutingServiceError(f"OSRM route request failed: {data.get('message', 'Unknown OSRM route error')}")

        routes: list[FallbackRoute] = []
        try:
            for index, item in enumerate(data.get("routes") or []):
                coordinates = item.get("geometry", {}).get("coordinates", [])
                if len(coordinates) < 2:
                    raise RoutingServiceError(f"OSRM {profile} route {index} has fewer than 2 coordinates")
                routes.append(
                    FallbackRoute(
                        distance_km=float(item["distance"]) / 1000,
                        duration_minutes=float(item["duration"]) / 60,
                        polyline=[(float(lat), float(lon)) for lon, lat in coordinates],
                        route_type=f"{profile}{f' (Alt {index})' if index > 0 else ''}",
                    )
                )
        except (KeyError, TypeError, ValueError) as e:
            raise RoutingServiceError(f"Malformed OSRM route response: {e}") from e
        return routes


def check_health(base_url: str | None = None) -> bool:
    """Check OSRM reachability with a minimal two-point route request."""
    base = base_url or settings.osrm_base_url
    if not base:
        return False
    try:
        # Two points in central Delhi
        url = f"{base.rstrip('/')}/route/v1/driving/77.2090,28.6139;77.2167,28.6448"
        response = httpx.get(url, params={"overview": "false"}, timeout=5.0)
        response.raise_for_status()
        return response.json().get("code") == "Ok"
    except (httpx.HTTPError, ValueError):
        return False
