"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

from shapely.geometry import LineString, mapping

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def polyline_to_geometry(polyline: Sequence[tuple[float, float]]) -> dict:
    """GeoJSON LineString for a sequence of (lat, lon) pairs (GeoJSON uses lon, lat)."""

    if len(polyline) < 2:
        raise ValueError("LineString must have at least 2 coordinates")
    return mapping(LineString([(lon, lat) for lat, lon in polyline]))
