"""Geospatial utilities."""

from __future__ import annotations

import math

from geopy.distance import geodesic

from stage_time.errors import DistanceComputationError


def geodesic_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute the WGS-84 geodesic distance in meters between two lat/lon points.

    Args:
        lat1: Latitude 1 in degrees.
        lon1: Longitude 1 in degrees.
        lat2: Latitude 2 in degrees.
        lon2: Longitude 2 in degrees.

    Returns:
        Distance in meters.

    Raises:
        DistanceComputationError: If a coordinate is invalid or the result is not finite.
    """

    try:
        meters = geodesic((lat1, lon1), (lat2, lon2)).meters
    except (ValueError, TypeError) as exc:
        raise DistanceComputationError(
            f"cannot compute distance between ({lat1}, {lon1}) and ({lat2}, {lon2}): {exc}"
        ) from exc
    if not math.isfinite(meters):
        raise DistanceComputationError(
            f"distance between ({lat1}, {lon1}) and ({lat2}, {lon2}) is not finite"
        )
    return meters
