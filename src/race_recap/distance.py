"""Great-circle distance on a spherical Earth."""

from __future__ import annotations
import math
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from race_recap.models import TrackPoint

# Earth's mean radius in kilometers
EARTH_RADIUS_KM = 6371.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate distance between two points using Haversine formula.

    Args:
        lat1, lon1: First point coordinates in degrees
        lat2, lon2: Second point coordinates in degrees

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2
    # atan2 form stays finite when rounding pushes a marginally above 1
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(max(0.0, 1 - a)))

    return EARTH_RADIUS_KM * c


def segment_distances(points: Sequence[TrackPoint]) -> list[float]:
    """Distances in km between each pair of consecutive points (len(points) - 1 values)."""
    return [
        haversine_distance(points[i - 1].lat, points[i - 1].lon, points[i].lat, points[i].lon)
        for i in range(1, len(points))
    ]
