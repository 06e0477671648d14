from datetime import timedelta
from typing import Sequence

from race_recap.distance import segment_distances
from race_recap.models import RouteStatistics, TrackPoint

_ONE_MS = timedelta(milliseconds=1)


def _empty_statistics() -> RouteStatistics:
    return RouteStatistics(
        total_distance_km=0.0,
        elevation_gain_m=0.0,
        elevation_loss_m=0.0,
        max_elevation_m=0.0,
        min_elevation_m=0.0,
        start_time=None,
        end_time=None,
        duration_ms=0,
    )


def _elevation_changes(points: Sequence[TrackPoint]) -> tuple[float, float]:
    """Sum climbs and descents over consecutive pairs that both have elevation.

    A point without elevation breaks the chain: neither of its neighbouring
    pairs contributes, and no bridging to the next known value is done.
    """
    elevation_gain = 0.0
    elevation_loss = 0.0
    for i in range(1, len(points)):
        elev_prev = points[i - 1].elevation
        elev_curr = points[i].elevation
        if elev_prev is not None and elev_curr is not None:
            delta = elev_curr - elev_prev
            if delta > 0:
                elevation_gain += delta
            else:
                elevation_loss += abs(delta)
    return elevation_gain, elevation_loss


def compute_statistics(points: Sequence[TrackPoint]) -> RouteStatistics:
    """Summarize an ordered list of TrackPoints.

    Never raises: an empty list gives all-zero statistics with no times.
    """
    if not points:
        return _empty_statistics()

    total_distance = sum(segment_distances(points))
    elevation_gain, elevation_loss = _elevation_changes(points)

    elevations = [pt.elevation for pt in points if pt.elevation is not None]
    max_elevation = max(elevations) if elevations else 0.0
    min_elevation = min(elevations) if elevations else 0.0

    # First and last timestamps in track order, wherever they sit in the list
    times = [pt.time for pt in points if pt.time is not None]
    start_time = times[0] if times else None
    end_time = times[-1] if times else None
    if start_time is not None and end_time is not None:
        duration_ms = max(0, (end_time - start_time) // _ONE_MS)
    else:
        duration_ms = 0

    return RouteStatistics(
        total_distance_km=total_distance,
        elevation_gain_m=elevation_gain,
        elevation_loss_m=elevation_loss,
        max_elevation_m=max_elevation,
        min_elevation_m=min_elevation,
        start_time=start_time,
        end_time=end_time,
        duration_ms=duration_ms,
    )


def cumulative_distances(points: Sequence[TrackPoint]) -> list[float]:
    """Distance in km from the first point to each point, along the track.

    The sampler's mile markers are a proportional approximation; this gives
    the geodesic distance actually covered up to each index for comparison.
    """
    if not points:
        return []
    cum_dist = [0.0]
    for d in segment_distances(points):
        cum_dist.append(cum_dist[-1] + d)
    return cum_dist
