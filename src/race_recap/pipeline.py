"""Chain parsing, statistics and sampling, and shape results for display code."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from race_recap.analyzer import compute_statistics, cumulative_distances
from race_recap.errors import ParseError, RouteProcessingError, SamplerError
from race_recap.models import KM_TO_MILES, RouteDocument, RouteStatistics, SamplerParams, TrackPoint, WaypointSummary
from race_recap.parser import parse_gpx_text
from race_recap.sampler import DEFAULT_SAMPLE_COUNT, sample_route

logger = logging.getLogger(__name__)

GPX_SUFFIX = ".gpx"


@dataclass(frozen=True)
class RouteResult:
    document: RouteDocument
    statistics: RouteStatistics
    summaries: tuple[WaypointSummary, ...]


def process_route(
    raw_text: str | bytes,
    sample_count: int = DEFAULT_SAMPLE_COUNT,
    params: SamplerParams | None = None,
) -> RouteResult:
    """Parse GPX text, summarize it, and pick sample_count recap markers.

    Raises:
        RouteProcessingError: Wrapping the ParseError or SamplerError that
            stopped the pipeline.
    """
    try:
        document = parse_gpx_text(raw_text)
        statistics = compute_statistics(document.points)
        summaries = sample_route(document, statistics, sample_count, params)
    except (ParseError, SamplerError) as e:
        logger.warning("Route processing failed: %s", e)
        raise RouteProcessingError(e) from e
    return RouteResult(document=document, statistics=statistics, summaries=tuple(summaries))


def load_route_file(
    path: str | Path,
    sample_count: int = DEFAULT_SAMPLE_COUNT,
    params: SamplerParams | None = None,
) -> RouteResult:
    """Read a .gpx file from disk and process it.

    Raises:
        ValueError: If the file name does not end in .gpx.
        FileNotFoundError: If the file does not exist.
        RouteProcessingError: If the contents cannot be processed.
    """
    path = Path(path)
    if path.suffix.lower() != GPX_SUFFIX:
        raise ValueError(f"Please upload a valid GPX file: {path.name}")
    return process_route(path.read_bytes(), sample_count, params)


def to_latlng_pairs(points: Sequence[TrackPoint]) -> list[list[float]]:
    """[[lat, lon], ...] for drawing the route as a map polyline."""
    return [[pt.lat, pt.lon] for pt in points]


def chart_series(summaries: Sequence[WaypointSummary]) -> dict[str, list]:
    """Parallel lists of marker values for pace, heart rate and elevation charts."""
    return {
        "miles": [s.mile_marker for s in summaries],
        "pace": [s.pace for s in summaries],
        "heart_rate": [s.heart_rate_bpm for s in summaries],
        "elevation": [s.elevation for s in summaries],
    }


def _isoformat(value) -> str | None:
    return value.isoformat() if value is not None else None


def result_to_dict(result: RouteResult) -> dict[str, Any]:
    """Convert a RouteResult to a JSON-serializable dict."""
    stats = result.statistics
    cum_dist = cumulative_distances(result.document.points)
    return {
        "name": result.document.name,
        "points": to_latlng_pairs(result.document.points),
        "waypoints": [
            {
                "position": [wp.lat, wp.lon],
                "name": wp.name,
                "description": wp.description,
                "elevation": wp.elevation,
                "time": _isoformat(wp.time),
            }
            for wp in result.document.waypoints
        ],
        "statistics": {
            "total_distance_km": stats.total_distance_km,
            "total_distance_miles": stats.total_distance_miles,
            "elevation_gain_m": stats.elevation_gain_m,
            "elevation_loss_m": stats.elevation_loss_m,
            "max_elevation_m": stats.max_elevation_m,
            "min_elevation_m": stats.min_elevation_m,
            "start_time": _isoformat(stats.start_time),
            "end_time": _isoformat(stats.end_time),
            "duration_ms": stats.duration_ms,
        },
        "summaries": [
            {
                "id": s.index,
                "point_index": s.point_index,
                "position": list(s.position),
                "mile": s.mile_marker,
                # Geodesic distance actually covered up to this point
                "actual_mile": cum_dist[s.point_index] * KM_TO_MILES,
                "location": s.label,
                "description": s.narrative,
                "pace": s.pace_text,
                "heart_rate": s.heart_rate_bpm,
                "elevation": s.elevation,
                "time": _isoformat(s.time),
            }
            for s in result.summaries
        ],
        "charts": chart_series(result.summaries),
    }
