"""Resample a route into a handful of evenly spaced race recap markers.

The heart rate and pace attached to each marker are not measured; they are
fixed functions of the marker's position so the same route always produces
the same recap.
"""

from race_recap.errors import InvalidSampleCountError
from race_recap.formatters import format_mile, format_pace, round_half_up
from race_recap.models import RouteDocument, RouteStatistics, SamplerParams, WaypointSummary

DEFAULT_SAMPLE_COUNT = 5


def validate_sample_count(sample_count) -> int:
    """Return sample_count if it is an integer >= 2, else raise InvalidSampleCountError."""
    if isinstance(sample_count, bool) or not isinstance(sample_count, int) or sample_count < 2:
        raise InvalidSampleCountError(sample_count)
    return sample_count


def select_indices(point_count: int, sample_count: int) -> list[int]:
    """Pick sample_count point indices, evenly spaced by index.

    The last index is always point_count - 1, so interior spacing may be
    uneven when point_count is not divisible by sample_count - 1.
    """
    validate_sample_count(sample_count)
    if point_count <= 0:
        return []
    interval = point_count // (sample_count - 1)
    indices = [i * interval for i in range(sample_count - 1)]
    indices.append(point_count - 1)
    return indices


def mile_markers(total_miles: float, sample_count: int) -> list[float]:
    """Proportional mile markers: i/(n-1) of the total, to one decimal; the last is exact.

    Rounding up is capped at the total so markers never decrease on very
    short routes.
    """
    validate_sample_count(sample_count)
    last = sample_count - 1
    markers = [min(round_half_up(i * total_miles / last, 1), total_miles) for i in range(last)]
    markers.append(total_miles)
    return markers


def heart_rate_for(i: int, sample_count: int, params: SamplerParams) -> int:
    """Linear ramp from base_heart_rate at the start to base + max increase at the finish."""
    ramp = params.max_heart_rate_increase * i / (sample_count - 1)
    return int(round_half_up(params.base_heart_rate + ramp))


def pace_for(i: int, sample_count: int, params: SamplerParams) -> float:
    """U-shaped pace in minutes per mile: fastest mid-race, slowest at both ends."""
    middle = sample_count / 2
    dist_from_middle = abs(i - middle)
    pace_change = params.pace_swing_floor + (dist_from_middle / middle) * params.pace_swing_range
    return round_half_up(params.base_pace + pace_change, 2)


def narrative_for(i: int, sample_count: int, mile: float, params: SamplerParams) -> tuple[str, str]:
    """Return (label, narrative) for the i-th marker."""
    if i == 0:
        return params.start_label, params.start_narrative
    if i == sample_count - 1:
        return params.finish_label, params.finish_narrative

    label = params.mile_label_format.format(mile=format_mile(mile))
    if i < sample_count / 3:
        return label, params.steady_narrative
    if i < sample_count * 2 / 3:
        return label, params.pushing_narrative
    return label, params.closing_narrative


def sample_route(
    document: RouteDocument,
    statistics: RouteStatistics,
    sample_count: int = DEFAULT_SAMPLE_COUNT,
    params: SamplerParams | None = None,
) -> list[WaypointSummary]:
    """Build sample_count WaypointSummary markers for a parsed route.

    The first and last markers sit on the first and last track points. Returns
    an empty list if the document has no track points.

    Raises:
        InvalidSampleCountError: If sample_count is not an integer >= 2.
    """
    validate_sample_count(sample_count)
    if params is None:
        params = SamplerParams()

    points = document.points
    if not points:
        return []

    total_miles = statistics.total_distance_km * params.km_to_miles
    indices = select_indices(len(points), sample_count)
    markers = mile_markers(total_miles, sample_count)

    summaries = []
    for i, (index, mile) in enumerate(zip(indices, markers)):
        point = points[index]
        label, narrative = narrative_for(i, sample_count, mile, params)
        pace = pace_for(i, sample_count, params)
        summaries.append(
            WaypointSummary(
                index=i + 1,
                point_index=index,
                position=(point.lat, point.lon),
                mile_marker=mile,
                label=label,
                narrative=narrative,
                pace=pace,
                pace_text=format_pace(pace),
                heart_rate_bpm=heart_rate_for(i, sample_count, params),
                elevation=point.elevation,
                time=point.time,
            )
        )
    return summaries
