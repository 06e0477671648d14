"""GPX document parsing.

Only the first <trk> and its first <trkseg> are read; top-level <wpt>
elements are read independently of the track. Element names are matched on
their local name so GPX 1.0, GPX 1.1 and namespace-less files all parse.
"""

import logging
import math
from datetime import datetime, timezone
from pathlib import Path

from dateutil import parser as date_parser
from lxml import etree

from race_recap.errors import InvalidRootError, MalformedNumericError
from race_recap.models import (
    DEFAULT_ROUTE_NAME,
    DEFAULT_WAYPOINT_NAME,
    RouteDocument,
    TrackPoint,
    Waypoint,
)

logger = logging.getLogger(__name__)

ROOT_TAG = "gpx"


def _local_name(element) -> str | None:
    # Comments and processing instructions have a non-string tag
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def _children(element, name: str) -> list:
    """All direct children called `name`, always as a list (possibly empty)."""
    return [child for child in element if _local_name(child) == name]


def _child_text(element, name: str) -> str | None:
    """Stripped text of the first child called `name`, or None if absent or blank."""
    matches = _children(element, name)
    if not matches:
        return None
    return (matches[0].text or "").strip() or None


def _parse_float(text: str | None) -> float | None:
    if text is None:
        return None
    try:
        value = float(text.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _parse_time(text: str | None) -> datetime | None:
    if text is None:
        return None
    try:
        value = date_parser.isoparse(text)
    except (ValueError, OverflowError):
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _parse_coordinates(element, path: str, errors: list[str]) -> tuple[float, float]:
    """Read the required lat/lon attributes, recording a field path for each bad one."""
    coords = []
    for attr in ("lat", "lon"):
        value = _parse_float(element.get(attr))
        if value is None:
            errors.append(f"{path}.{attr}={element.get(attr)!r}")
            value = 0.0
        coords.append(value)
    return coords[0], coords[1]


def _parse_track_points(root, errors: list[str]) -> tuple[str, list[TrackPoint]]:
    tracks = _children(root, "trk")
    if not tracks:
        return DEFAULT_ROUTE_NAME, []

    track = tracks[0]
    if len(tracks) > 1:
        logger.debug("Ignoring %d additional track(s)", len(tracks) - 1)
    name = _child_text(track, "name") or DEFAULT_ROUTE_NAME

    segments = _children(track, "trkseg")
    if not segments:
        return name, []
    if len(segments) > 1:
        logger.debug("Ignoring %d additional track segment(s)", len(segments) - 1)

    points = []
    for i, trkpt in enumerate(_children(segments[0], "trkpt")):
        lat, lon = _parse_coordinates(trkpt, f"trkpt[{i}]", errors)
        points.append(
            TrackPoint(
                lat=lat,
                lon=lon,
                elevation=_parse_float(_child_text(trkpt, "ele")),
                time=_parse_time(_child_text(trkpt, "time")),
            )
        )
    return name, points


def _parse_waypoints(root, errors: list[str]) -> list[Waypoint]:
    waypoints = []
    for i, wpt in enumerate(_children(root, "wpt")):
        lat, lon = _parse_coordinates(wpt, f"wpt[{i}]", errors)
        waypoints.append(
            Waypoint(
                lat=lat,
                lon=lon,
                name=_child_text(wpt, "name") or DEFAULT_WAYPOINT_NAME,
                description=_child_text(wpt, "desc") or "",
                elevation=_parse_float(_child_text(wpt, "ele")),
                time=_parse_time(_child_text(wpt, "time")),
            )
        )
    return waypoints


def parse_gpx_text(raw_text: str | bytes) -> RouteDocument:
    """Parse GPX text and return a RouteDocument.

    Raises:
        InvalidRootError: If the text is not XML or the root element is not <gpx>.
        MalformedNumericError: If any track point or waypoint has a missing or
            non-numeric lat/lon attribute.
    """
    if isinstance(raw_text, str):
        # Already decoded text; any encoding declaration no longer applies
        data, encoding = raw_text.encode("utf-8"), "utf-8"
    else:
        data, encoding = raw_text, None
    try:
        # One parser per call; lxml parser objects are not shared between threads
        parser = etree.XMLParser(resolve_entities=False, no_network=True, encoding=encoding)
        root = etree.fromstring(data, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise InvalidRootError(f"Invalid GPX file format: {e}") from e

    if root is None or _local_name(root) != ROOT_TAG:
        found = None if root is None else _local_name(root)
        raise InvalidRootError(f"Invalid GPX file format: expected <{ROOT_TAG}> root element, found <{found}>")

    errors: list[str] = []
    name, points = _parse_track_points(root, errors)
    waypoints = _parse_waypoints(root, errors)
    if errors:
        raise MalformedNumericError(errors)

    logger.debug("Parsed route %r: %d track points, %d waypoints", name, len(points), len(waypoints))
    return RouteDocument(name=name, points=tuple(points), waypoints=tuple(waypoints))


def parse_gpx(filepath: str | Path) -> RouteDocument:
    """Parse a GPX file and return a RouteDocument."""
    with open(filepath, "rb") as f:
        return parse_gpx_text(f.read())
