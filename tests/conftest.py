import os
from datetime import datetime, timedelta, timezone

import pytest

from race_recap.models import RouteDocument, TrackPoint

SAMPLE_GPX_PATH = os.path.join(
    os.path.dirname(__file__), "functional", "data", "sample_race.gpx"
)


@pytest.fixture
def equator_track_points():
    """Three points one degree of longitude apart along the equator, no times."""
    return [
        TrackPoint(lat=0.0, lon=0.0, elevation=0.0, time=None),
        TrackPoint(lat=0.0, lon=1.0, elevation=10.0, time=None),
        TrackPoint(lat=0.0, lon=2.0, elevation=5.0, time=None),
    ]


@pytest.fixture
def timed_track_points():
    """A short timed run: ~130m between points, 30s apart."""
    base_time = datetime(2024, 6, 15, 8, 0, 0, tzinfo=timezone.utc)
    return [
        TrackPoint(lat=37.7749, lon=-122.4194, elevation=10.0, time=base_time),
        TrackPoint(
            lat=37.7758,
            lon=-122.4183,
            elevation=14.0,
            time=base_time + timedelta(seconds=30),
        ),
        TrackPoint(
            lat=37.7767,
            lon=-122.4172,
            elevation=12.0,
            time=base_time + timedelta(seconds=60),
        ),
    ]


@pytest.fixture
def ten_point_document():
    """Ten points marching east along the equator, 0.01 degrees apart."""
    points = tuple(
        TrackPoint(lat=0.0, lon=i * 0.01, elevation=float(i), time=None)
        for i in range(10)
    )
    return RouteDocument(name="Ten Points", points=points)
