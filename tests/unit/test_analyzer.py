from datetime import datetime, timedelta, timezone

import pytest

from race_recap.analyzer import compute_statistics, cumulative_distances
from race_recap.models import TrackPoint


class TestComputeStatistics:
    def test_empty(self):
        stats = compute_statistics([])
        assert stats.total_distance_km == 0.0
        assert stats.elevation_gain_m == 0.0
        assert stats.elevation_loss_m == 0.0
        assert stats.max_elevation_m == 0.0
        assert stats.min_elevation_m == 0.0
        assert stats.start_time is None
        assert stats.end_time is None
        assert stats.duration_ms == 0

    def test_single_point(self):
        t = datetime(2024, 6, 15, 8, 0, 0, tzinfo=timezone.utc)
        stats = compute_statistics([TrackPoint(lat=1.0, lon=1.0, elevation=42.0, time=t)])
        assert stats.total_distance_km == 0.0
        assert stats.max_elevation_m == 42.0
        assert stats.min_elevation_m == 42.0
        assert stats.start_time == t
        assert stats.end_time == t
        assert stats.duration_ms == 0

    def test_equator_scenario(self, equator_track_points):
        stats = compute_statistics(equator_track_points)
        assert stats.elevation_gain_m == pytest.approx(10.0)
        assert stats.elevation_loss_m == pytest.approx(5.0)
        assert stats.max_elevation_m == 10.0
        assert stats.min_elevation_m == 0.0
        assert stats.duration_ms == 0
        assert stats.start_time is None
        assert stats.total_distance_km == pytest.approx(222.39, abs=0.05)

    def test_timed_track(self, timed_track_points):
        stats = compute_statistics(timed_track_points)
        assert stats.duration_ms == 60_000
        assert stats.duration == timedelta(seconds=60)
        assert stats.elevation_gain_m == pytest.approx(4.0)
        assert stats.elevation_loss_m == pytest.approx(2.0)
        assert stats.total_distance_km > 0

    def test_missing_elevation_breaks_pairs(self):
        points = [
            TrackPoint(lat=0.0, lon=0.0, elevation=0.0, time=None),
            TrackPoint(lat=0.0, lon=0.001, elevation=None, time=None),
            TrackPoint(lat=0.0, lon=0.002, elevation=100.0, time=None),
            TrackPoint(lat=0.0, lon=0.003, elevation=90.0, time=None),
        ]
        stats = compute_statistics(points)
        # 0 -> None -> 100 contributes nothing; only 100 -> 90 counts
        assert stats.elevation_gain_m == 0.0
        assert stats.elevation_loss_m == pytest.approx(10.0)
        assert stats.max_elevation_m == 100.0
        assert stats.min_elevation_m == 0.0

    def test_no_elevation_at_all(self):
        points = [
            TrackPoint(lat=0.0, lon=0.0, elevation=None, time=None),
            TrackPoint(lat=0.0, lon=0.001, elevation=None, time=None),
        ]
        stats = compute_statistics(points)
        assert stats.max_elevation_m == 0.0
        assert stats.min_elevation_m == 0.0
        assert stats.elevation_gain_m == 0.0

    def test_times_taken_from_first_and_last_timed_points(self):
        base = datetime(2024, 6, 15, 8, 0, 0, tzinfo=timezone.utc)
        points = [
            TrackPoint(lat=0.0, lon=0.0, elevation=None, time=None),
            TrackPoint(lat=0.0, lon=0.001, elevation=None, time=base),
            TrackPoint(lat=0.0, lon=0.002, elevation=None, time=base + timedelta(seconds=90)),
            TrackPoint(lat=0.0, lon=0.003, elevation=None, time=None),
        ]
        stats = compute_statistics(points)
        assert stats.start_time == base
        assert stats.end_time == base + timedelta(seconds=90)
        assert stats.duration_ms == 90_000

    def test_backwards_clock_gives_zero_duration(self):
        base = datetime(2024, 6, 15, 8, 0, 0, tzinfo=timezone.utc)
        points = [
            TrackPoint(lat=0.0, lon=0.0, elevation=None, time=base),
            TrackPoint(lat=0.0, lon=0.001, elevation=None, time=base - timedelta(seconds=5)),
        ]
        assert compute_statistics(points).duration_ms == 0

    def test_order_dependent_distance(self, equator_track_points):
        a, b, c = equator_track_points
        forward = compute_statistics([a, b, c]).total_distance_km
        shuffled = compute_statistics([a, c, b]).total_distance_km
        assert shuffled > forward

    def test_distance_non_negative(self, timed_track_points):
        assert compute_statistics(timed_track_points).total_distance_km >= 0


class TestCumulativeDistances:
    def test_empty(self):
        assert cumulative_distances([]) == []

    def test_ends_at_total(self, equator_track_points):
        cum = cumulative_distances(equator_track_points)
        assert len(cum) == 3
        assert cum[0] == 0.0
        assert cum[1] == pytest.approx(111.19, abs=0.05)
        assert cum[-1] == pytest.approx(compute_statistics(equator_track_points).total_distance_km)

    def test_non_decreasing(self, ten_point_document):
        cum = cumulative_distances(ten_point_document.points)
        assert all(b >= a for a, b in zip(cum, cum[1:]))
