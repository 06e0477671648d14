from dataclasses import dataclass
from datetime import datetime, timedelta

DEFAULT_ROUTE_NAME = "GPX Route"
DEFAULT_WAYPOINT_NAME = "Waypoint"

KM_TO_MILES = 0.621371


@dataclass(frozen=True)
class TrackPoint:
    lat: float
    lon: float
    elevation: float | None  # meters
    time: datetime | None


@dataclass(frozen=True)
class Waypoint:
    lat: float
    lon: float
    name: str = DEFAULT_WAYPOINT_NAME
    description: str = ""
    elevation: float | None = None  # meters
    time: datetime | None = None


@dataclass(frozen=True)
class RouteDocument:
    name: str = DEFAULT_ROUTE_NAME
    points: tuple[TrackPoint, ...] = ()
    waypoints: tuple[Waypoint, ...] = ()


@dataclass(frozen=True)
class RouteStatistics:
    total_distance_km: float
    elevation_gain_m: float
    elevation_loss_m: float
    max_elevation_m: float
    min_elevation_m: float
    start_time: datetime | None
    end_time: datetime | None
    duration_ms: int

    @property
    def total_distance_miles(self) -> float:
        return self.total_distance_km * KM_TO_MILES

    @property
    def duration(self) -> timedelta:
        return timedelta(milliseconds=self.duration_ms)


@dataclass(frozen=True)
class WaypointSummary:
    index: int  # 1-based display id
    point_index: int  # index into RouteDocument.points
    position: tuple[float, float]  # (lat, lon)
    mile_marker: float
    label: str
    narrative: str
    pace: float  # decimal minutes per mile
    pace_text: str  # min:sec per mile
    heart_rate_bpm: int
    elevation: float | None
    time: datetime | None


@dataclass(frozen=True)
class SamplerParams:
    km_to_miles: float = KM_TO_MILES
    base_heart_rate: float = 140.0  # bpm at the start line
    max_heart_rate_increase: float = 40.0  # bpm added by the finish line
    base_pace: float = 9.0  # minutes per mile
    # Pace offset is pace_swing_floor at the midpoint, rising linearly to
    # pace_swing_floor + pace_swing_range at either end.
    pace_swing_floor: float = -0.5
    pace_swing_range: float = 0.75
    start_label: str = "Start Line"
    finish_label: str = "Finish Line"
    start_narrative: str = "Race began with perfect weather conditions. Feeling strong!"
    finish_narrative: str = "Crossed the finish line with a new PR! Amazing experience."
    steady_narrative: str = "Maintaining a steady pace. Feeling good and strong."
    pushing_narrative: str = "Starting to feel the effort but pushing through. Great crowd support."
    closing_narrative: str = "The home stretch! Picking up pace for the strong finish."
    mile_label_format: str = "Mile {mile}"
