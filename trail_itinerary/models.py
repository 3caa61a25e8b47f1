"""Dataclasses describing trail geometry inputs, options and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import (
    COORDINATE_PRECISION,
    ELEVATION_NOISE_THRESHOLD_M,
    ELEVATION_SMOOTHING_ENABLED,
    GAP_WARNING_THRESHOLD_M,
    INCLUDE_END_AS_RESUPPLY,
    INCLUDE_START_AS_RESUPPLY,
    MAX_POINT_COUNT,
    REMOVE_DUPLICATE_WAYPOINTS,
    RESUPPLY_KEYWORDS,
    SIMPLIFICATION_TOLERANCE_M,
    SMOOTHING_WINDOW,
    SPIKE_THRESHOLD_M,
    TRUNCATE_END_M,
    TRUNCATE_START_M,
    VISIT_EXIT_MULTIPLIER,
    VISIT_HYSTERESIS_ENABLED,
    WAYPOINT_MAX_DISTANCE_M,
)


@dataclass(frozen=True, slots=True)
class TrackPoint:
    """A single GPS fix. Elevation 0 is sea level, not a missing value."""

    latitude: float
    longitude: float
    elevation: float = 0.0
    time: Optional[str] = None
    cumulative_distance: Optional[float] = None


@dataclass(frozen=True, slots=True)
class Waypoint:
    """Point of interest, related to a track only by proximity."""

    latitude: float
    longitude: float
    elevation: float = 0.0
    name: str = ""
    description: str = ""


@dataclass(frozen=True, slots=True)
class NamedSegment:
    """A named, independently recorded track fragment."""

    name: str
    points: Tuple[TrackPoint, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))


@dataclass(frozen=True, slots=True)
class VisitRecord:
    """Closest approach of the track to a waypoint during one proximity window."""

    waypoint: Waypoint
    track_index: int
    distance_from_track: float


@dataclass(frozen=True, slots=True)
class SegmentStats:
    """Distance (metres) and raw ascent/descent between two track indices."""

    distance: float = 0.0
    ascent: float = 0.0
    descent: float = 0.0

    def __add__(self, other: "SegmentStats") -> "SegmentStats":
        return SegmentStats(
            distance=self.distance + other.distance,
            ascent=self.ascent + other.ascent,
            descent=self.descent + other.descent,
        )


@dataclass(frozen=True, slots=True)
class RouteGap:
    """Discontinuity between two consecutive stitched segments."""

    after_segment_index: int
    distance_m: float
    from_point: TrackPoint
    to_point: TrackPoint
    from_name: str = ""
    to_name: str = ""


@dataclass(frozen=True, slots=True)
class StitchedSegment:
    """Placement of one input segment inside a stitched route."""

    name: str
    source_index: int
    reversed: bool = False


@dataclass(frozen=True, slots=True)
class StitchedRoute:
    """Result of ordering and joining disjoint segments into one route."""

    points: Tuple[TrackPoint, ...] = ()
    segments: Tuple[StitchedSegment, ...] = ()
    gaps: Tuple[RouteGap, ...] = ()

    @property
    def ordered_names(self) -> List[str]:
        return [segment.name for segment in self.segments]


@dataclass(slots=True)
class ProcessingOptions:
    """Configuration for the geometry pipeline.

    Defaults come from :mod:`trail_itinerary.config`; callers override fields
    per request rather than through the environment.
    """

    simplification_tolerance_m: float = SIMPLIFICATION_TOLERANCE_M
    elevation_smoothing: bool = ELEVATION_SMOOTHING_ENABLED
    spike_threshold_m: float = SPIKE_THRESHOLD_M
    smoothing_window: int = SMOOTHING_WINDOW
    elevation_noise_threshold_m: float = ELEVATION_NOISE_THRESHOLD_M
    truncate_start_m: float = TRUNCATE_START_M
    truncate_end_m: float = TRUNCATE_END_M
    coordinate_precision: int = COORDINATE_PRECISION
    waypoint_max_distance_m: float = WAYPOINT_MAX_DISTANCE_M
    visit_hysteresis: bool = VISIT_HYSTERESIS_ENABLED
    visit_exit_multiplier: float = VISIT_EXIT_MULTIPLIER
    gap_threshold_m: float = GAP_WARNING_THRESHOLD_M
    remove_duplicate_waypoints: bool = REMOVE_DUPLICATE_WAYPOINTS
    max_point_count: int = MAX_POINT_COUNT
    resupply_keywords: List[str] = field(
        default_factory=lambda: list(RESUPPLY_KEYWORDS)
    )
    include_start_as_resupply: bool = INCLUDE_START_AS_RESUPPLY
    include_end_as_resupply: bool = INCLUDE_END_AS_RESUPPLY

    @property
    def exit_multiplier(self) -> Optional[float]:
        """Exit threshold multiplier, or ``None`` for the single-threshold detector."""
        return self.visit_exit_multiplier if self.visit_hysteresis else None
