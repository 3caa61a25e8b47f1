"""Compare two routes to find shared path, unique stretches and divergences.

Both routes are laid onto one local equirectangular plane (centred on their
combined mean position) so shapely can measure point-to-line offsets in
metres. This stays consistent with the spherical distance model for the
route lengths the toolkit targets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray
import shapely
from shapely.geometry import LineString, Point

from ..config import COMPARISON_MIN_SEGMENT_M, COMPARISON_PROXIMITY_M
from ..models import TrackPoint
from .distance import EARTH_RADIUS_M, MetricArray, coordinate_arrays, haversine_array
from .stats import RouteStats, route_stats

SHARED = "shared"
ROUTE1_ONLY = "route1_only"
ROUTE2_ONLY = "route2_only"


@dataclass(frozen=True, slots=True)
class RouteStretch:
    """Contiguous index range of one route, inclusive at both ends."""

    start_index: int
    end_index: int
    start_distance_m: float
    end_distance_m: float
    kind: str

    @property
    def length_m(self) -> float:
        return self.end_distance_m - self.start_distance_m


@dataclass(frozen=True, slots=True)
class JunctionPoint:
    """Index on route 1 where routes part or rejoin, with the nearest route 2 vertex."""

    route1_index: int
    route2_index: int
    distance_m: float


@dataclass(slots=True)
class RouteComparison:
    route1_stats: RouteStats
    route2_stats: RouteStats
    shared: List[RouteStretch] = field(default_factory=list)
    route1_only: List[RouteStretch] = field(default_factory=list)
    route2_only: List[RouteStretch] = field(default_factory=list)
    divergences: List[JunctionPoint] = field(default_factory=list)
    convergences: List[JunctionPoint] = field(default_factory=list)
    shared_distance_m: float = 0.0
    shared_percentage: float = 0.0

    @property
    def distance_diff_m(self) -> float:
        return self.route2_stats.total_distance - self.route1_stats.total_distance

    @property
    def ascent_diff_m(self) -> float:
        return self.route2_stats.total_ascent - self.route1_stats.total_ascent

    @property
    def descent_diff_m(self) -> float:
        return self.route2_stats.total_descent - self.route1_stats.total_descent


def compare_routes(
    route1: Sequence[TrackPoint],
    route2: Sequence[TrackPoint],
    proximity_m: float = COMPARISON_PROXIMITY_M,
    min_segment_m: float = COMPARISON_MIN_SEGMENT_M,
) -> RouteComparison:
    """Compare ``route2`` against the baseline ``route1``."""

    comparison = RouteComparison(
        route1_stats=route_stats(route1), route2_stats=route_stats(route2)
    )
    if not route1 or not route2:
        return comparison

    xy1, xy2 = _local_plane(route1, route2)
    shared1 = _near_line(xy1, xy2, proximity_m)
    shared2 = _near_line(xy2, xy1, proximity_m)
    cumulative1 = _cumulative_2d(route1)
    cumulative2 = _cumulative_2d(route2)

    for stretch in _stretches(shared1, cumulative1, SHARED, ROUTE1_ONLY):
        if stretch.length_m < min_segment_m:
            continue
        if stretch.kind == SHARED:
            comparison.shared.append(stretch)
        else:
            comparison.route1_only.append(stretch)
    comparison.route2_only = [
        stretch
        for stretch in _stretches(shared2, cumulative2, SHARED, ROUTE2_ONLY)
        if stretch.kind == ROUTE2_ONLY and stretch.length_m >= min_segment_m
    ]

    lats2, lons2, _ = coordinate_arrays(route2)
    for index in range(1, len(route1)):
        if shared1[index - 1] == shared1[index]:
            continue
        point = route1[index]
        offsets = haversine_array(point.latitude, point.longitude, lats2, lons2)
        nearest = int(np.argmin(offsets))
        junction = JunctionPoint(index, nearest, float(offsets[nearest]))
        if shared1[index - 1]:
            comparison.divergences.append(junction)
        else:
            comparison.convergences.append(junction)

    comparison.shared_distance_m = sum(s.length_m for s in comparison.shared)
    total = comparison.route1_stats.total_distance
    if total > 0:
        comparison.shared_percentage = comparison.shared_distance_m / total * 100.0
    return comparison


def _local_plane(
    route1: Sequence[TrackPoint], route2: Sequence[TrackPoint]
) -> Tuple[MetricArray, MetricArray]:
    lats1, lons1, _ = coordinate_arrays(route1)
    lats2, lons2, _ = coordinate_arrays(route2)
    lat0 = float(np.mean(np.concatenate((lats1, lats2))))
    lon0 = float(np.mean(np.concatenate((lons1, lons2))))
    scale = math.cos(math.radians(lat0)) * EARTH_RADIUS_M

    def project(lats: MetricArray, lons: MetricArray) -> MetricArray:
        xs = np.radians(lons - lon0) * scale
        ys = np.radians(lats - lat0) * EARTH_RADIUS_M
        return np.column_stack((xs, ys))

    return project(lats1, lons1), project(lats2, lons2)


def _near_line(
    points: MetricArray, other: MetricArray, proximity_m: float
) -> NDArray[np.bool_]:
    """Flag every point within ``proximity_m`` of the polyline ``other``."""

    geometry = LineString(other) if len(other) >= 2 else Point(other[0])
    offsets = shapely.distance(geometry, shapely.points(points))
    return np.asarray(offsets <= proximity_m, dtype=bool)


def _cumulative_2d(points: Sequence[TrackPoint]) -> MetricArray:
    lats, lons, _ = coordinate_arrays(points)
    steps = haversine_array(lats[:-1], lons[:-1], lats[1:], lons[1:])
    return np.concatenate(([0.0], np.cumsum(steps)))


def _stretches(
    flags: NDArray[np.bool_],
    cumulative: MetricArray,
    true_kind: str,
    false_kind: str,
) -> List[RouteStretch]:
    """Split a flag array into runs of equal value."""

    stretches: List[RouteStretch] = []
    start = 0
    for index in range(1, len(flags) + 1):
        if index < len(flags) and flags[index] == flags[start]:
            continue
        end = index - 1
        stretches.append(
            RouteStretch(
                start_index=start,
                end_index=end,
                start_distance_m=float(cumulative[start]),
                end_distance_m=float(cumulative[end]),
                kind=true_kind if flags[start] else false_kind,
            )
        )
        start = index
    return stretches


__all__ = [
    "ROUTE1_ONLY",
    "ROUTE2_ONLY",
    "SHARED",
    "JunctionPoint",
    "RouteComparison",
    "RouteStretch",
    "compare_routes",
]
