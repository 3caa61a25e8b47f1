"""Distance / elevation aggregation over track index ranges.

Pure functions: every figure is recomputed from the points passed in, so
statistics always describe the geometry they are given (filtered or raw).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Sequence

import numpy as np

from ..models import SegmentStats, TrackPoint
from .distance import coordinate_arrays, haversine_array, step_distances_3d


@dataclass(frozen=True, slots=True)
class RouteStats:
    """Whole-route summary used when comparing alternative routes."""

    total_distance: float
    total_ascent: float
    total_descent: float
    min_elevation: float
    max_elevation: float
    point_count: int


def segment_stats(
    points: Sequence[TrackPoint], from_index: int, to_index: int
) -> SegmentStats:
    """Return 3D distance and raw ascent/descent over ``[from_index, to_index)``.

    Each consecutive pair ``(i, i + 1)`` with ``from_index <= i < to_index``
    contributes. Reversed, empty or out-of-range spans yield zero stats.
    """

    start = max(from_index, 0)
    stop = min(to_index, len(points) - 1)
    if start >= stop:
        return SegmentStats()
    window = points[start : stop + 1]
    distance = float(np.sum(step_distances_3d(window)))
    deltas = np.diff(
        np.fromiter((p.elevation for p in window), dtype=float, count=len(window))
    )
    ascent = float(np.sum(deltas[deltas > 0]))
    descent = float(-np.sum(deltas[deltas < 0]))
    return SegmentStats(distance=distance, ascent=ascent, descent=descent)


def track_distance(points: Sequence[TrackPoint]) -> float:
    """Total 3D length of a track in metres."""

    return float(np.sum(step_distances_3d(points)))


def track_distance_2d(points: Sequence[TrackPoint]) -> float:
    """Total horizontal length of a track in metres."""

    if len(points) < 2:
        return 0.0
    lats, lons, _ = coordinate_arrays(points)
    return float(np.sum(haversine_array(lats[:-1], lons[:-1], lats[1:], lons[1:])))


def with_cumulative_distance(points: Sequence[TrackPoint]) -> List[TrackPoint]:
    """Return copies of ``points`` tagged with 3D distance from the first point."""

    if not points:
        return []
    cumulative = np.concatenate(([0.0], np.cumsum(step_distances_3d(points))))
    return [
        replace(point, cumulative_distance=float(value))
        for point, value in zip(points, cumulative)
    ]


def route_stats(points: Sequence[TrackPoint]) -> RouteStats:
    """Return horizontal distance, ascent/descent and elevation range."""

    if not points:
        return RouteStats(0.0, 0.0, 0.0, 0.0, 0.0, 0)
    raw = segment_stats(points, 0, len(points) - 1)
    _, _, eles = coordinate_arrays(points)
    return RouteStats(
        total_distance=track_distance_2d(points),
        total_ascent=raw.ascent,
        total_descent=raw.descent,
        min_elevation=float(np.min(eles)),
        max_elevation=float(np.max(eles)),
        point_count=len(points),
    )


__all__ = [
    "RouteStats",
    "route_stats",
    "segment_stats",
    "track_distance",
    "track_distance_2d",
    "with_cumulative_distance",
]
