"""Douglas-Peucker polyline simplification."""

from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np

from ..models import TrackPoint
from .distance import EARTH_RADIUS_M, MetricArray, coordinate_arrays


def perpendicular_distance(
    point: TrackPoint, line_start: TrackPoint, line_end: TrackPoint
) -> float:
    """Distance in metres from ``point`` to the chord ``line_start``-``line_end``."""

    lats = np.array([point.latitude], dtype=float)
    lons = np.array([point.longitude], dtype=float)
    return float(
        _chord_distances(
            lats,
            lons,
            line_start.latitude,
            line_start.longitude,
            line_end.latitude,
            line_end.longitude,
        )[0]
    )


def simplify(points: Sequence[TrackPoint], tolerance_m: float) -> List[TrackPoint]:
    """Return the subsequence of ``points`` kept by Douglas-Peucker.

    Ranges are processed from an explicit stack so very long tracks never
    exhaust the call stack. First and last points are always kept.
    """

    count = len(points)
    if count <= 2:
        return list(points)

    lats, lons, _ = coordinate_arrays(points)
    keep = np.zeros(count, dtype=bool)
    keep[0] = keep[-1] = True

    stack = [(0, count - 1)]
    while stack:
        start, end = stack.pop()
        if end - start < 2:
            continue
        offsets = _chord_distances(
            lats[start + 1 : end],
            lons[start + 1 : end],
            lats[start],
            lons[start],
            lats[end],
            lons[end],
        )
        local_index = int(np.argmax(offsets))
        if offsets[local_index] > tolerance_m:
            split = start + 1 + local_index
            keep[split] = True
            stack.append((start, split))
            stack.append((split, end))

    return [point for point, kept in zip(points, keep) if kept]


def _chord_distances(
    lats: MetricArray,
    lons: MetricArray,
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> MetricArray:
    """Project onto an equirectangular plane centred on the chord's mean latitude."""

    scale = math.cos(math.radians((lat1 + lat2) / 2.0)) * EARTH_RADIUS_M
    x1 = math.radians(lon1) * scale
    y1 = math.radians(lat1) * EARTH_RADIUS_M
    x2 = math.radians(lon2) * scale
    y2 = math.radians(lat2) * EARTH_RADIUS_M
    xs = np.radians(lons) * scale
    ys = np.radians(lats) * EARTH_RADIUS_M

    dx = x2 - x1
    dy = y2 - y1
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return np.hypot(xs - x1, ys - y1)

    t = np.clip(((xs - x1) * dx + (ys - y1) * dy) / length_sq, 0.0, 1.0)
    return np.hypot(xs - (x1 + t * dx), ys - (y1 + t * dy))


__all__ = ["perpendicular_distance", "simplify"]
