"""Great-circle distance primitives on a spherical earth.

Every other geometry module measures through these functions. Accuracy is
adequate for spans up to ~100 km below ~80 degrees latitude; no ellipsoidal
correction is attempted and inputs are not validated here.
"""

from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..models import TrackPoint, Waypoint

EARTH_RADIUS_M = 6_371_000.0

MetricArray = NDArray[np.float64]


def distance_2d(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the haversine distance in metres between two coordinates."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    # Same clamp as haversine_array for near-antipodal pairs.
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance_3d(
    lat1: float,
    lon1: float,
    ele1: float,
    lat2: float,
    lon2: float,
    ele2: float,
) -> float:
    """Return the great-circle distance combined with the elevation delta."""

    horizontal = distance_2d(lat1, lon1, lat2, lon2)
    return math.hypot(horizontal, ele2 - ele1)


def point_distance_2d(a: TrackPoint | Waypoint, b: TrackPoint | Waypoint) -> float:
    return distance_2d(a.latitude, a.longitude, b.latitude, b.longitude)


def point_distance_3d(a: TrackPoint | Waypoint, b: TrackPoint | Waypoint) -> float:
    return distance_3d(
        a.latitude, a.longitude, a.elevation, b.latitude, b.longitude, b.elevation
    )


def waypoint_distance(waypoint: Waypoint, point: TrackPoint) -> float:
    """3D distance between a waypoint and a track point."""

    return point_distance_3d(waypoint, point)


def haversine_array(
    lat1: ArrayLike,
    lon1: ArrayLike,
    lat2: ArrayLike,
    lon2: ArrayLike,
) -> MetricArray:
    """Vectorised :func:`distance_2d` over broadcastable coordinate arrays."""

    phi1 = np.radians(np.asarray(lat1, dtype=float))
    phi2 = np.radians(np.asarray(lat2, dtype=float))
    d_phi = phi2 - phi1
    d_lambda = np.radians(np.asarray(lon2, dtype=float) - np.asarray(lon1, dtype=float))
    a = np.sin(d_phi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(d_lambda / 2) ** 2
    # Rounding can push ``a`` fractionally above 1 for antipodal inputs.
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def coordinate_arrays(
    points: Sequence[TrackPoint],
) -> tuple[MetricArray, MetricArray, MetricArray]:
    """Split a point sequence into latitude, longitude and elevation arrays."""

    if not points:
        empty = np.empty(0, dtype=float)
        return empty, empty.copy(), empty.copy()
    lats = np.fromiter((p.latitude for p in points), dtype=float, count=len(points))
    lons = np.fromiter((p.longitude for p in points), dtype=float, count=len(points))
    eles = np.fromiter((p.elevation for p in points), dtype=float, count=len(points))
    return lats, lons, eles


def distances_to_point(
    target: TrackPoint | Waypoint,
    lats: MetricArray,
    lons: MetricArray,
    eles: MetricArray,
) -> MetricArray:
    """Return the 3D distance from ``target`` to every point of a track."""

    horizontal = haversine_array(target.latitude, target.longitude, lats, lons)
    return np.hypot(horizontal, eles - target.elevation)


def step_distances_3d(points: Sequence[TrackPoint]) -> MetricArray:
    """3D distance between each consecutive pair of points (length n-1)."""

    if len(points) < 2:
        return np.empty(0, dtype=float)
    lats, lons, eles = coordinate_arrays(points)
    horizontal = haversine_array(lats[:-1], lons[:-1], lats[1:], lons[1:])
    return np.hypot(horizontal, np.diff(eles))


def is_waypoint_near_points(
    waypoint: Waypoint,
    points: Sequence[TrackPoint],
    max_distance_m: float,
) -> bool:
    """Return True when any point lies strictly within ``max_distance_m``."""

    if not points:
        return False
    lats, lons, eles = coordinate_arrays(points)
    distances = distances_to_point(waypoint, lats, lons, eles)
    return bool(np.any(distances < max_distance_m))


def find_close_waypoints(
    points: Sequence[TrackPoint],
    waypoints: Sequence[Waypoint],
    max_distance_m: float,
) -> List[Waypoint]:
    """Return the waypoints near any of ``points``, in input order."""

    return [
        waypoint
        for waypoint in waypoints
        if is_waypoint_near_points(waypoint, points, max_distance_m)
    ]


__all__ = [
    "EARTH_RADIUS_M",
    "coordinate_arrays",
    "distance_2d",
    "distance_3d",
    "distances_to_point",
    "find_close_waypoints",
    "haversine_array",
    "is_waypoint_near_points",
    "point_distance_2d",
    "point_distance_3d",
    "step_distances_3d",
    "waypoint_distance",
]
