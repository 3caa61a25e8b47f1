"""Synthetic track factories shared by the geometry tests."""
from __future__ import annotations

from typing import List, Optional, Sequence

from trail_itinerary.models import TrackPoint

# Metres per degree of longitude on the equator for a 6,371 km sphere.
METERS_PER_DEGREE = 111_194.926644559


def make_line(
    count: int,
    start: tuple[float, float] = (0.0, 0.0),
    end: tuple[float, float] = (0.0, 1.0),
    elevations: Optional[Sequence[float]] = None,
) -> List[TrackPoint]:
    """Evenly spaced points from ``start`` to ``end`` (lat, lon)."""

    if count == 1:
        ele = elevations[0] if elevations else 0.0
        return [TrackPoint(start[0], start[1], ele)]
    points = []
    for index in range(count):
        frac = index / (count - 1)
        lat = start[0] + (end[0] - start[0]) * frac
        lon = start[1] + (end[1] - start[1]) * frac
        ele = float(elevations[index]) if elevations is not None else 0.0
        points.append(TrackPoint(lat, lon, ele, time=f"T{index:05d}"))
    return points


def make_profile(elevations: Sequence[float], step_deg: float = 0.001) -> List[TrackPoint]:
    """Equator track with one point every ``step_deg`` of longitude."""

    return [
        TrackPoint(0.0, index * step_deg, float(ele), time=f"T{index:05d}")
        for index, ele in enumerate(elevations)
    ]


def make_out_and_back(count_each_way: int, end_lon: float = 0.1) -> List[TrackPoint]:
    """Equator track out to ``end_lon`` and back to the origin."""

    out = make_line(count_each_way, (0.0, 0.0), (0.0, end_lon))
    back = list(reversed(out[:-1]))
    return out + back
