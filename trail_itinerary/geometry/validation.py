"""Coordinate validation run before data enters the geometry core."""

from __future__ import annotations

import math
from typing import Sequence

from ..errors import InvalidCoordinateError
from ..models import TrackPoint, Waypoint


def validate_points(points: Sequence[TrackPoint], label: str = "track") -> None:
    """Raise :class:`InvalidCoordinateError` for the first unusable point."""

    for index, point in enumerate(points):
        _check(point.latitude, point.longitude, point.elevation, f"{label}[{index}]")


def validate_waypoints(waypoints: Sequence[Waypoint]) -> None:
    for index, waypoint in enumerate(waypoints):
        where = f"waypoint[{index}]"
        if waypoint.name:
            where = f"{where} '{waypoint.name}'"
        _check(waypoint.latitude, waypoint.longitude, waypoint.elevation, where)


def _check(latitude: float, longitude: float, elevation: float, where: str) -> None:
    if not all(math.isfinite(value) for value in (latitude, longitude, elevation)):
        raise InvalidCoordinateError(
            f"{where} has non-finite coordinates "
            f"(lat={latitude}, lon={longitude}, ele={elevation})"
        )
    if not -90.0 <= latitude <= 90.0:
        raise InvalidCoordinateError(f"{where} latitude {latitude} outside [-90, 90]")
    if not -180.0 <= longitude <= 180.0:
        raise InvalidCoordinateError(
            f"{where} longitude {longitude} outside [-180, 180]"
        )


__all__ = ["validate_points", "validate_waypoints"]
