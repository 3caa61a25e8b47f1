"""Coordinate validation ahead of the geometry core."""

from __future__ import annotations

import math

import pytest

from trail_itinerary.errors import InvalidCoordinateError, ItineraryError
from trail_itinerary.geometry.validation import validate_points, validate_waypoints
from trail_itinerary.models import TrackPoint, Waypoint


def test_valid_points_pass() -> None:
    validate_points([TrackPoint(-90.0, -180.0, -400.0), TrackPoint(90.0, 180.0, 8848.0)])
    validate_waypoints([Waypoint(0.0, 0.0, name="Origin")])
    validate_points([])


@pytest.mark.parametrize(
    "point, fragment",
    [
        (TrackPoint(math.nan, 0.0), "non-finite"),
        (TrackPoint(0.0, math.inf), "non-finite"),
        (TrackPoint(0.0, 0.0, -math.inf), "non-finite"),
        (TrackPoint(90.5, 0.0), "latitude 90.5"),
        (TrackPoint(0.0, -180.1), "longitude -180.1"),
    ],
)
def test_invalid_points_raise(point: TrackPoint, fragment: str) -> None:
    with pytest.raises(InvalidCoordinateError) as excinfo:
        validate_points([TrackPoint(0.0, 0.0), point], label="Main")
    assert "Main[1]" in str(excinfo.value)
    assert fragment in str(excinfo.value)


def test_waypoint_error_names_the_waypoint() -> None:
    with pytest.raises(InvalidCoordinateError, match=r"waypoint\[0\] 'Hut'"):
        validate_waypoints([Waypoint(100.0, 0.0, name="Hut")])


def test_error_hierarchy() -> None:
    error = InvalidCoordinateError("bad")
    assert isinstance(error, ItineraryError)
    assert isinstance(error, ValueError)
