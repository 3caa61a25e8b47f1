"""Splitting long tracks into point-limited chunks."""

from __future__ import annotations

import pytest

from trail_itinerary.geometry.splitting import split_track
from trail_itinerary.models import Waypoint

from helpers import make_line


def test_split_into_named_chunks() -> None:
    points = make_line(12, (0.0, 0.0), (0.0, 0.11))
    chunks = split_track("Coast", points, [], max_points=5)
    assert [c.name for c in chunks] == ["Coast 1", "Coast 2", "Coast 3"]
    assert [len(c.points) for c in chunks] == [5, 5, 2]
    assert chunks[1].points[0] == points[5]


def test_short_track_keeps_name() -> None:
    points = make_line(4)
    chunks = split_track("Coast", points, [], max_points=5)
    assert len(chunks) == 1
    assert chunks[0].name == "Coast"
    assert chunks[0].points == tuple(points)


def test_waypoints_follow_their_chunk() -> None:
    points = make_line(12, (0.0, 0.0), (0.0, 0.11))
    camp = Waypoint(points[7].latitude, points[7].longitude, name="Camp")
    town = Waypoint(points[0].latitude, points[0].longitude, name="Town")
    chunks = split_track("Coast", points, [camp, town], max_points=5, waypoint_max_distance_m=100.0)
    assert [w.name for w in chunks[0].waypoints] == ["Town"]
    assert [w.name for w in chunks[1].waypoints] == ["Camp"]
    assert chunks[2].waypoints == ()


def test_invalid_chunk_size() -> None:
    with pytest.raises(ValueError):
        split_track("Coast", make_line(3), [], max_points=0)


def test_empty_track_gives_no_chunks() -> None:
    assert split_track("Coast", [], [Waypoint(0.0, 0.0)]) == []
