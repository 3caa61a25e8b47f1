"""Itinerary datasheet aggregation and DataFrame output."""

from __future__ import annotations

import logging
import math

import pandas as pd
import pytest

from trail_itinerary.datasheet import (
    build_itinerary,
    build_track_itinerary,
    itinerary_frames,
)
from trail_itinerary.errors import NoTrackDataError, NoVisitsError, NoWaypointsError
from trail_itinerary.models import NamedSegment, ProcessingOptions, TrackPoint, Waypoint

from helpers import METERS_PER_DEGREE, make_profile

STEP_M = math.hypot(0.001 * METERS_PER_DEGREE, 1.0)
LEG_KM = 50 * STEP_M / 1000.0


def _climbing_track():
    """101 points, 111 m apart, climbing 1 m per point."""
    return make_profile(list(range(101)))


def _stops(track):
    return [
        Waypoint(track[0].latitude, track[0].longitude, 0.0, name="Start Hut"),
        Waypoint(
            track[50].latitude, track[50].longitude, 50.0, name="Coles Supermarket"
        ),
        Waypoint(
            track[100].latitude,
            track[100].longitude,
            100.0,
            name="Camp",
            description="Water tank",
        ),
    ]


def test_rows_accumulate_legs_between_visits() -> None:
    track = _climbing_track()
    result = build_track_itinerary(track, _stops(track), name="Day 1")
    assert result.name == "Day 1"
    assert [row.location for row in result.rows] == ["Start Hut", "Coles Supermarket", "Camp"]
    assert [row.track_index for row in result.rows] == [0, 50, 100]

    start, shop, camp = result.rows
    assert start.distance_km == 0.0
    assert start.ascent == 0.0
    assert shop.distance_km == pytest.approx(LEG_KM)
    assert shop.ascent == pytest.approx(50.0)
    assert camp.total_distance_km == pytest.approx(round(2 * LEG_KM, 3))
    assert camp.total_ascent == pytest.approx(100.0)
    assert camp.total_descent == 0.0
    assert camp.elevation == 100.0
    assert camp.notes == "Water tank"


def test_resupply_selects_keywords_and_end() -> None:
    track = _climbing_track()
    result = build_track_itinerary(track, _stops(track))
    assert [stop.location for stop in result.resupply] == ["Coles Supermarket", "Camp"]
    shop, camp = result.resupply
    assert shop.distance_km == pytest.approx(round(LEG_KM, 3), abs=1e-3)
    assert camp.distance_km == pytest.approx(LEG_KM, abs=2e-3)
    assert camp.ascent == pytest.approx(50.0)


def test_resupply_start_and_end_toggles() -> None:
    track = _climbing_track()
    options = ProcessingOptions(
        include_start_as_resupply=True,
        include_end_as_resupply=False,
        resupply_keywords=[],
    )
    result = build_track_itinerary(track, _stops(track), options)
    assert [stop.location for stop in result.resupply] == ["Start Hut"]
    assert result.resupply[0].distance_km == 0.0


def test_resupply_keyword_matches_notes() -> None:
    track = _climbing_track()
    stops = _stops(track)
    options = ProcessingOptions(
        resupply_keywords=["water"], include_end_as_resupply=False
    )
    result = build_track_itinerary(track, stops, options)
    assert [stop.location for stop in result.resupply] == ["Camp"]


def test_unnamed_waypoints_get_positional_labels() -> None:
    track = _climbing_track()
    stops = [Waypoint(track[10].latitude, track[10].longitude, 10.0)]
    result = build_track_itinerary(track, stops)
    assert result.rows[0].location == "Waypoint 1"


def test_empty_track_gives_no_rows() -> None:
    result = build_track_itinerary([], [Waypoint(0.0, 0.0)])
    assert result.rows == []
    assert result.resupply == []


def test_build_itinerary_totals() -> None:
    track = _climbing_track()
    itinerary = build_itinerary([NamedSegment("", track)], _stops(track))
    assert [t.name for t in itinerary.tracks] == ["Track 1"]
    totals = itinerary.totals
    assert totals.total_points == 3
    assert totals.resupply_count == 2
    assert totals.total_distance_km == pytest.approx(round(2 * LEG_KM, 2))
    assert totals.total_ascent == 100.0
    assert totals.total_descent == 0.0


def test_build_itinerary_errors() -> None:
    track = _climbing_track()
    with pytest.raises(NoTrackDataError):
        build_itinerary([], _stops(track))
    with pytest.raises(NoTrackDataError):
        build_itinerary([NamedSegment("Empty", ())], _stops(track))
    with pytest.raises(NoWaypointsError):
        build_itinerary([NamedSegment("Main", track)], [])
    with pytest.raises(NoVisitsError, match="200m"):
        build_itinerary([NamedSegment("Main", track)], [Waypoint(10.0, 10.0)])


def test_tracks_without_visits_are_skipped(caplog) -> None:
    track = _climbing_track()
    remote = [TrackPoint(5.0, index * 0.001) for index in range(5)]
    with caplog.at_level(logging.INFO, logger="trail_itinerary.datasheet"):
        itinerary = build_itinerary(
            [NamedSegment("Main", track), NamedSegment("Remote", remote)], _stops(track)
        )
    assert [t.name for t in itinerary.tracks] == ["Main"]
    assert any("Remote" in rec.getMessage() for rec in caplog.records)


def test_frames_single_track_km() -> None:
    track = _climbing_track()
    itinerary = build_itinerary([NamedSegment("Main", track)], _stops(track))
    plan, resupply = itinerary_frames(itinerary)
    assert isinstance(plan, pd.DataFrame)
    assert list(plan["Location"]) == ["Start Hut", "Coles Supermarket", "Camp"]
    assert "Total Distance (km)" in plan.columns
    assert "Total Ascent (m)" in plan.columns
    assert plan["Total Ascent (m)"].iloc[-1] == 100.0
    assert list(resupply["Location"]) == ["Coles Supermarket", "Camp"]


def test_frames_imperial_units() -> None:
    track = _climbing_track()
    itinerary = build_itinerary([NamedSegment("Main", track)], _stops(track))
    plan, resupply = itinerary_frames(itinerary, distance_unit="mi", elevation_unit="ft")
    assert "Distance (mi)" in plan.columns
    assert "Ascent (ft)" in resupply.columns
    assert plan["Elevation (ft)"].iloc[-1] == pytest.approx(328.1)
    expected_mi = round(round(2 * LEG_KM, 3) * 0.621371, 3)
    assert plan["Total Distance (mi)"].iloc[-1] == pytest.approx(expected_mi)


def test_frames_multi_track_header_rows() -> None:
    first = _climbing_track()
    second = [TrackPoint(1.0, p.longitude, p.elevation) for p in first]
    waypoints = _stops(first) + [
        Waypoint(1.0, second[20].longitude, 20.0, name="Bridge")
    ]
    itinerary = build_itinerary(
        [NamedSegment("Day 1", first), NamedSegment("Day 2", second)], waypoints
    )
    plan, _ = itinerary_frames(itinerary)
    locations = list(plan["Location"])
    assert locations == ["Day 1", "Start Hut", "Coles Supermarket", "Camp", "Day 2", "Bridge"]
    assert pd.isna(plan.loc[0, "Distance (km)"])


def test_frames_reject_unknown_unit() -> None:
    track = _climbing_track()
    itinerary = build_itinerary([NamedSegment("Main", track)], _stops(track))
    with pytest.raises(ValueError):
        itinerary_frames(itinerary, distance_unit="furlong")
