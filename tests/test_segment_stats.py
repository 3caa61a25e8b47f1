"""Segment / route statistics aggregation."""

from __future__ import annotations

import pytest

from trail_itinerary.geometry.stats import (
    route_stats,
    segment_stats,
    track_distance,
    track_distance_2d,
    with_cumulative_distance,
)
from trail_itinerary.models import SegmentStats

from helpers import METERS_PER_DEGREE, make_profile

PROFILE = [100.0, 120.0, 110.0, 150.0, 140.0]


def _assert_stats_equal(left: SegmentStats, right: SegmentStats) -> None:
    assert left.distance == pytest.approx(right.distance)
    assert left.ascent == pytest.approx(right.ascent)
    assert left.descent == pytest.approx(right.descent)


def test_raw_ascent_descent() -> None:
    stats = segment_stats(make_profile(PROFILE), 0, 4)
    assert stats.ascent == pytest.approx(60.0)
    assert stats.descent == pytest.approx(20.0)
    assert stats.distance > 4 * 0.001 * METERS_PER_DEGREE


def test_empty_and_reversed_ranges_are_zero() -> None:
    points = make_profile(PROFILE)
    for index in range(len(points)):
        assert segment_stats(points, index, index) == SegmentStats()
    assert segment_stats(points, 3, 1) == SegmentStats()
    assert segment_stats([], 0, 5) == SegmentStats()


def test_out_of_range_indices_are_clamped() -> None:
    points = make_profile(PROFILE)
    _assert_stats_equal(segment_stats(points, 0, 100), segment_stats(points, 0, 4))
    _assert_stats_equal(segment_stats(points, -5, 2), segment_stats(points, 0, 2))


@pytest.mark.parametrize("split", [0, 1, 2, 3, 4])
def test_stats_are_additive_over_a_split(split: int) -> None:
    points = make_profile(PROFILE)
    whole = segment_stats(points, 0, 4)
    combined = segment_stats(points, 0, split) + segment_stats(points, split, 4)
    _assert_stats_equal(combined, whole)


def test_ascent_descent_never_negative() -> None:
    points = make_profile([500, 300, 100, 50, 10])
    stats = segment_stats(points, 0, 4)
    assert stats.ascent == 0.0
    assert stats.descent == pytest.approx(490.0)


def test_cumulative_distance_tags_every_point() -> None:
    points = make_profile(PROFILE)
    tagged = with_cumulative_distance(points)
    assert tagged[0].cumulative_distance == 0.0
    assert tagged[-1].cumulative_distance == pytest.approx(track_distance(points))
    distances = [p.cumulative_distance for p in tagged]
    assert distances == sorted(distances)
    assert points[0].cumulative_distance is None
    assert with_cumulative_distance([]) == []


def test_route_stats_summary() -> None:
    points = make_profile(PROFILE)
    stats = route_stats(points)
    assert stats.point_count == 5
    assert stats.total_distance == pytest.approx(track_distance_2d(points))
    assert stats.total_distance == pytest.approx(4 * 0.001 * METERS_PER_DEGREE)
    assert stats.total_ascent == pytest.approx(60.0)
    assert stats.total_descent == pytest.approx(20.0)
    assert (stats.min_elevation, stats.max_elevation) == (100.0, 150.0)


def test_route_stats_empty() -> None:
    stats = route_stats([])
    assert stats.point_count == 0
    assert stats.total_distance == 0.0
