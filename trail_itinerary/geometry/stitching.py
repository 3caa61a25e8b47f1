"""Greedy nearest-endpoint stitching of disjoint track segments."""

from __future__ import annotations

import logging
from typing import List, Sequence

from ..models import (
    NamedSegment,
    RouteGap,
    StitchedRoute,
    StitchedSegment,
    TrackPoint,
    Waypoint,
)
from .distance import point_distance_2d

_LOG = logging.getLogger(__name__)


def stitch_segments(
    segments: Sequence[NamedSegment],
    gap_threshold_m: float = 100.0,
) -> StitchedRoute:
    """Join ``segments`` into one route, reversing segments where that fits better.

    Starting from the first segment, the remaining segment whose start (or end,
    when reversed) is horizontally closest to the route's current last point
    is appended next. Ties go to the earlier segment, and to the forward
    orientation. Junctions wider than ``gap_threshold_m`` are reported as
    :class:`RouteGap` entries; they never stop stitching.

    The ordering is greedy, not globally optimal.
    """

    if not segments:
        return StitchedRoute()

    first = segments[0]
    route: List[TrackPoint] = list(first.points)
    placed: List[StitchedSegment] = [StitchedSegment(first.name, 0)]
    gaps: List[RouteGap] = []
    remaining = list(range(1, len(segments)))

    while remaining:
        position, reverse = _best_candidate(route, segments, remaining)
        source_index = remaining.pop(position)
        candidate = segments[source_index]
        points = list(candidate.points)
        if reverse:
            points.reverse()

        if route and points:
            junction = point_distance_2d(route[-1], points[0])
            if junction > gap_threshold_m:
                gap = RouteGap(
                    after_segment_index=len(placed) - 1,
                    distance_m=junction,
                    from_point=route[-1],
                    to_point=points[0],
                    from_name=placed[-1].name,
                    to_name=candidate.name,
                )
                gaps.append(gap)
                _LOG.debug(
                    "Gap of %.0f m between '%s' and '%s'",
                    junction,
                    gap.from_name,
                    gap.to_name,
                )

        route.extend(points)
        placed.append(StitchedSegment(candidate.name, source_index, reverse))

    return StitchedRoute(points=tuple(route), segments=tuple(placed), gaps=tuple(gaps))


def _best_candidate(
    route: Sequence[TrackPoint],
    segments: Sequence[NamedSegment],
    remaining: Sequence[int],
) -> tuple[int, bool]:
    """Return (position in ``remaining``, reverse flag) of the closest segment."""

    if not route:
        return 0, False

    anchor = route[-1]
    best_position = 0
    best_reverse = False
    best_distance = float("inf")
    for position, source_index in enumerate(remaining):
        points = segments[source_index].points
        if not points:
            continue
        forward = point_distance_2d(anchor, points[0])
        if forward < best_distance:
            best_distance = forward
            best_position = position
            best_reverse = False
        backward = point_distance_2d(anchor, points[-1])
        if backward < best_distance:
            best_distance = backward
            best_position = position
            best_reverse = True
    return best_position, best_reverse


def remove_duplicate_waypoints(waypoints: Sequence[Waypoint]) -> List[Waypoint]:
    """Keep the first of any waypoints sharing latitude, longitude and name."""

    seen: set[tuple[float, float, str]] = set()
    unique: List[Waypoint] = []
    for waypoint in waypoints:
        key = (waypoint.latitude, waypoint.longitude, waypoint.name)
        if key in seen:
            continue
        seen.add(key)
        unique.append(waypoint)
    return unique


__all__ = ["remove_duplicate_waypoints", "stitch_segments"]
