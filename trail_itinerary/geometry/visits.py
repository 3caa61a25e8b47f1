"""Waypoint visit detection along an ordered track.

Each waypoint runs a two-state machine while the track is scanned in order:

* *outside*: not near the track. A point within ``max_distance_m`` starts
  tracking at that index.
* *tracking*: near the track, remembering the closest approach seen. Closer
  points replace the best; a point beyond the exit threshold closes the
  window and emits one :class:`VisitRecord` at the best index.

Windows still open when the track ends are emitted as well. A waypoint can
therefore be visited several times on loops and out-and-back sections.

The exit threshold equals the entry threshold unless ``exit_multiplier`` is
given, in which case it is ``max_distance_m * exit_multiplier``. The wider
exit band keeps tracks that wobble around the boundary from producing a
burst of visits.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Dict, List, Optional, Sequence

from ..models import TrackPoint, VisitRecord, Waypoint
from .distance import coordinate_arrays, distances_to_point

_LOG = logging.getLogger(__name__)


@dataclass(slots=True)
class _Tracking:
    """State of a waypoint currently inside its proximity window."""

    best_distance: float
    best_index: int


def find_waypoint_visits(
    waypoints: Sequence[Waypoint],
    track: Sequence[TrackPoint],
    max_distance_m: float,
    exit_multiplier: Optional[float] = None,
) -> List[VisitRecord]:
    """Return every visit of every waypoint, ordered by track index."""

    if not track or not waypoints:
        return []

    exit_distance_m = max_distance_m
    if exit_multiplier is not None:
        exit_distance_m = max_distance_m * exit_multiplier

    lats, lons, eles = coordinate_arrays(track)
    # Absent key = outside; present = tracking.
    active: Dict[int, _Tracking] = {}
    found: List[tuple[int, int, VisitRecord]] = []

    for wp_index, waypoint in enumerate(waypoints):
        distances = distances_to_point(waypoint, lats, lons, eles)
        for track_index, raw in enumerate(distances):
            distance = float(raw)
            state = active.get(wp_index)
            if state is None:
                if distance <= max_distance_m:
                    active[wp_index] = _Tracking(distance, track_index)
                continue
            if distance <= exit_distance_m:
                if distance < state.best_distance:
                    state.best_distance = distance
                    state.best_index = track_index
                continue
            found.append(_record(wp_index, waypoint, state))
            del active[wp_index]

        state = active.pop(wp_index, None)
        if state is not None:
            found.append(_record(wp_index, waypoint, state))

    found.sort(key=lambda item: (item[0], item[1]))
    visits = [visit for _, _, visit in found]
    _LOG.debug(
        "Detected %d visits for %d waypoints over %d track points",
        len(visits),
        len(waypoints),
        len(track),
    )
    return visits


def _record(
    wp_index: int, waypoint: Waypoint, state: _Tracking
) -> tuple[int, int, VisitRecord]:
    visit = VisitRecord(
        waypoint=waypoint,
        track_index=state.best_index,
        distance_from_track=state.best_distance,
    )
    return state.best_index, wp_index, visit


__all__ = ["find_waypoint_visits"]
