"""Itinerary datasheet aggregation.

Pure transformation: given named tracks and waypoints it finds the waypoint
visits along each track, accumulates leg and running distance/ascent/descent
between visits and selects resupply stops. ``itinerary_frames`` turns the
result into DataFrames with unit-labelled columns ready for a writer; the
text encoding itself (CSV, spreadsheet) is left to the caller.

Each track is processed independently with its own running totals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from .errors import NoTrackDataError, NoVisitsError, NoWaypointsError
from .geometry.stats import segment_stats
from .geometry.visits import find_waypoint_visits
from .models import NamedSegment, ProcessingOptions, TrackPoint, Waypoint
from .utils import format_distance, format_elevation, has_keyword

_LOG = logging.getLogger(__name__)

LOCATION_COL = "Location"
NOTES_COL = "Notes"


@dataclass(frozen=True, slots=True)
class ItineraryRow:
    location: str
    track_index: int
    elevation: float
    ascent: float
    descent: float
    distance_km: float
    total_distance_km: float
    total_ascent: float
    total_descent: float
    notes: str = ""


@dataclass(frozen=True, slots=True)
class ResupplyRow:
    location: str
    notes: str
    total_distance_km: float
    distance_km: float
    ascent: float
    descent: float
    total_ascent: float
    total_descent: float


@dataclass(slots=True)
class TrackItinerary:
    name: str
    rows: List[ItineraryRow] = field(default_factory=list)
    resupply: List[ResupplyRow] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ItineraryTotals:
    total_points: int
    resupply_count: int
    total_distance_km: float
    total_ascent: float
    total_descent: float


@dataclass(slots=True)
class Itinerary:
    tracks: List[TrackItinerary]
    totals: ItineraryTotals


def build_track_itinerary(
    points: Sequence[TrackPoint],
    waypoints: Sequence[Waypoint],
    options: Optional[ProcessingOptions] = None,
    name: str = "",
) -> TrackItinerary:
    """Return visit rows and resupply rows for a single track.

    Leg figures are measured from the previous visit (or the track start) to
    the current visit's track index. Elevation is taken from the track point
    so it agrees with the ascent/descent figures.
    """

    opts = options or ProcessingOptions()
    result = TrackItinerary(name=name)
    if not points:
        return result

    visits = find_waypoint_visits(
        waypoints, points, opts.waypoint_max_distance_m, opts.exit_multiplier
    )
    running_distance = 0.0
    running_ascent = 0.0
    running_descent = 0.0
    previous_index = 0
    for position, visit in enumerate(visits):
        leg = segment_stats(points, previous_index, visit.track_index)
        leg_km = leg.distance / 1000.0
        running_distance += leg_km
        running_ascent += leg.ascent
        running_descent += leg.descent
        result.rows.append(
            ItineraryRow(
                location=visit.waypoint.name or f"Waypoint {position + 1}",
                track_index=visit.track_index,
                elevation=points[visit.track_index].elevation,
                ascent=leg.ascent,
                descent=leg.descent,
                distance_km=leg_km,
                total_distance_km=round(running_distance, 3),
                total_ascent=round(running_ascent, 1),
                total_descent=round(running_descent, 1),
                notes=visit.waypoint.description or "",
            )
        )
        previous_index = visit.track_index

    result.resupply = _resupply_rows(result.rows, opts)
    return result


def build_itinerary(
    tracks: Sequence[NamedSegment],
    waypoints: Sequence[Waypoint],
    options: Optional[ProcessingOptions] = None,
) -> Itinerary:
    """Build the itinerary for every non-empty track.

    Raises:
        NoTrackDataError: No track carries any points.
        NoWaypointsError: ``waypoints`` is empty.
        NoVisitsError: No waypoint is near any track.
    """

    opts = options or ProcessingOptions()
    if not tracks:
        raise NoTrackDataError(
            "No track or route data. Track points are required to calculate distances."
        )
    if not waypoints:
        raise NoWaypointsError(
            "No waypoints. Waypoints are required to generate a datasheet."
        )
    named: List[Tuple[str, Sequence[TrackPoint]]] = []
    for track in tracks:
        if track.points:
            named.append((track.name or f"Track {len(named) + 1}", track.points))
    if not named:
        raise NoTrackDataError(
            "Tracks contain no points. Track points are required to calculate distances."
        )

    results: List[TrackItinerary] = []
    for name, points in named:
        itinerary = build_track_itinerary(points, waypoints, opts, name=name)
        if itinerary.rows:
            results.append(itinerary)
        else:
            _LOG.info(
                "No waypoints within %.0f m of track '%s'",
                opts.waypoint_max_distance_m,
                name,
            )
    if not results:
        raise NoVisitsError(
            "No waypoints found on any track/route. Ensure waypoints are within "
            f"{opts.waypoint_max_distance_m:g}m of the tracks."
        )

    all_rows = [row for track in results for row in track.rows]
    totals = ItineraryTotals(
        total_points=len(all_rows),
        resupply_count=sum(len(track.resupply) for track in results),
        total_distance_km=round(sum(row.distance_km for row in all_rows), 2),
        total_ascent=float(round(sum(row.ascent for row in all_rows))),
        total_descent=float(round(sum(row.descent for row in all_rows))),
    )
    _LOG.info(
        "Built itinerary for %d tracks: %d stops, %d resupply, %.2f km",
        len(results),
        totals.total_points,
        totals.resupply_count,
        totals.total_distance_km,
    )
    return Itinerary(tracks=results, totals=totals)


def itinerary_frames(
    itinerary: Itinerary,
    distance_unit: str = "km",
    elevation_unit: str = "m",
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Return (plan, resupply) DataFrames in the requested units.

    With more than one track, each track's rows are preceded by a header row
    carrying only the track name in the location column.
    """

    d, e = distance_unit, elevation_unit
    plan_columns = [
        LOCATION_COL,
        f"Elevation ({e})",
        f"Ascent ({e})",
        f"Descent ({e})",
        f"Distance ({d})",
        f"Total Distance ({d})",
        f"Total Ascent ({e})",
        f"Total Descent ({e})",
        NOTES_COL,
    ]
    resupply_columns = [
        LOCATION_COL,
        NOTES_COL,
        f"Total Distance ({d})",
        f"Distance ({d})",
        f"Ascent ({e})",
        f"Descent ({e})",
        f"Total Ascent ({e})",
        f"Total Descent ({e})",
    ]
    with_headers = len(itinerary.tracks) > 1

    plan_rows: List[dict] = []
    resupply_rows: List[dict] = []
    for track in itinerary.tracks:
        if with_headers:
            plan_rows.append({LOCATION_COL: track.name})
        for row in track.rows:
            plan_rows.append(
                dict(
                    zip(
                        plan_columns,
                        [
                            row.location,
                            format_elevation(row.elevation, e),
                            format_elevation(row.ascent, e),
                            format_elevation(row.descent, e),
                            format_distance(row.distance_km, d),
                            format_distance(row.total_distance_km, d),
                            format_elevation(row.total_ascent, e),
                            format_elevation(row.total_descent, e),
                            row.notes,
                        ],
                    )
                )
            )
        if not track.resupply:
            continue
        if with_headers:
            resupply_rows.append({LOCATION_COL: track.name})
        for stop in track.resupply:
            resupply_rows.append(
                dict(
                    zip(
                        resupply_columns,
                        [
                            stop.location,
                            stop.notes,
                            format_distance(stop.total_distance_km, d),
                            format_distance(stop.distance_km, d),
                            format_elevation(stop.ascent, e),
                            format_elevation(stop.descent, e),
                            format_elevation(stop.total_ascent, e),
                            format_elevation(stop.total_descent, e),
                        ],
                    )
                )
            )

    plan = pd.DataFrame(plan_rows, columns=plan_columns)
    resupply = pd.DataFrame(resupply_rows, columns=resupply_columns)
    return plan, resupply


def _resupply_rows(
    rows: Sequence[ItineraryRow], opts: ProcessingOptions
) -> List[ResupplyRow]:
    selected: List[ResupplyRow] = []
    prev_distance = 0.0
    prev_ascent = 0.0
    prev_descent = 0.0
    last = len(rows) - 1
    for position, row in enumerate(rows):
        is_resupply = has_keyword(row.location, opts.resupply_keywords) or has_keyword(
            row.notes, opts.resupply_keywords
        )
        is_start = opts.include_start_as_resupply and position == 0
        is_end = opts.include_end_as_resupply and position == last
        if not (is_resupply or is_start or is_end):
            continue
        selected.append(
            ResupplyRow(
                location=row.location,
                notes=row.notes,
                total_distance_km=row.total_distance_km,
                distance_km=round(row.total_distance_km - prev_distance, 3),
                ascent=round(row.total_ascent - prev_ascent, 1),
                descent=round(row.total_descent - prev_descent, 1),
                total_ascent=row.total_ascent,
                total_descent=row.total_descent,
            )
        )
        prev_distance = row.total_distance_km
        prev_ascent = row.total_ascent
        prev_descent = row.total_descent
    return selected


__all__ = [
    "Itinerary",
    "ItineraryRow",
    "ItineraryTotals",
    "ResupplyRow",
    "TrackItinerary",
    "build_itinerary",
    "build_track_itinerary",
    "itinerary_frames",
]
