"""Trail itinerary service (application layer).

Orchestrates the geometry core for one trail: validate the parsed input,
stitch recorded fragments into a single route, build the simplified display
track and the waypoint itinerary. Higher-level code (CLI, web handlers)
depends on this stable API rather than on the individual core functions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import List, Sequence

from ..datasheet import Itinerary, build_itinerary
from ..errors import PointLimitExceededError
from ..geometry.preprocessing import PreparedTrack, prepare_track
from ..geometry.stitching import remove_duplicate_waypoints, stitch_segments
from ..geometry.validation import validate_points, validate_waypoints
from ..models import NamedSegment, ProcessingOptions, StitchedRoute, Waypoint


@dataclass(slots=True)
class ItineraryServiceConfig:
    options: ProcessingOptions = field(default_factory=ProcessingOptions)
    logger: logging.Logger | None = None


@dataclass(slots=True)
class TrailReport:
    """Everything produced for one trail."""

    name: str
    route: StitchedRoute
    display: PreparedTrack
    itinerary: Itinerary


class ItineraryService:
    def __init__(self, config: ItineraryServiceConfig | None = None):
        self.config = config or ItineraryServiceConfig()
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)

    @property
    def options(self) -> ProcessingOptions:
        return self.config.options

    def validate(
        self, segments: Sequence[NamedSegment], waypoints: Sequence[Waypoint]
    ) -> None:
        """Reject malformed coordinates and oversized tracks before processing."""

        limit = self.options.max_point_count
        for segment in segments:
            validate_points(segment.points, label=segment.name or "track")
            if limit > 0 and len(segment.points) > limit:
                raise PointLimitExceededError(
                    f"Track '{segment.name}' has {len(segment.points)} points "
                    f"(limit {limit})"
                )
        validate_waypoints(waypoints)

    def build_route(self, segments: Sequence[NamedSegment]) -> StitchedRoute:
        route = stitch_segments(segments, self.options.gap_threshold_m)
        self._log.info(
            "Stitched %d segments into %d points (%d gaps)",
            len(segments),
            len(route.points),
            len(route.gaps),
        )
        for gap in route.gaps:
            self._log.warning(
                "Route gap of %.0f m after segment %d ('%s' -> '%s')",
                gap.distance_m,
                gap.after_segment_index,
                gap.from_name,
                gap.to_name,
            )
        return route

    def merge_waypoints(self, waypoints: Sequence[Waypoint]) -> List[Waypoint]:
        """Drop repeated waypoints when ``remove_duplicate_waypoints`` is set."""

        if not self.options.remove_duplicate_waypoints:
            return list(waypoints)
        unique = remove_duplicate_waypoints(waypoints)
        dropped = len(waypoints) - len(unique)
        if dropped:
            self._log.info("Dropped %d duplicate waypoints", dropped)
        return unique

    def process(
        self,
        name: str,
        segments: Sequence[NamedSegment],
        waypoints: Sequence[Waypoint],
    ) -> TrailReport:
        """Run the full pipeline for one trail.

        Visits are detected on the full-resolution stitched route; the
        simplified track is for display only.

        Raises:
            InvalidCoordinateError: A point or waypoint is malformed.
            PointLimitExceededError: A segment exceeds ``max_point_count``.
            NoTrackDataError, NoWaypointsError, NoVisitsError: The itinerary
                cannot be built.
        """

        self.validate(segments, waypoints)
        waypoints = self.merge_waypoints(waypoints)
        route = self.build_route(segments)
        display = prepare_track(route.points, self.options)
        self._log.info(
            "Display track for '%s': %d -> %d points (%.2f km)",
            name,
            display.original.point_count,
            display.optimized.point_count,
            display.optimized.distance_m / 1000.0,
        )
        trail = NamedSegment(name=name, points=route.points)
        itinerary = build_itinerary([trail], waypoints, self.options)
        return TrailReport(name=name, route=route, display=display, itinerary=itinerary)

    def process_many(
        self,
        trails: Sequence[tuple[str, Sequence[NamedSegment]]],
        waypoints: Sequence[Waypoint],
    ) -> List[TrailReport]:
        return [self.process(name, segments, waypoints) for name, segments in trails]


__all__ = ["ItineraryService", "ItineraryServiceConfig", "TrailReport"]
