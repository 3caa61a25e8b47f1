"""Trail itinerary toolkit package."""

from .daylight import DaylightPlan, create_daylight_plan, daylight_plan_frame
from .datasheet import Itinerary, build_itinerary, itinerary_frames
from .errors import (
    DaylightUnavailableError,
    InvalidCoordinateError,
    ItineraryError,
    NoTrackDataError,
    NoVisitsError,
    NoWaypointsError,
    PointLimitExceededError,
)
from .models import (
    NamedSegment,
    ProcessingOptions,
    RouteGap,
    SegmentStats,
    StitchedRoute,
    TrackPoint,
    VisitRecord,
    Waypoint,
)
from .services import ItineraryService, ItineraryServiceConfig, TrailReport

__all__ = [
    "DaylightPlan",
    "DaylightUnavailableError",
    "InvalidCoordinateError",
    "Itinerary",
    "ItineraryError",
    "ItineraryService",
    "ItineraryServiceConfig",
    "NamedSegment",
    "NoTrackDataError",
    "NoVisitsError",
    "NoWaypointsError",
    "PointLimitExceededError",
    "ProcessingOptions",
    "RouteGap",
    "SegmentStats",
    "StitchedRoute",
    "TrackPoint",
    "TrailReport",
    "VisitRecord",
    "Waypoint",
    "build_itinerary",
    "create_daylight_plan",
    "daylight_plan_frame",
    "itinerary_frames",
]
