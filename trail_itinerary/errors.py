"""Central error types used across the application.

The geometry core never raises for degenerate input; these errors belong to
the validation and reporting layers that sit around it.
"""

from __future__ import annotations


class ItineraryError(RuntimeError):
    """Base error for itinerary processing failures."""


class InvalidCoordinateError(ItineraryError, ValueError):
    """Raised when a point carries non-finite or out-of-range coordinates."""


class PointLimitExceededError(ItineraryError):
    """Raised when a track exceeds the configured point-count ceiling."""


class NoTrackDataError(ItineraryError):
    """Raised when there are no track points to measure distances against."""


class NoWaypointsError(ItineraryError):
    """Raised when a datasheet is requested without any waypoints."""


class NoVisitsError(ItineraryError):
    """Raised when no waypoint lies within proximity of any track."""


class DaylightUnavailableError(ItineraryError):
    """Raised when the sun never rises or never sets at a location and date."""


__all__ = [
    "ItineraryError",
    "InvalidCoordinateError",
    "PointLimitExceededError",
    "NoTrackDataError",
    "NoWaypointsError",
    "NoVisitsError",
    "DaylightUnavailableError",
]
