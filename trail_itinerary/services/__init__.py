"""Service layer package.

Exports high-level services consumed by orchestration / presentation layers.
"""

from .itinerary_service import ItineraryService, ItineraryServiceConfig, TrailReport

__all__ = ["ItineraryService", "ItineraryServiceConfig", "TrailReport"]
