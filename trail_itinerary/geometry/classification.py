"""Classify named tracks into main route, alternates and side trips."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import re
from typing import List, Optional, Sequence

from ..models import NamedSegment
from .stats import track_distance_2d

_LOG = logging.getLogger(__name__)

DEFAULT_ALTERNATE_PATTERNS = [r"\bAlt\b", "Alternative", "Detour", "Reroute"]
DEFAULT_SIDE_TRIP_PATTERNS = [r"^ST:", "Spur", "Side Trip"]

MAIN = "main"
ALTERNATE = "alternate"
SIDE_TRIP = "side_trip"
IGNORED = "ignored"
UNCLASSIFIED = "unclassified"


@dataclass(slots=True)
class ClassificationConfig:
    """Regex name patterns (case-insensitive) applied in priority order."""

    main_route_patterns: List[str] = field(default_factory=list)
    ignore_patterns: List[str] = field(default_factory=list)
    alternate_patterns: Optional[List[str]] = None
    side_trip_patterns: Optional[List[str]] = None
    fallback_to_longest: bool = True


@dataclass(slots=True)
class ClassifiedTrack:
    segment: NamedSegment
    kind: str
    distance_m: float

    @property
    def name(self) -> str:
        return self.segment.name


@dataclass(slots=True)
class TrackClassification:
    main: List[ClassifiedTrack] = field(default_factory=list)
    alternates: List[ClassifiedTrack] = field(default_factory=list)
    side_trips: List[ClassifiedTrack] = field(default_factory=list)
    ignored: List[ClassifiedTrack] = field(default_factory=list)
    unclassified: List[ClassifiedTrack] = field(default_factory=list)


def classify_tracks(
    tracks: Sequence[NamedSegment],
    config: Optional[ClassificationConfig] = None,
) -> TrackClassification:
    """Sort tracks by name into classification buckets.

    Priority: ignore, main, alternate, side trip, otherwise unclassified.
    When nothing matched a main pattern and ``fallback_to_longest`` is set,
    the longest unclassified track is promoted to main.
    """

    cfg = config or ClassificationConfig()
    result = TrackClassification()
    if not tracks:
        return result

    ignore = _compile(cfg.ignore_patterns)
    main = _compile(cfg.main_route_patterns)
    alternate = _compile(
        cfg.alternate_patterns
        if cfg.alternate_patterns is not None
        else DEFAULT_ALTERNATE_PATTERNS
    )
    side_trip = _compile(
        cfg.side_trip_patterns
        if cfg.side_trip_patterns is not None
        else DEFAULT_SIDE_TRIP_PATTERNS
    )

    for track in tracks:
        distance = track_distance_2d(track.points)
        if _matches(track.name, ignore):
            result.ignored.append(ClassifiedTrack(track, IGNORED, distance))
        elif _matches(track.name, main):
            result.main.append(ClassifiedTrack(track, MAIN, distance))
        elif _matches(track.name, alternate):
            result.alternates.append(ClassifiedTrack(track, ALTERNATE, distance))
        elif _matches(track.name, side_trip):
            result.side_trips.append(ClassifiedTrack(track, SIDE_TRIP, distance))
        else:
            result.unclassified.append(ClassifiedTrack(track, UNCLASSIFIED, distance))

    if not result.main and cfg.fallback_to_longest and result.unclassified:
        longest_index = 0
        for index, candidate in enumerate(result.unclassified):
            if candidate.distance_m > result.unclassified[longest_index].distance_m:
                longest_index = index
        longest = result.unclassified.pop(longest_index)
        longest.kind = MAIN
        result.main.append(longest)

    return result


def _compile(patterns: Sequence[str]) -> List[re.Pattern[str]]:
    compiled: List[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern, re.IGNORECASE))
        except re.error as exc:
            _LOG.warning("Ignoring invalid track pattern %r: %s", pattern, exc)
    return compiled


def _matches(name: str, patterns: Sequence[re.Pattern[str]]) -> bool:
    return any(pattern.search(name) for pattern in patterns)


__all__ = [
    "ALTERNATE",
    "IGNORED",
    "MAIN",
    "SIDE_TRIP",
    "UNCLASSIFIED",
    "ClassificationConfig",
    "ClassifiedTrack",
    "TrackClassification",
    "classify_tracks",
]
