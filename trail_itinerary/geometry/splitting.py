"""Split long tracks into fixed-size chunks with their nearby waypoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..config import SPLIT_MAX_POINTS, SPLIT_WAYPOINT_MAX_DISTANCE_M
from ..models import TrackPoint, Waypoint
from .distance import find_close_waypoints


@dataclass(frozen=True, slots=True)
class TrackChunk:
    name: str
    points: Tuple[TrackPoint, ...]
    waypoints: Tuple[Waypoint, ...]


def split_track(
    name: str,
    points: Sequence[TrackPoint],
    waypoints: Sequence[Waypoint],
    max_points: int = SPLIT_MAX_POINTS,
    waypoint_max_distance_m: float = SPLIT_WAYPOINT_MAX_DISTANCE_M,
) -> List[TrackChunk]:
    """Cut ``points`` into chunks of at most ``max_points`` points.

    Each chunk carries the waypoints lying within ``waypoint_max_distance_m``
    of any of its points. Chunk names get a 1-based suffix only when the track
    actually had to be split.
    """

    if max_points <= 0:
        raise ValueError("max_points must be positive")
    needs_splitting = len(points) > max_points
    chunks: List[TrackChunk] = []
    for chunk_index, start in enumerate(range(0, len(points), max_points)):
        chunk_points = tuple(points[start : start + max_points])
        chunk_name = f"{name} {chunk_index + 1}" if needs_splitting else name
        chunks.append(
            TrackChunk(
                name=chunk_name,
                points=chunk_points,
                waypoints=tuple(
                    find_close_waypoints(
                        chunk_points, waypoints, waypoint_max_distance_m
                    )
                ),
            )
        )
    return chunks


__all__ = ["TrackChunk", "split_track"]
