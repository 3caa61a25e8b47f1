"""GPS geometry processing core.

Distance primitives, simplification, elevation filtering, waypoint visit
detection, segment statistics and route stitching. Everything here is a pure
function over in-memory point sequences.
"""

from .distance import (
    EARTH_RADIUS_M,
    distance_2d,
    distance_3d,
    find_close_waypoints,
    is_waypoint_near_points,
    waypoint_distance,
)
from .elevation import (
    detect_spikes,
    elevation_gain_loss,
    remove_elevation_spikes,
    smooth_elevation,
)
from .simplify import perpendicular_distance, simplify
from .stats import (
    RouteStats,
    route_stats,
    segment_stats,
    track_distance,
    with_cumulative_distance,
)
from .stitching import stitch_segments
from .visits import find_waypoint_visits

__all__ = [
    "EARTH_RADIUS_M",
    "RouteStats",
    "detect_spikes",
    "distance_2d",
    "distance_3d",
    "elevation_gain_loss",
    "find_close_waypoints",
    "find_waypoint_visits",
    "is_waypoint_near_points",
    "perpendicular_distance",
    "remove_elevation_spikes",
    "route_stats",
    "segment_stats",
    "simplify",
    "smooth_elevation",
    "stitch_segments",
    "track_distance",
    "waypoint_distance",
    "with_cumulative_distance",
]
