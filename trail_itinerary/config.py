"""Central configuration for the trail itinerary toolkit.

All values are constants imported by the rest of the package. Each one can be
overridden through an environment variable of the same name (optionally via a
local `.env`). The geometry core never reads these at call time; they only
seed the defaults of :class:`trail_itinerary.models.ProcessingOptions` and of
the splitting and comparison helpers.
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _env_list(key: str, default: list[str]) -> list[str]:
    value = os.getenv(key)
    if value is None:
        return list(default)
    return [item.strip().lower() for item in value.split(",") if item.strip()]


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except ImportError:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Simplification
# ---------------------------------------------------------------------------
# Maximum perpendicular deviation (metres) tolerated by Douglas-Peucker.
SIMPLIFICATION_TOLERANCE_M = _env_float("SIMPLIFICATION_TOLERANCE_M", 10.0)

# Decimal places kept for latitude/longitude (6 ~ 0.11 m).
COORDINATE_PRECISION = _env_int("COORDINATE_PRECISION", 6)


# ---------------------------------------------------------------------------
# Elevation filtering
# ---------------------------------------------------------------------------
# Run spike removal and moving-average smoothing before simplification.
ELEVATION_SMOOTHING_ENABLED = _env_bool("ELEVATION_SMOOTHING_ENABLED", True)

# A point deviating from both neighbours by more than this (same direction)
# is treated as a spike.
SPIKE_THRESHOLD_M = _env_float("SPIKE_THRESHOLD_M", 50.0)

# Number of points in the centred moving-average window.
SMOOTHING_WINDOW = _env_int("SMOOTHING_WINDOW", 7)

# Elevation steps smaller than this are ignored when reporting track
# gain/loss in optimisation summaries.
ELEVATION_NOISE_THRESHOLD_M = _env_float("ELEVATION_NOISE_THRESHOLD_M", 3.0)


# ---------------------------------------------------------------------------
# Privacy trimming
# ---------------------------------------------------------------------------
# Metres removed from the start/end of a track (0 disables trimming).
TRUNCATE_START_M = _env_float("TRUNCATE_START_M", 0.0)
TRUNCATE_END_M = _env_float("TRUNCATE_END_M", 0.0)


# ---------------------------------------------------------------------------
# Optimisation warnings
# ---------------------------------------------------------------------------
# Warn when simplification changes total distance by more than this fraction.
DISTANCE_CHANGE_WARNING_RATIO = _env_float("DISTANCE_CHANGE_WARNING_RATIO", 0.05)

# Warn when filtering changes total elevation gain by more than this fraction.
ELEVATION_CHANGE_WARNING_RATIO = _env_float("ELEVATION_CHANGE_WARNING_RATIO", 0.15)

# Largest track accepted by the service layer (0 = unlimited).
MAX_POINT_COUNT = _env_int("MAX_POINT_COUNT", 0)


# ---------------------------------------------------------------------------
# Waypoint visits
# ---------------------------------------------------------------------------
# A waypoint counts as visited while the track is within this 3D distance.
WAYPOINT_MAX_DISTANCE_M = _env_float("WAYPOINT_MAX_DISTANCE_M", 200.0)

# Use a wider exit threshold than entry threshold to suppress flapping when a
# track oscillates near the proximity boundary.
VISIT_HYSTERESIS_ENABLED = _env_bool("VISIT_HYSTERESIS_ENABLED", False)
VISIT_EXIT_MULTIPLIER = _env_float("VISIT_EXIT_MULTIPLIER", 3.0)


# ---------------------------------------------------------------------------
# Route stitching
# ---------------------------------------------------------------------------
# Junctions wider than this between stitched segments are reported as gaps.
GAP_WARNING_THRESHOLD_M = _env_float("GAP_WARNING_THRESHOLD_M", 100.0)
# Drop waypoints repeated (same position and name) across merged inputs.
REMOVE_DUPLICATE_WAYPOINTS = _env_bool("REMOVE_DUPLICATE_WAYPOINTS", True)


# ---------------------------------------------------------------------------
# Itinerary datasheet
# ---------------------------------------------------------------------------
_resupply_defaults = [
    "grocer",
    "market",
    "foodland",
    "iga",
    "wool",
    "coles",
    "general",
    "servo",
]
# Case-insensitive substrings marking a waypoint as a resupply stop.
RESUPPLY_KEYWORDS = _env_list("RESUPPLY_KEYWORDS", _resupply_defaults)

INCLUDE_START_AS_RESUPPLY = _env_bool("INCLUDE_START_AS_RESUPPLY", False)
INCLUDE_END_AS_RESUPPLY = _env_bool("INCLUDE_END_AS_RESUPPLY", True)


# ---------------------------------------------------------------------------
# Track splitting
# ---------------------------------------------------------------------------
SPLIT_MAX_POINTS = _env_int("SPLIT_MAX_POINTS", 5000)
SPLIT_WAYPOINT_MAX_DISTANCE_M = _env_float("SPLIT_WAYPOINT_MAX_DISTANCE_M", 5000.0)


# ---------------------------------------------------------------------------
# Route comparison
# ---------------------------------------------------------------------------
# Points closer than this to the other route count as shared path.
COMPARISON_PROXIMITY_M = _env_float("COMPARISON_PROXIMITY_M", 100.0)

# Shared / unique stretches shorter than this are not reported.
COMPARISON_MIN_SEGMENT_M = _env_float("COMPARISON_MIN_SEGMENT_M", 500.0)


# ---------------------------------------------------------------------------
# Daylight planning
# ---------------------------------------------------------------------------
# Assumed walking pace when checking a day's distance against daylight.
HIKING_SPEED_KMH = _env_float("HIKING_SPEED_KMH", 4.0)

# Minutes after sunrise before walking starts / before sunset when it stops.
DAYLIGHT_START_OFFSET_MIN = _env_float("DAYLIGHT_START_OFFSET_MIN", 30.0)
DAYLIGHT_END_OFFSET_MIN = _env_float("DAYLIGHT_END_OFFSET_MIN", 30.0)

# Route samples per day when tabulating daylight along a route.
DAYLIGHT_SAMPLES_PER_DAY = _env_int("DAYLIGHT_SAMPLES_PER_DAY", 10)
