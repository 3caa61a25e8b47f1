"""Track preparation for display: trim, filter, simplify and round.

``prepare_track`` chains the elevation filter and the simplifier in the
order they must run (spikes before smoothing, both before simplification)
and reports how much the cleaned track drifted from the original.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import List, Optional, Sequence

import numpy as np
from polyline import decode as polyline_decode
from polyline import encode as polyline_encode

from ..config import DISTANCE_CHANGE_WARNING_RATIO, ELEVATION_CHANGE_WARNING_RATIO
from ..models import ProcessingOptions, TrackPoint
from .distance import step_distances_3d
from .elevation import elevation_gain_loss, remove_elevation_spikes, smooth_elevation
from .simplify import simplify
from .stats import track_distance, with_cumulative_distance

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TrackSummary:
    """Headline figures for one version of a track."""

    point_count: int
    distance_m: float
    elevation_gain_m: float
    elevation_loss_m: float


@dataclass(slots=True)
class PreparedTrack:
    """Cleaned display track plus before/after summaries."""

    points: List[TrackPoint]
    original: TrackSummary
    optimized: TrackSummary
    warnings: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.warnings


def summarize_track(
    points: Sequence[TrackPoint], noise_threshold_m: float = 3.0
) -> TrackSummary:
    gain, loss = elevation_gain_loss(points, noise_threshold_m)
    return TrackSummary(
        point_count=len(points),
        distance_m=track_distance(points),
        elevation_gain_m=gain,
        elevation_loss_m=loss,
    )


def truncate_track(
    points: Sequence[TrackPoint], start_m: float, end_m: float
) -> List[TrackPoint]:
    """Drop roughly ``start_m``/``end_m`` metres from either end of a track.

    A trim longer than the whole track leaves that end untouched. When the
    end trim would reach back past the trimmed start it is skipped, so the
    hidden start never reappears. At least two points always survive.
    """

    if len(points) < 2:
        return list(points)
    cumulative = np.concatenate(([0.0], np.cumsum(step_distances_3d(points))))
    start_index = 0
    end_index = len(points) - 1
    if start_m > 0:
        index = int(np.searchsorted(cumulative, start_m, side="left"))
        if index < len(points):
            start_index = index
    if end_m > 0:
        limit = cumulative[-1] - end_m
        index = int(np.searchsorted(cumulative, limit, side="right")) - 1
        if index > start_index:
            end_index = index

    if end_index - start_index < 1:
        return list(points[-2:])
    return list(points[start_index : end_index + 1])


def round_coordinates(points: Sequence[TrackPoint], precision: int) -> List[TrackPoint]:
    """Round lat/lon to ``precision`` decimals and elevation to 0.1 m."""

    return [
        replace(
            point,
            latitude=round(point.latitude, precision),
            longitude=round(point.longitude, precision),
            elevation=round(point.elevation, 1),
        )
        for point in points
    ]


def prepare_track(
    points: Sequence[TrackPoint], options: Optional[ProcessingOptions] = None
) -> PreparedTrack:
    """Return the simplified display version of ``points`` with diagnostics."""

    opts = options or ProcessingOptions()
    noise = opts.elevation_noise_threshold_m
    original = summarize_track(points, noise)

    working: List[TrackPoint] = list(points)
    if opts.truncate_start_m > 0 or opts.truncate_end_m > 0:
        working = truncate_track(working, opts.truncate_start_m, opts.truncate_end_m)
    if opts.elevation_smoothing:
        working = remove_elevation_spikes(working, opts.spike_threshold_m)
        if opts.smoothing_window > 1:
            working = smooth_elevation(working, opts.smoothing_window)
    working = simplify(working, opts.simplification_tolerance_m)
    working = round_coordinates(working, opts.coordinate_precision)
    working = with_cumulative_distance(working)

    optimized = summarize_track(working, noise)
    warnings = _drift_warnings(original, optimized)
    for message in warnings:
        _LOG.warning("Track preparation: %s", message)
    _LOG.debug(
        "Prepared track: %d -> %d points", original.point_count, optimized.point_count
    )
    return PreparedTrack(
        points=working, original=original, optimized=optimized, warnings=warnings
    )


def encode_track(points: Sequence[TrackPoint], precision: int = 5) -> str:
    """Encode lat/lon as a Google encoded polyline for map consumers."""

    if not points:
        return ""
    return polyline_encode(
        [(p.latitude, p.longitude) for p in points], precision=precision
    )


def decode_track(encoded: str, precision: int = 5) -> List[TrackPoint]:
    """Decode an encoded polyline into track points.

    Polylines carry no elevation, so every point is placed at 0 m.
    """

    if not encoded:
        return []
    try:
        decoded = polyline_decode(encoded, precision=precision)
    except (ValueError, TypeError, IndexError) as exc:
        raise ValueError("Unable to decode polyline") from exc
    return [TrackPoint(float(lat), float(lon)) for lat, lon in decoded]


def _drift_warnings(original: TrackSummary, optimized: TrackSummary) -> List[str]:
    warnings: List[str] = []
    if original.distance_m > 0:
        change = abs(optimized.distance_m - original.distance_m) / original.distance_m
        if change > DISTANCE_CHANGE_WARNING_RATIO:
            warnings.append(
                f"Distance changed by {change * 100:.1f}% "
                f"(threshold: {DISTANCE_CHANGE_WARNING_RATIO * 100:g}%)"
            )
    if original.elevation_gain_m > 0:
        change = (
            abs(optimized.elevation_gain_m - original.elevation_gain_m)
            / original.elevation_gain_m
        )
        if change > ELEVATION_CHANGE_WARNING_RATIO:
            warnings.append(
                f"Elevation gain changed by {change * 100:.1f}% "
                f"(threshold: {ELEVATION_CHANGE_WARNING_RATIO * 100:g}%)"
            )
    if optimized.point_count < 2:
        warnings.append("Less than 2 points after optimization")
    return warnings


__all__ = [
    "PreparedTrack",
    "TrackSummary",
    "decode_track",
    "encode_track",
    "prepare_track",
    "round_coordinates",
    "summarize_track",
    "truncate_track",
]
