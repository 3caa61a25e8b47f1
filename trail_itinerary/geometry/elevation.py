"""Elevation noise filtering.

Two independent passes, both returning new point lists of the same length
with only ``elevation`` changed:

* spike removal replaces isolated outliers by interpolating their neighbours;
* smoothing applies a centred moving average clamped at the track ends.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence, Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..models import TrackPoint
from .distance import MetricArray


def detect_spikes(elevations: ArrayLike, threshold_m: float) -> NDArray[np.bool_]:
    """Return a mask of interior points that are local outliers.

    A point is a spike when it differs from both neighbours by more than
    ``threshold_m`` in the same direction. Steady climbs and descents differ
    from only one neighbour in that way and are left alone. Endpoints are
    never flagged.
    """

    values = np.asarray(elevations, dtype=float)
    mask = np.zeros(values.shape[0], dtype=bool)
    if values.shape[0] < 3:
        return mask
    current = values[1:-1]
    from_prev = current - values[:-2]
    from_next = current - values[2:]
    same_direction = np.sign(from_prev) == np.sign(from_next)
    large = (np.abs(from_prev) > threshold_m) & (np.abs(from_next) > threshold_m)
    mask[1:-1] = same_direction & large
    return mask


def remove_elevation_spikes(
    points: Sequence[TrackPoint], threshold_m: float
) -> List[TrackPoint]:
    """Replace spike elevations by linear interpolation between valid points."""

    if len(points) < 3:
        return list(points)
    elevations = np.fromiter(
        (p.elevation for p in points), dtype=float, count=len(points)
    )
    spikes = detect_spikes(elevations, threshold_m)
    if not spikes.any():
        return list(points)

    indices = np.arange(len(points))
    valid = ~spikes
    # np.interp holds the nearest valid value flat beyond either end.
    repaired = np.interp(indices[spikes], indices[valid], elevations[valid])
    result = list(points)
    for index, elevation in zip(indices[spikes], repaired):
        result[index] = replace(points[index], elevation=float(elevation))
    return result


def smooth_elevation(points: Sequence[TrackPoint], window_size: int) -> List[TrackPoint]:
    """Apply a centred moving average of ``window_size`` points."""

    count = len(points)
    if count < window_size or window_size <= 1:
        return list(points)
    elevations = np.fromiter((p.elevation for p in points), dtype=float, count=count)
    smoothed = _moving_average(elevations, window_size)
    return [
        replace(point, elevation=float(value))
        for point, value in zip(points, smoothed)
    ]


def elevation_gain_loss(
    points: Sequence[TrackPoint], threshold_m: float = 3.0
) -> Tuple[float, float]:
    """Return total (gain, loss), ignoring steps smaller than ``threshold_m``."""

    if len(points) < 2:
        return 0.0, 0.0
    elevations = np.fromiter(
        (p.elevation for p in points), dtype=float, count=len(points)
    )
    steps = np.diff(elevations)
    counted = steps[np.abs(steps) >= threshold_m]
    gain = float(np.sum(counted[counted > 0]))
    loss = float(-np.sum(counted[counted < 0]))
    return gain, loss


def _moving_average(values: MetricArray, window_size: int) -> MetricArray:
    half = window_size // 2
    count = values.shape[0]
    cumulative = np.concatenate(([0.0], np.cumsum(values)))
    indices = np.arange(count)
    starts = np.maximum(indices - half, 0)
    ends = np.minimum(indices + half, count - 1) + 1
    return (cumulative[ends] - cumulative[starts]) / (ends - starts)


__all__ = [
    "detect_spikes",
    "elevation_gain_loss",
    "remove_elevation_spikes",
    "smooth_elevation",
]
