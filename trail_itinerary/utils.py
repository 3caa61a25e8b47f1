"""General utility helpers shared across modules."""

from __future__ import annotations

from typing import Iterable

KM_TO_MI = 0.621371
M_TO_FT = 3.28084

DISTANCE_UNITS = ("km", "mi")
ELEVATION_UNITS = ("m", "ft")


def format_distance(km: float, unit: str = "km") -> float:
    """Convert kilometres to ``unit`` rounded to three decimals."""

    if unit not in DISTANCE_UNITS:
        raise ValueError(f"Unsupported distance unit: {unit!r}")
    value = km * KM_TO_MI if unit == "mi" else km
    return round(value, 3)


def format_elevation(meters: float, unit: str = "m") -> float:
    """Convert metres to ``unit`` rounded to one decimal."""

    if unit not in ELEVATION_UNITS:
        raise ValueError(f"Unsupported elevation unit: {unit!r}")
    value = meters * M_TO_FT if unit == "ft" else meters
    return round(value, 1)


def has_keyword(text: str | None, keywords: Iterable[str]) -> bool:
    """Case-insensitive substring match against any keyword."""

    if not text:
        return False
    lowered = str(text).lower()
    return any(keyword.lower() in lowered for keyword in keywords if keyword)
