"""Daylight planning along a route.

Sunrise, sunset and twilight come from :mod:`astral`. Times are reported in a
fixed UTC offset estimated from longitude (15 degrees per hour) unless the
caller passes a ``tzinfo``; real civil time zones are not looked up.

``create_daylight_plan`` cuts a route into days of a target distance, looks
up daylight at each day's start point and flags days whose walking time
exceeds the usable daylight.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
import logging
import math
from typing import List, Optional, Sequence, Tuple

from astral import Depression, Observer, moon
from astral import sun as astral_sun
import numpy as np
import pandas as pd

from .config import (
    DAYLIGHT_END_OFFSET_MIN,
    DAYLIGHT_SAMPLES_PER_DAY,
    DAYLIGHT_START_OFFSET_MIN,
    HIKING_SPEED_KMH,
)
from .errors import DaylightUnavailableError, NoTrackDataError
from .geometry.stats import with_cumulative_distance
from .models import TrackPoint

_LOG = logging.getLogger(__name__)

# astral reports the moon phase as days into a 28 day cycle.
_MOON_CYCLE_DAYS = 28.0

_MOON_PHASES = (
    (0.03, "New Moon"),
    (0.22, "Waxing Crescent"),
    (0.28, "First Quarter"),
    (0.47, "Waxing Gibbous"),
    (0.53, "Full Moon"),
    (0.72, "Waning Gibbous"),
    (0.78, "Last Quarter"),
    (0.97, "Waning Crescent"),
)


@dataclass(frozen=True, slots=True)
class DaylightInfo:
    day: date
    sunrise: datetime
    sunset: datetime
    solar_noon: datetime
    civil_dawn: Optional[datetime]
    civil_dusk: Optional[datetime]
    nautical_dawn: Optional[datetime]
    nautical_dusk: Optional[datetime]
    daylight_hours: float


@dataclass(frozen=True, slots=True)
class LocationDaylight:
    latitude: float
    longitude: float
    distance_m: float
    daylight: DaylightInfo


@dataclass(frozen=True, slots=True)
class MoonInfo:
    phase: float
    illumination: float
    phase_name: str


@dataclass(frozen=True, slots=True)
class DaylightPlanDay:
    day_number: int
    day: date
    start: Tuple[float, float]
    end: Tuple[float, float]
    start_distance_km: float
    end_distance_km: float
    sunrise: datetime
    sunset: datetime
    daylight_hours: float
    hiking_hours_needed: float
    hiking_hours_available: float

    @property
    def distance_km(self) -> float:
        return self.end_distance_km - self.start_distance_km

    @property
    def night_hiking_required(self) -> bool:
        return self.hiking_hours_needed > self.hiking_hours_available


@dataclass(frozen=True, slots=True)
class DaylightPlan:
    days: Tuple[DaylightPlanDay, ...]
    total_distance_km: float

    @property
    def total_days(self) -> int:
        return len(self.days)

    @property
    def night_hiking_days(self) -> int:
        return sum(1 for day in self.days if day.night_hiking_required)

    @property
    def shortest_day(self) -> Optional[DaylightPlanDay]:
        """Day with the least daylight; the earliest wins ties."""
        if not self.days:
            return None
        return min(self.days, key=lambda day: day.daylight_hours)

    @property
    def longest_day(self) -> Optional[DaylightPlanDay]:
        if not self.days:
            return None
        return max(self.days, key=lambda day: day.daylight_hours)


def estimated_timezone(longitude: float) -> timezone:
    """Fixed UTC offset of one hour per 15 degrees of longitude."""

    return timezone(timedelta(hours=round(longitude / 15.0)))


def _twilight(
    observer: Observer, day: date, tz: tzinfo, depression: Depression
) -> Tuple[Optional[datetime], Optional[datetime]]:
    try:
        return (
            astral_sun.dawn(observer, date=day, depression=depression, tzinfo=tz),
            astral_sun.dusk(observer, date=day, depression=depression, tzinfo=tz),
        )
    except ValueError:
        # Summer nights where the sun never sinks that far below the horizon.
        return None, None


def daylight_info(
    latitude: float,
    longitude: float,
    day: date,
    tz: Optional[tzinfo] = None,
) -> DaylightInfo:
    """Return sun event times for one location and date.

    Twilight times are ``None`` when the sun does not reach that depression.

    Raises:
        DaylightUnavailableError: The sun does not cross the horizon on
            ``day`` at this latitude (polar day or night).
    """

    tz = tz or estimated_timezone(longitude)
    observer = Observer(latitude=latitude, longitude=longitude)
    try:
        sunrise = astral_sun.sunrise(observer, date=day, tzinfo=tz)
        sunset = astral_sun.sunset(observer, date=day, tzinfo=tz)
    except ValueError as exc:
        raise DaylightUnavailableError(
            f"No sunrise/sunset at ({latitude:.4f}, {longitude:.4f}) on "
            f"{day.isoformat()}: {exc}"
        ) from exc

    hours = (sunset - sunrise).total_seconds() / 3600.0
    # Events can straddle the local date boundary of a coarse offset.
    if hours < 0:
        hours += 24.0
    civil_dawn, civil_dusk = _twilight(observer, day, tz, Depression.CIVIL)
    nautical_dawn, nautical_dusk = _twilight(observer, day, tz, Depression.NAUTICAL)
    return DaylightInfo(
        day=day,
        sunrise=sunrise,
        sunset=sunset,
        solar_noon=astral_sun.noon(observer, date=day, tzinfo=tz),
        civil_dawn=civil_dawn,
        civil_dusk=civil_dusk,
        nautical_dawn=nautical_dawn,
        nautical_dusk=nautical_dusk,
        daylight_hours=hours,
    )


def daylight_range(
    latitude: float, longitude: float, start: date, days: int
) -> List[DaylightInfo]:
    return [
        daylight_info(latitude, longitude, start + timedelta(days=offset))
        for offset in range(days)
    ]


def daylight_along_route(
    points: Sequence[TrackPoint],
    start: date,
    days: int,
    samples_per_day: int = DAYLIGHT_SAMPLES_PER_DAY,
) -> List[List[LocationDaylight]]:
    """Daylight at evenly spaced route samples, one list per calendar day."""

    if not points or days <= 0:
        return []
    tagged = with_cumulative_distance(points)
    step = max(1, len(tagged) // (days * max(samples_per_day, 1)))
    samples = tagged[::step]
    return [
        [
            LocationDaylight(
                latitude=point.latitude,
                longitude=point.longitude,
                distance_m=point.cumulative_distance or 0.0,
                daylight=daylight_info(
                    point.latitude, point.longitude, start + timedelta(days=offset)
                ),
            )
            for point in samples
        ]
        for offset in range(days)
    ]


def create_daylight_plan(
    points: Sequence[TrackPoint],
    start: date,
    daily_target_km: float,
    hiking_speed_kmh: float = HIKING_SPEED_KMH,
    start_offset_min: float = DAYLIGHT_START_OFFSET_MIN,
    end_offset_min: float = DAYLIGHT_END_OFFSET_MIN,
) -> DaylightPlan:
    """Split the route into days of ``daily_target_km`` and check daylight.

    Each day's daylight is taken at its start point. Usable walking hours are
    sunrise + ``start_offset_min`` to sunset - ``end_offset_min``; a day
    needing more walking than that requires night hiking. The final day
    covers whatever distance remains.

    Raises:
        NoTrackDataError: ``points`` is empty.
        ValueError: ``daily_target_km`` or ``hiking_speed_kmh`` is not
            positive.
        DaylightUnavailableError: A start point has no sunrise or sunset.
    """

    if not points:
        raise NoTrackDataError("A route is required for a daylight plan")
    if daily_target_km <= 0:
        raise ValueError("daily_target_km must be positive")
    if hiking_speed_kmh <= 0:
        raise ValueError("hiking_speed_kmh must be positive")

    tagged = with_cumulative_distance(points)
    cumulative_km = np.array([p.cumulative_distance for p in tagged], dtype=float) / 1000.0
    lats = np.array([p.latitude for p in tagged], dtype=float)
    lons = np.array([p.longitude for p in tagged], dtype=float)
    total_km = float(cumulative_km[-1])

    def position(km: float) -> Tuple[float, float]:
        # np.interp clamps past either end of the route.
        return (
            float(np.interp(km, cumulative_km, lats)),
            float(np.interp(km, cumulative_km, lons)),
        )

    offset_hours = (start_offset_min + end_offset_min) / 60.0
    days: List[DaylightPlanDay] = []
    current_km = 0.0
    for day_number in range(math.ceil(total_km / daily_target_km)):
        if current_km >= total_km:
            break
        day = start + timedelta(days=day_number)
        end_km = min(current_km + daily_target_km, total_km)
        start_point = position(current_km)
        info = daylight_info(start_point[0], start_point[1], day)
        days.append(
            DaylightPlanDay(
                day_number=day_number + 1,
                day=day,
                start=start_point,
                end=position(end_km),
                start_distance_km=current_km,
                end_distance_km=end_km,
                sunrise=info.sunrise,
                sunset=info.sunset,
                daylight_hours=info.daylight_hours,
                hiking_hours_needed=(end_km - current_km) / hiking_speed_kmh,
                hiking_hours_available=info.daylight_hours - offset_hours,
            )
        )
        current_km = end_km

    plan = DaylightPlan(days=tuple(days), total_distance_km=total_km)
    _LOG.info(
        "Daylight plan: %.2f km over %d days, %d needing night hiking",
        total_km,
        plan.total_days,
        plan.night_hiking_days,
    )
    return plan


def moon_info(day: date) -> MoonInfo:
    """Moon phase (0 new, 0.5 full) and illuminated fraction for ``day``."""

    phase = (moon.phase(day) / _MOON_CYCLE_DAYS) % 1.0
    illumination = (1.0 - math.cos(2.0 * math.pi * phase)) / 2.0
    name = "New Moon"
    for upper, label in _MOON_PHASES:
        if phase < upper:
            name = label
            break
    return MoonInfo(phase=phase, illumination=illumination, phase_name=name)


def format_daylight_hours(hours: float) -> str:
    """Format hours as ``"<h>h <m>m"``."""

    whole, minutes = divmod(int(round(hours * 60)), 60)
    return f"{whole}h {minutes}m"


def daylight_plan_frame(plan: DaylightPlan) -> pd.DataFrame:
    """One row per plan day, ready for a CSV or spreadsheet writer."""

    rows = [
        {
            "Day": day.day_number,
            "Date": day.day.isoformat(),
            "Start Lat": round(day.start[0], 6),
            "Start Lon": round(day.start[1], 6),
            "End Lat": round(day.end[0], 6),
            "End Lon": round(day.end[1], 6),
            "Distance (km)": round(day.distance_km, 3),
            "Sunrise": day.sunrise.strftime("%H:%M"),
            "Sunset": day.sunset.strftime("%H:%M"),
            "Daylight Hours": format_daylight_hours(day.daylight_hours),
            "Available Hiking Hours": format_daylight_hours(day.hiking_hours_available),
            "Night Hiking Required": "Yes" if day.night_hiking_required else "No",
        }
        for day in plan.days
    ]
    return pd.DataFrame(
        rows,
        columns=[
            "Day",
            "Date",
            "Start Lat",
            "Start Lon",
            "End Lat",
            "End Lon",
            "Distance (km)",
            "Sunrise",
            "Sunset",
            "Daylight Hours",
            "Available Hiking Hours",
            "Night Hiking Required",
        ],
    )


__all__ = [
    "DaylightInfo",
    "DaylightPlan",
    "DaylightPlanDay",
    "LocationDaylight",
    "MoonInfo",
    "create_daylight_plan",
    "daylight_along_route",
    "daylight_info",
    "daylight_plan_frame",
    "daylight_range",
    "estimated_timezone",
    "format_daylight_hours",
    "moon_info",
]
