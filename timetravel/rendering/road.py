"""Emoji "road" showing roughly how far away a bus is."""

from __future__ import annotations

from datetime import datetime, timedelta

from timetravel.data.models import AbsoluteTime, ArrivalTime, BusArrival, Due, RelativeMinutes

STOP = "🚏"
BUS = "🚌"
# No double decker glyph exists; the oncoming bus stands in for one.
DOUBLE_DECKER = "🚍"
ROAD = "_"

MINUTE_UNIT = 5
HOUR_UNIT = 12


def _whole_hours(delta: timedelta) -> int:
    return int(delta.total_seconds() / 3600)


def count_roads(arrival: ArrivalTime, now: datetime) -> tuple[int, int]:
    """Return ``(roads, unit)`` for an arrival time.

    Minute counts give one road per five minutes; wall-clock times give one
    road per hour, wrapped on a twelve hour dial.
    """
    if isinstance(arrival, AbsoluteTime):
        target = now.replace(hour=arrival.hour, minute=arrival.minute, second=0, microsecond=0)
        hours = _whole_hours(target - now)
        roads = hours % HOUR_UNIT if hours > 0 else hours
        return roads, HOUR_UNIT

    minutes = arrival.minutes if isinstance(arrival, RelativeMinutes) else 0
    target = now + timedelta(minutes=minutes)
    whole_minutes = int((target - now).total_seconds() // 60)
    return whole_minutes // MINUTE_UNIT, MINUTE_UNIT


def render_road(arrival: ArrivalTime, double_decker: bool, now: datetime | None = None) -> str:
    """Draw the stop, some road and the bus for one arrival."""
    now = now or datetime.now()
    bus = DOUBLE_DECKER if double_decker else BUS
    roads, unit = count_roads(arrival, now)
    if roads <= 0:
        return STOP + bus

    stop = STOP if unit == MINUTE_UNIT else ""
    return stop + ROAD * roads + bus + ROAD * unit


def road_for(arrival: BusArrival, now: datetime | None = None) -> str:
    return render_road(arrival.arrival, arrival.double_decker, now)


def is_imminent(arrival: ArrivalTime) -> bool:
    if isinstance(arrival, Due):
        return True
    return isinstance(arrival, RelativeMinutes) and arrival.minutes < MINUTE_UNIT


__all__ = [
    "BUS",
    "DOUBLE_DECKER",
    "ROAD",
    "STOP",
    "count_roads",
    "is_imminent",
    "render_road",
    "road_for",
]
