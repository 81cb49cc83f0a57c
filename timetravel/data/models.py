"""Bus arrival records and stop code validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from timetravel.config import NaptanConfig
from timetravel.errors import ValidationError

INVALID_CODE_MESSAGE = "NapTAN code must be an 8 digit number."


@dataclass(frozen=True)
class Due:
    """The bus is at, or about to reach, the stop."""


@dataclass(frozen=True)
class RelativeMinutes:
    """Arrival expected in a number of minutes from now."""

    minutes: int


@dataclass(frozen=True)
class AbsoluteTime:
    """Timetabled arrival at a wall-clock time today."""

    hour: int
    minute: int


ArrivalTime = Union[Due, RelativeMinutes, AbsoluteTime]


def _parse_clock(token: str) -> AbsoluteTime | None:
    hour_text, _, minute_text = token.partition(":")
    if not (hour_text.isdigit() and minute_text.isdigit()):
        return None
    hour, minute = int(hour_text), int(minute_text)
    if hour > 23 or minute > 59:
        return None
    return AbsoluteTime(hour, minute)


def parse_arrival_time(raw: str) -> ArrivalTime:
    """Classify the free-form time cell of the departure board.

    The board shows ``Due``, a bare minute count (``12`` or ``12 mins``) or a
    timetabled ``HH:MM``. Anything unreadable counts as zero minutes away.
    """
    tokens = raw.split()
    if not tokens:
        return Due()
    token = tokens[0]
    if token.lower() == "due":
        return Due()
    if ":" in token:
        clock = _parse_clock(token)
        if clock is not None:
            return clock
    try:
        return RelativeMinutes(int(token))
    except ValueError:
        return RelativeMinutes(0)


@dataclass(frozen=True)
class BusArrival:
    """One row of the departure board."""

    service: int
    destination: str
    raw_time: str
    double_decker: bool
    arrival: ArrivalTime = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "arrival", parse_arrival_time(self.raw_time))

    def __str__(self) -> str:
        prefix = f"Bus {self.service} going to {self.destination}"
        if isinstance(self.arrival, Due):
            return f"{prefix} is {self.raw_time}"
        if isinstance(self.arrival, AbsoluteTime):
            return f"{prefix} @ {self.raw_time}"
        return f"{prefix} in {self.raw_time}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON shape served by the API."""
        return {
            "bus": self.service,
            "to": self.destination,
            "time": self.raw_time,
            "double_decker": self.double_decker,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BusArrival:
        return cls(
            service=int(data["bus"]),
            destination=str(data["to"]),
            raw_time=str(data["time"]),
            double_decker=bool(data["double_decker"]),
        )


def check_code(code: str, naptan: NaptanConfig | None = None) -> bool:
    """Return True if ``code`` looks like a NapTAN stop code."""
    naptan = naptan or NaptanConfig()
    if len(code) != naptan.length:
        return False
    if any(char in naptan.deny_list for char in code):
        return False
    return code.isascii() and code.isdigit()


def require_code(code: str | None, naptan: NaptanConfig | None = None) -> str:
    """Return ``code`` unchanged or raise ValidationError."""
    if code is None or not check_code(code, naptan):
        raise ValidationError(INVALID_CODE_MESSAGE)
    return code


__all__ = [
    "AbsoluteTime",
    "ArrivalTime",
    "BusArrival",
    "Due",
    "INVALID_CODE_MESSAGE",
    "RelativeMinutes",
    "check_code",
    "parse_arrival_time",
    "require_code",
]
