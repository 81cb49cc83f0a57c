from __future__ import annotations

import json

import pytest

from timetravel.config import NaptanConfig
from timetravel.data.models import (
    INVALID_CODE_MESSAGE,
    AbsoluteTime,
    BusArrival,
    Due,
    RelativeMinutes,
    check_code,
    parse_arrival_time,
    require_code,
)
from timetravel.errors import ValidationError


@pytest.mark.parametrize("code", ["22001688", "00000000", "12345678", "99999999"])
def test_check_code_accepts_eight_digits(code: str) -> None:
    assert check_code(code)


@pytest.mark.parametrize(
    "code",
    [
        "1234567",
        "123456789",
        "",
        "2200168a",
        "2200-688",
        "22 01688",
        "ABCDEFGH",
        "2200168.",
        "ÅÅÅÅÅÅÅÅ",
        "١٢٣٤٥٦٧٨",
        "2200168²",
    ],
)
def test_check_code_rejects(code: str) -> None:
    assert not check_code(code)


def test_check_code_custom_length() -> None:
    assert check_code("1234", NaptanConfig(length=4))


def test_require_code_seven_digits() -> None:
    with pytest.raises(ValidationError) as exc_info:
        require_code("1234567")

    assert str(exc_info.value) == INVALID_CODE_MESSAGE


def test_require_code_missing() -> None:
    with pytest.raises(ValidationError):
        require_code(None)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Due", Due()),
        ("due", Due()),
        ("", Due()),
        ("9", RelativeMinutes(9)),
        ("12 mins", RelativeMinutes(12)),
        ("14:32", AbsoluteTime(14, 32)),
        ("07:05 ", AbsoluteTime(7, 5)),
        ("soon", RelativeMinutes(0)),
        ("25:99", RelativeMinutes(0)),
    ],
)
def test_parse_arrival_time(raw: str, expected) -> None:
    assert parse_arrival_time(raw) == expected


def test_arrival_is_parsed_on_construction() -> None:
    arrival = BusArrival(12, "TownCentre", "14:32", True)

    assert arrival.arrival == AbsoluteTime(14, 32)


def test_str_due() -> None:
    assert str(BusArrival(12, "TownCentre", "Due", False)) == "Bus 12 going to TownCentre is Due"


def test_str_clock_time() -> None:
    assert str(BusArrival(12, "TownCentre", "14:32", False)) == "Bus 12 going to TownCentre @ 14:32"


def test_str_minutes() -> None:
    assert str(BusArrival(12, "TownCentre", "9", False)) == "Bus 12 going to TownCentre in 9"


def test_to_dict_field_names() -> None:
    arrival = BusArrival(36, "Leeds", "5", True)

    assert arrival.to_dict() == {"bus": 36, "to": "Leeds", "time": "5", "double_decker": True}


def test_json_round_trip() -> None:
    arrival = BusArrival(36, "Ripon", "14:32", False)

    restored = BusArrival.from_dict(json.loads(json.dumps(arrival.to_dict())))

    assert restored == arrival
    assert restored.arrival == arrival.arrival


def test_bus_arrival_is_immutable() -> None:
    arrival = BusArrival(1, "York", "Due", True)

    with pytest.raises(AttributeError):
        arrival.service = 2  # type: ignore[misc]
