"""Scraper for the ACIS text departure board."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup
from bs4.element import Tag

from timetravel.data.models import BusArrival
from timetravel.errors import ParseError

logger = logging.getLogger(__name__)

SERVICE = "service"
DESTINATION = "destination"
TIME = "time"
LOW_FLOOR = "low_floor"

# Legacy column order of the board, used when a header cell is not recognised.
DEFAULT_POSITIONS = {SERVICE: 0, DESTINATION: 1, TIME: 2, LOW_FLOOR: 3}

HEADER_ALIASES = {
    SERVICE: ("service", "bus", "route"),
    DESTINATION: ("to", "destination"),
    TIME: ("time", "due", "departure"),
    LOW_FLOOR: ("low floor", "low"),
}

LOW_FLOOR_YES = "Yes"


def _cells(row: Tag) -> list[str]:
    return [cell.get_text().strip() for cell in row.find_all(["td", "th"])]


def _match_column(header: str) -> str | None:
    text = header.lower()
    for column in (LOW_FLOOR, SERVICE, TIME, DESTINATION):
        for alias in HEADER_ALIASES[column]:
            if text == alias or text.startswith(alias + " "):
                return column
    return None


def column_positions(header: list[str]) -> dict[str, int]:
    """Map each known column to its index in the header row."""
    positions: dict[str, int] = {}
    for index, text in enumerate(header):
        column = _match_column(text)
        if column is not None and column not in positions:
            positions[column] = index

    taken = set(positions.values())
    for column, index in DEFAULT_POSITIONS.items():
        if column not in positions and index not in taken:
            positions[column] = index
    return positions


def _service_number(text: str) -> int:
    # Lenient on purpose: "X84" and blanks become 0 rather than an error.
    return int(text) if text.isdigit() else 0


def _row_to_arrival(cells: list[str], positions: dict[str, int]) -> BusArrival:
    def cell(column: str) -> str | None:
        index = positions.get(column)
        if index is None or index >= len(cells):
            return None
        return cells[index]

    return BusArrival(
        service=_service_number(cell(SERVICE) or ""),
        destination=cell(DESTINATION) or "",
        raw_time=cell(TIME) or "",
        double_decker=cell(LOW_FLOOR) != LOW_FLOOR_YES,
    )


def parse_arrivals(html: str | bytes) -> list[BusArrival]:
    """Parse the first table of a departure page into BusArrival records.

    The first row is treated as the header and dropped; every other row
    produces exactly one record, in page order.
    """
    soup = BeautifulSoup(html, "html.parser")
    table = soup.find("table")
    if table is None:
        raise ParseError("Departure page contains no table")

    rows = table.find_all("tr")
    if not rows:
        return []

    positions = column_positions(_cells(rows[0]))
    arrivals = [_row_to_arrival(_cells(row), positions) for row in rows[1:]]
    logger.debug("Parsed %d arrivals from %d rows", len(arrivals), len(rows))
    return arrivals


__all__ = ["column_positions", "parse_arrivals"]
