"""Terminal departure table and the realtime refresh loop."""

from __future__ import annotations

from datetime import datetime
import logging
import time
from typing import Callable

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from timetravel.data.acis_client import AcisClient
from timetravel.data.models import AbsoluteTime, BusArrival
from timetravel.errors import AcisClientError, ParseError
from timetravel.rendering.road import BUS, DOUBLE_DECKER, ROAD, STOP, is_imminent, road_for

logger = logging.getLogger(__name__)

REFRESH_SECONDS = 30


def _format_clock(now: datetime) -> str:
    value = now.strftime("%I:%M%p")
    return value.lstrip("0") if value.startswith("0") else value


def _time_style(arrival: BusArrival) -> str:
    if is_imminent(arrival.arrival):
        return "bold green"
    if isinstance(arrival.arrival, AbsoluteTime):
        return ""
    return "yellow"


def build_table(arrivals: list[BusArrival], now: datetime | None = None) -> Table:
    """Lay out arrivals as a rich table."""
    table = Table(show_header=True, header_style="bold magenta", box=box.ROUNDED)
    table.add_column("Bus", justify="right", style="bold")
    table.add_column("To")
    table.add_column("Time", justify="right")
    table.add_column("Emoji", no_wrap=True)
    table.add_column("Double Decker", justify="center")

    for arrival in arrivals:
        table.add_row(
            str(arrival.service),
            Text(arrival.destination, style="cyan"),
            Text(arrival.raw_time, style=_time_style(arrival)),
            road_for(arrival, now),
            "Yes" if arrival.double_decker else "No",
        )
    return table


def build_legend() -> Text:
    legend = Text()
    legend.append(STOP)
    legend.append(" stop  ", style="dim")
    legend.append(BUS)
    legend.append(" single decker  ", style="dim")
    legend.append(DOUBLE_DECKER)
    legend.append(" double decker  ", style="dim")
    legend.append(ROAD, style="bold")
    legend.append(" about 5 minutes (1 hour for timetabled departures)", style="dim")
    return legend


def print_arrivals(
    console: Console,
    arrivals: list[BusArrival],
    stop_code: str,
    now: datetime | None = None,
) -> None:
    """Print the header line, the departure table and the legend."""
    now = now or datetime.now()
    console.print(f"[bold]Departures for stop {stop_code} at {_format_clock(now)}[/]")
    if not arrivals:
        console.print("[dim]No buses due.[/]")
    else:
        console.print(build_table(arrivals, now))
    console.print(build_legend())


def _fetch_and_print(client: AcisClient, stop_code: str, console: Console) -> bool:
    try:
        arrivals = client.get_arrivals(stop_code)
    except (AcisClientError, ParseError) as exc:
        logger.warning("Unable to fetch buses for %s: %s", stop_code, exc)
        console.print(f"[bold red]Unable to fetch buses:[/] {escape(str(exc))}")
        return False
    print_arrivals(console, arrivals, stop_code)
    return True


def run_once(client: AcisClient, stop_code: str, console: Console) -> int:
    """Fetch and print once; returns a process exit code."""
    return 0 if _fetch_and_print(client, stop_code, console) else 1


def run_realtime(
    client: AcisClient,
    stop_code: str,
    console: Console,
    sleep: Callable[[float], None] = time.sleep,
    max_cycles: int | None = None,
) -> int:
    """Redraw the table every REFRESH_SECONDS until a fetch fails or Ctrl-C."""
    cycles = 0
    try:
        while max_cycles is None or cycles < max_cycles:
            console.clear()
            if not _fetch_and_print(client, stop_code, console):
                return 1
            cycles += 1
            sleep(REFRESH_SECONDS)
    except KeyboardInterrupt:
        return 0
    return 0


__all__ = [
    "REFRESH_SECONDS",
    "build_legend",
    "build_table",
    "print_arrivals",
    "run_once",
    "run_realtime",
]
