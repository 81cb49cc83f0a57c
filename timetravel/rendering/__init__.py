"""Terminal rendering for departure boards."""

from timetravel.rendering.road import render_road, road_for
from timetravel.rendering.table import build_table, print_arrivals, run_once, run_realtime

__all__ = ["build_table", "print_arrivals", "render_road", "road_for", "run_once", "run_realtime"]
