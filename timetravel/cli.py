"""Command line entry point for timetravel."""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console

from timetravel import __version__
from timetravel.api.server import serve_api
from timetravel.config import AppConfig, default_config, load_config
from timetravel.data.acis_client import AcisClient
from timetravel.data.models import require_code
from timetravel.errors import ValidationError
from timetravel.rendering.table import run_once, run_realtime

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timetravel",
        description="Live bus departures for a Yorkshire bus stop.",
    )
    parser.add_argument(
        "-n",
        "--naptan",
        metavar="CODE",
        help="8 digit NapTAN code of the stop to show",
    )
    parser.add_argument(
        "interval",
        nargs="?",
        help="Accepted for compatibility; the refresh interval is fixed at 30 seconds",
    )
    parser.add_argument(
        "-t",
        "--realtime",
        action="store_true",
        help="Keep refreshing the departure table",
    )
    parser.add_argument(
        "-a",
        "--api",
        action="store_true",
        help="Launch the JSON API server",
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="PATH",
        help="Optional YAML config file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def _load(path: str | None) -> AppConfig:
    return load_config(path) if path else default_config()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = _load(args.config)
    except ValueError as exc:
        print(f"Invalid config: {exc}", file=sys.stderr)
        return 1
    configure_logging(config.log.level)

    if args.api:
        return serve_api(config)

    if args.naptan is None:
        parser.print_usage(sys.stderr)
        return 1

    try:
        stop_code = require_code(args.naptan, config.naptan)
    except ValidationError as exc:
        print(exc, file=sys.stderr)
        return 1

    client = AcisClient(config.upstream)
    console = Console()
    if args.realtime:
        return run_realtime(client, stop_code, console)
    return run_once(client, stop_code, console)


if __name__ == "__main__":
    raise SystemExit(main())
