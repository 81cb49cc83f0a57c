"""Configuration for the timetravel scraper, API and CLI."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
import logging
import string
from typing import Any

import yaml

ACIS_BASE_URL = "http://yorkshire.acisconnect.com/Text/WebDisplay.aspx"
ACIS_STOP_PARAM = "stopRef"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 6.2; WOW64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/30.0.1599.17 Safari/537.36"
)

NAPTAN_LENGTH = 8
NAPTAN_DENY_LIST = string.ascii_letters + string.punctuation + string.whitespace

API_HOST = "localhost"
API_PORT = 7654


@dataclass(frozen=True)
class UpstreamConfig:
    """Where and how the departure page is fetched."""

    base_url: str = ACIS_BASE_URL
    stop_param: str = ACIS_STOP_PARAM
    user_agent: str = USER_AGENT
    timeout_seconds: float | None = None


@dataclass(frozen=True)
class NaptanConfig:
    """Stop code validation rules."""

    length: int = NAPTAN_LENGTH
    deny_list: str = NAPTAN_DENY_LIST


@dataclass(frozen=True)
class ApiConfig:
    """JSON API bind address."""

    host: str = API_HOST
    port: int = API_PORT


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    upstream: UpstreamConfig
    naptan: NaptanConfig
    api: ApiConfig
    log: LoggingConfig


def default_config() -> AppConfig:
    """Return the built-in configuration."""
    return AppConfig(
        upstream=UpstreamConfig(),
        naptan=NaptanConfig(),
        api=ApiConfig(),
        log=LoggingConfig(),
    )


def _override(base: Any, section: Any, context: str) -> Any:
    if section is None:
        return base
    if not isinstance(section, dict):
        raise ValueError(f"'{context}' config must be a mapping")
    allowed = {f.name for f in fields(base)}
    unknown = sorted(set(section) - allowed)
    if unknown:
        raise ValueError(f"Unknown key '{unknown[0]}' in {context} config")
    return replace(base, **section)


def load_config(path: str) -> AppConfig:
    """Load application configuration from a YAML file.

    Every section is optional; keys that are present override the defaults.
    """
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    unknown = sorted(set(data) - {"upstream", "api", "logging"})
    if unknown:
        raise ValueError(f"Unknown config section '{unknown[0]}'")

    defaults = default_config()
    upstream = _override(defaults.upstream, data.get("upstream"), "upstream")
    api = _override(defaults.api, data.get("api"), "api")
    log = _override(defaults.log, data.get("logging"), "logging")

    if not isinstance(api.port, int):
        raise ValueError("'api.port' must be an integer")
    timeout = upstream.timeout_seconds
    if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float))):
        raise ValueError("'upstream.timeout_seconds' must be a number or null")
    if not isinstance(log.level, str) or not isinstance(logging.getLevelName(log.level.upper()), int):
        raise ValueError(f"Unknown logging level: {log.level!r}")

    return AppConfig(upstream=upstream, naptan=defaults.naptan, api=api, log=log)


__all__ = [
    "AppConfig",
    "ApiConfig",
    "LoggingConfig",
    "NaptanConfig",
    "UpstreamConfig",
    "default_config",
    "load_config",
]
