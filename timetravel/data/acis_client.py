"""Client for the Yorkshire ACIS text departure board."""

from __future__ import annotations

import logging

import requests

from timetravel.config import UpstreamConfig
from timetravel.data.models import BusArrival
from timetravel.data.parser import parse_arrivals
from timetravel.errors import StatusError, TransportError

logger = logging.getLogger(__name__)


class AcisClient:
    """Thin wrapper around the ACIS web display using requests."""

    def __init__(self, config: UpstreamConfig | None = None) -> None:
        self._config = config or UpstreamConfig()

    def fetch_page(self, stop_code: str) -> str:
        """Fetch the raw departure page HTML for a stop code."""
        params = {self._config.stop_param: stop_code}
        headers = {"User-Agent": self._config.user_agent}
        logger.debug("Fetching %s for stop %s", self._config.base_url, stop_code)
        try:
            response = requests.get(
                self._config.base_url,
                params=params,
                headers=headers,
                timeout=self._config.timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.warning("Departure board request failed: %s", exc)
            raise TransportError(f"Departure board request failed: {exc}") from exc

        if response.status_code != 200:
            logger.warning("Departure board returned status %s", response.status_code)
            raise StatusError(
                response.status_code,
                f"Departure board request failed: status {response.status_code}",
            )
        return response.text

    def get_arrivals(self, stop_code: str) -> list[BusArrival]:
        """Fetch and parse the arrivals for a stop code."""
        return parse_arrivals(self.fetch_page(stop_code))


__all__ = ["AcisClient"]
