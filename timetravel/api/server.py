"""JSON API exposing live departures for a stop."""

from __future__ import annotations

from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
import json
import logging
from typing import Any
from urllib.parse import parse_qs, urlsplit

from timetravel.config import AppConfig, NaptanConfig
from timetravel.data.acis_client import AcisClient
from timetravel.data.models import INVALID_CODE_MESSAGE, require_code
from timetravel.errors import AcisClientError, ParseError, ValidationError

logger = logging.getLogger(__name__)

CHECK_BUSES_PATH = "/check_buses"
UNABLE_MESSAGE = "unable to fetch buses."


class ArrivalsServer(ThreadingHTTPServer):
    """HTTP server carrying the client shared by every request handler."""

    def __init__(
        self,
        address: tuple[str, int],
        client: AcisClient,
        naptan: NaptanConfig,
    ) -> None:
        super().__init__(address, ArrivalsHandler)
        self.client = client
        self.naptan = naptan


class ArrivalsHandler(BaseHTTPRequestHandler):
    server: ArrivalsServer

    def do_GET(self) -> None:  # noqa: N802
        url = urlsplit(self.path)
        if url.path != CHECK_BUSES_PATH:
            self._send_json(404, {"error": "not found"})
            return

        query = parse_qs(url.query)
        code = query.get("naptan", [None])[0]
        try:
            stop_code = require_code(code, self.server.naptan)
        except ValidationError:
            self._send_json(400, {"error": INVALID_CODE_MESSAGE})
            return

        try:
            arrivals = self.server.client.get_arrivals(stop_code)
        except (AcisClientError, ParseError) as exc:
            logger.warning("Unable to fetch buses for %s: %s", stop_code, exc)
            self._send_json(400, {"error": UNABLE_MESSAGE})
            return

        self._send_json(200, [arrival.to_dict() for arrival in arrivals])

    def _send_json(self, status: int, payload: Any) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.info("%s - %s", self.address_string(), format % args)


def make_server(config: AppConfig, client: AcisClient | None = None) -> ArrivalsServer:
    """Bind the API server without starting it."""
    client = client or AcisClient(config.upstream)
    return ArrivalsServer((config.api.host, config.api.port), client, config.naptan)


def serve_api(config: AppConfig, client: AcisClient | None = None) -> int:
    """Serve the API until interrupted."""
    server = make_server(config, client)
    host, port = server.server_address[:2]
    print(f"timetravel API is up on {host}:{port}", flush=True)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
    return 0


__all__ = ["ArrivalsHandler", "ArrivalsServer", "make_server", "serve_api"]
