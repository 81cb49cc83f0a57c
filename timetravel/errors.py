"""Exception hierarchy shared by the fetcher, parser, API and CLI."""

from __future__ import annotations


class TimetravelError(Exception):
    """Base class for every error raised by timetravel."""


class ValidationError(TimetravelError):
    """Raised when a NapTAN stop code is malformed."""


class ParseError(TimetravelError):
    """Raised when the departure page has no table to scrape."""


class AcisClientError(TimetravelError):
    """Raised when the ACIS web display cannot be fetched."""


class TransportError(AcisClientError):
    """Raised when the request never got a response."""


class StatusError(AcisClientError):
    """Raised when the ACIS web display answers with a non-200 status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "TimetravelError",
    "ValidationError",
    "ParseError",
    "AcisClientError",
    "TransportError",
    "StatusError",
]
