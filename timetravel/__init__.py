"""Live bus departures scraped from the Yorkshire ACIS web display."""

__version__ = "0.3.0"
