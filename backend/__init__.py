"""JSON response envelope helpers and the demonstration API."""

__version__ = "0.1.0"
