"""Utility functions for gitstamp."""

from .formatters import format_iso_timestamp, parse_iso_timestamp

__all__ = ["format_iso_timestamp", "parse_iso_timestamp"]
