"""Timestamp formatting utilities for gitstamp."""

import math
from datetime import datetime, timezone


def format_iso_timestamp(moment: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC string with millisecond precision.

    Naive datetimes are assumed to already be in UTC.

    Args:
        moment: Datetime to format

    Returns:
        ISO-8601 string with a trailing "Z" (e.g., "2021-01-01T00:00:00.000Z")

    Examples:
        >>> format_iso_timestamp(datetime(2021, 1, 1, tzinfo=timezone.utc))
        '2021-01-01T00:00:00.000Z'
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into a timezone-aware datetime.

    Accepts a trailing "Z" as UTC. Timestamps without an offset are
    treated as UTC.

    Args:
        value: ISO-8601 timestamp string

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the string is not a valid ISO-8601 timestamp

    Examples:
        >>> parse_iso_timestamp("2021-01-01T00:00:00Z").year
        2021
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    moment = datetime.fromisoformat(text)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def to_unix_timestamp(moment: datetime) -> int:
    """Convert a datetime to whole epoch seconds, rounding down.

    Examples:
        >>> to_unix_timestamp(parse_iso_timestamp("2021-01-01T00:00:00Z"))
        1609459200
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return math.floor(moment.timestamp())
