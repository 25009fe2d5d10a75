"""
Duration Parsing & Temporal Helpers

Durations arrive in compact ISO 8601 form ("PT8H30M", "PT45M", "PT2H").
Anything else is "unknown" (None) rather than an error, so a bad value
from a supplier only disables the rules that depend on it.

Local hours are read from the timestamp itself: an aware timestamp is
taken at its own UTC offset, a naive one is already airport wall-clock
time. The evaluating process's timezone is never consulted.
"""

import math
import re
from datetime import datetime
from typing import Optional

_DURATION_RE = re.compile(
    r"^P(?:(?P<days>\d+)D)?T(?=\d)(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:\d+(?:\.\d+)?S)?$"
)


def parse_duration(duration: Optional[str]) -> Optional[int]:
    """
    Parse a compact duration into total minutes

    Args:
        duration: e.g. "PT8H30M", "PT2H", "PT45M" (a leading day count
            such as "P1DT2H" is accepted too)

    Returns:
        int minutes, or None if the string is missing or unparseable

    Example:
        >>> parse_duration("PT8H30M")
        510
        >>> parse_duration("8 hours") is None
        True
    """
    if not duration or not isinstance(duration, str):
        return None

    match = _DURATION_RE.match(duration.strip().upper())
    if not match or not (match.group("hours") or match.group("minutes")):
        return None

    days = int(match.group("days") or 0)
    hours = int(match.group("hours") or 0)
    minutes = int(match.group("minutes") or 0)
    return days * 24 * 60 + hours * 60 + minutes


def local_hour(timestamp: Optional[datetime]) -> Optional[int]:
    """
    Hour of day (0-23) at the place the timestamp was recorded

    An aware datetime keeps its own offset; it is not converted.
    """
    if timestamp is None:
        return None
    return timestamp.hour


def layover_hours(arrival: datetime, next_departure: datetime) -> float:
    """
    Gap between arriving on one segment and departing on the next

    Aware pairs are subtracted as instants. If either side is naive,
    both wall-clock readings are compared as written.
    """
    if arrival.tzinfo is None or next_departure.tzinfo is None:
        arrival = arrival.replace(tzinfo=None)
        next_departure = next_departure.replace(tzinfo=None)
    return (next_departure - arrival).total_seconds() / 3600


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives"""
    return int(math.floor(value + 0.5))
