"""Parsing and formatting of free-text workout durations."""

from __future__ import annotations

import logging
import re
from typing import Iterable


logger = logging.getLogger(__name__)

MINUTES_PER_HOUR = 60

# A unit only counts when a whole number sits right before it; "hr" inside
# "threshold" or "min" inside "admin" is ignored.
_HOURS_SEGMENT = re.compile(r"(?<![\d.])(-?\d+)\s*(?:hours?|hrs?)\b", re.IGNORECASE)
_MINUTES_SEGMENT = re.compile(r"(?<![\d.])(-?\d+)\s*(?:minutes?|mins?)\b", re.IGNORECASE)
_BARE_NUMBER = re.compile(r"^\s*(-?\d+)\s*$")


def _segment_value(match: re.Match[str] | None) -> int:
    """Numeric value of a matched segment; negatives clamp to zero."""
    if match is None:
        return 0
    return max(int(match.group(1)), 0)


def parse_duration_minutes(duration: str | None) -> int:
    """
    Convert a free-text duration into whole minutes.

    Understands ``"<m> min"`` and ``"<h> hr <m> min"``; either segment may be
    missing. A bare number is read as minutes, also when it trails an hours
    segment (``"1 hr 30"``). Text that is not a number-plus-unit contributes
    zero, so this never raises.

    Example:
        >>> parse_duration_minutes("1 hr 30 min")
        90
        >>> parse_duration_minutes("45 min threshold")
        45
        >>> parse_duration_minutes("soon")
        0
    """
    if duration is None:
        return 0

    text = str(duration).strip()
    if not text:
        return 0

    hours_match = _HOURS_SEGMENT.search(text)
    remainder = text[hours_match.end():] if hours_match else text

    minutes_match = _MINUTES_SEGMENT.search(remainder) or _BARE_NUMBER.match(remainder)
    if hours_match is None and minutes_match is None:
        logger.debug("Ignoring unparseable duration %r", duration)

    return _segment_value(hours_match) * MINUTES_PER_HOUR + _segment_value(minutes_match)


def total_minutes(durations: Iterable[str | None]) -> int:
    """Sum the parsed minutes of many duration strings."""
    return sum(parse_duration_minutes(d) for d in durations)


def format_minutes(total: int) -> str:
    """
    Format a minute count for display.

    Example:
        >>> format_minutes(45)
        '45 min'
        >>> format_minutes(60)
        '1 hr'
        >>> format_minutes(150)
        '2 hrs 30 min'
    """
    total = max(int(total), 0)
    if total < MINUTES_PER_HOUR:
        return f"{total} min"

    hours, minutes = divmod(total, MINUTES_PER_HOUR)
    unit = "hr" if hours == 1 else "hrs"
    if minutes == 0:
        return f"{hours} {unit}"
    return f"{hours} {unit} {minutes} min"
