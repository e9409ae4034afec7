"""Helpers for turning raw timestamps into instants and local calendar days."""
from __future__ import annotations

import math
from datetime import date, datetime, time, timezone, tzinfo

from fittrack.exceptions import InvalidTimestampError


def utc_now() -> datetime:
    """Return the current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_iso_instant(value: str) -> datetime:
    """Parse an ISO-8601 string, accepting the trailing ``Z`` the data store emits."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise InvalidTimestampError(value) from exc


def coerce_instant(value: object, tz: tzinfo | None = None) -> datetime:
    """
    Convert a raw timestamp to a timezone-aware datetime.

    Accepts datetimes, dates (local midnight), ISO-8601 strings and POSIX epoch
    seconds. Naive values are interpreted in ``tz`` (UTC when not given).

    Raises:
        InvalidTimestampError: For NaN/infinite numbers, unparseable strings,
            or unsupported types.
    """
    zone = tz or timezone.utc

    if isinstance(value, datetime):
        instant = value
    elif isinstance(value, date):
        instant = datetime.combine(value, time.min)
    elif isinstance(value, str):
        instant = parse_iso_instant(value)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            raise InvalidTimestampError(value, "non-finite timestamp")
        try:
            return datetime.fromtimestamp(value, tz=zone)
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidTimestampError(value, "timestamp out of range") from exc
    else:
        raise InvalidTimestampError(value, "unsupported timestamp type")

    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=zone)
    return instant


def local_day(value: object, tz: tzinfo | None = None) -> date:
    """Return the calendar day of ``value`` as seen in ``tz``."""
    zone = tz or timezone.utc
    return coerce_instant(value, zone).astimezone(zone).date()


def start_of_local_day(now: datetime, tz: tzinfo | None = None) -> datetime:
    """Midnight of the local day containing ``now``, as an aware datetime."""
    zone = tz or timezone.utc
    today = local_day(now, zone)
    return datetime.combine(today, time.min, tzinfo=zone)
