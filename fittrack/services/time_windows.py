"""Map chart range tokens to concrete time windows."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from dateutil.relativedelta import relativedelta


logger = logging.getLogger(__name__)

DEFAULT_RANGE_TOKEN = "30days"

# Month-based tokens use calendar-month arithmetic, not 30-day multiples.
RANGE_DELTAS: dict[str, relativedelta] = {
    "7days": relativedelta(days=7),
    "30days": relativedelta(days=30),
    "3months": relativedelta(months=3),
    "6months": relativedelta(months=6),
    "1year": relativedelta(years=1),
}

RANGE_LABELS: dict[str, str] = {
    "7days": "Last 7 days",
    "30days": "Last 30 days",
    "3months": "Last 3 months",
    "6months": "Last 6 months",
    "1year": "Last year",
}


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive ``[start, end]`` chart window."""

    start: datetime
    end: datetime
    token: str

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


def normalize_range_token(token: str | None, default: str = DEFAULT_RANGE_TOKEN) -> str:
    """Return ``token`` if known, otherwise the default token."""
    if token in RANGE_DELTAS:
        return token
    if token is None:
        return default if default in RANGE_DELTAS else DEFAULT_RANGE_TOKEN
    logger.warning("Unknown time range token %r - falling back to %s", token, default)
    return default if default in RANGE_DELTAS else DEFAULT_RANGE_TOKEN


def resolve_time_window(token: str | None, now: datetime, default: str = DEFAULT_RANGE_TOKEN) -> TimeWindow:
    """
    Resolve a range token to a window ending at ``now``.

    Example:
        >>> resolve_time_window("7days", datetime(2024, 3, 15)).start
        datetime.datetime(2024, 3, 8, 0, 0)
    """
    resolved = normalize_range_token(token, default)
    return TimeWindow(start=now - RANGE_DELTAS[resolved], end=now, token=resolved)
