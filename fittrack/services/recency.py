"""Flag personal records achieved within the recency window."""
from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Iterable

from dateutil.relativedelta import relativedelta

from fittrack.models.schemas import PersonalRecordEntry
from fittrack.services.timeutils import coerce_instant

DEFAULT_RECENCY_WINDOW = relativedelta(months=1)


def recency_window(months: int) -> relativedelta:
    """Build a calendar-month recency window from a configured month count."""
    return relativedelta(months=months)


def is_new_record(
    achieved_at: object,
    now: datetime,
    window: relativedelta = DEFAULT_RECENCY_WINDOW,
    tz: tzinfo | None = None,
) -> bool:
    """Return True when ``achieved_at`` is on or after ``now - window``."""
    cutoff = coerce_instant(now, tz) - window
    return coerce_instant(achieved_at, tz) >= cutoff


def classify_new_records(
    records: Iterable[PersonalRecordEntry],
    now: datetime,
    window: relativedelta = DEFAULT_RECENCY_WINDOW,
    tz: tzinfo | None = None,
) -> list[PersonalRecordEntry]:
    """Records inside the window, newest first."""
    fresh = [r for r in records if is_new_record(r.achieved_at, now, window, tz)]
    return sorted(fresh, key=lambda r: (coerce_instant(r.achieved_at, tz), r.id), reverse=True)
