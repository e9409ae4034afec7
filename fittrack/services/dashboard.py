"""Compose the derived metrics into the dashboard summary."""
from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import Iterable

from dateutil.relativedelta import relativedelta

from fittrack.models.schemas import DashboardSummary, PersonalRecordEntry, WorkoutRecord
from fittrack.services.duration import format_minutes, total_minutes
from fittrack.services.recency import DEFAULT_RECENCY_WINDOW, classify_new_records
from fittrack.services.streaks import DEFAULT_GRACE_DAYS, DEFAULT_MAX_LOOKBACK_DAYS, calculate_streak
from fittrack.services.timeutils import coerce_instant


logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 5


def compute_dashboard_summary(
    workouts: Iterable[WorkoutRecord],
    records: Iterable[PersonalRecordEntry],
    now: datetime,
    *,
    tz: tzinfo = timezone.utc,
    recency: relativedelta = DEFAULT_RECENCY_WINDOW,
    streak_grace_days: int = DEFAULT_GRACE_DAYS,
    streak_max_lookback_days: int = DEFAULT_MAX_LOOKBACK_DAYS,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
) -> DashboardSummary:
    """
    Build the dashboard summary from a full snapshot of a user's data.

    Always recomputed from the whole collection; nothing is carried over from
    a previous call. Depends only on its arguments; the tuning defaults are the
    module constants, and configured values are passed in by the caller.

    Args:
        workouts: Every workout the user has logged
        records: Every personal record the user has logged
        now: Current instant
        tz: Timezone for calendar days

    Returns:
        DashboardSummary with totals, streak, new records and recent workouts
    """
    workouts = list(workouts)
    records = list(records)

    minutes = total_minutes(w.duration for w in workouts)
    streak = calculate_streak(
        (w.occurred_at for w in workouts),
        now,
        tz=tz,
        grace_days=streak_grace_days,
        max_lookback_days=streak_max_lookback_days,
    )
    new_records = classify_new_records(records, now, recency, tz=tz)

    # Newest first; id breaks ties so the order never depends on input order.
    recent = sorted(
        workouts,
        key=lambda w: (coerce_instant(w.occurred_at, tz), w.id),
        reverse=True,
    )[:recent_limit]

    logger.debug(
        "Dashboard summary | workouts=%d minutes=%d streak=%d new_records=%d",
        len(workouts),
        minutes,
        streak,
        len(new_records),
    )

    return DashboardSummary(
        total_workouts=len(workouts),
        total_minutes=minutes,
        total_time=format_minutes(minutes),
        current_streak=streak,
        new_records=new_records,
        new_record_count=len(new_records),
        recent_workouts=recent,
    )
