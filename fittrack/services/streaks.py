"""Consecutive-day workout streak calculation."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, tzinfo
from typing import Iterable

from fittrack.services.timeutils import local_day


logger = logging.getLogger(__name__)

DEFAULT_GRACE_DAYS = 1
DEFAULT_MAX_LOOKBACK_DAYS = 365


def calculate_streak(
    timestamps: Iterable[object],
    now: datetime,
    tz: tzinfo | None = None,
    grace_days: int = DEFAULT_GRACE_DAYS,
    max_lookback_days: int = DEFAULT_MAX_LOOKBACK_DAYS,
) -> int:
    """
    Count consecutive calendar days with at least one workout.

    The streak ends at the most recent workout day, which must be today or at
    most ``grace_days`` before it; otherwise the streak is already broken.
    From there it walks backwards one day at a time until a day without a
    workout, giving up after ``max_lookback_days`` steps.

    Args:
        timestamps: Workout instants, in any order, duplicates allowed
        now: Current instant; its local day is "today"
        tz: Timezone defining calendar days (UTC when omitted)
        grace_days: How many days the latest workout may lag behind today
        max_lookback_days: Upper bound on backward steps

    Returns:
        Streak length in days (0 when there is no active streak)

    Raises:
        InvalidTimestampError: If any timestamp is non-finite or unparseable

    Example:
        >>> now = datetime(2024, 3, 15, 9, 0)
        >>> calculate_streak([now, now - timedelta(days=1)], now)
        2
    """
    today = local_day(now, tz)
    days = {local_day(ts, tz) for ts in timestamps}
    # Future-dated entries say nothing about the current streak.
    days = {day for day in days if day <= today}

    if not days:
        return 0

    latest = max(days)
    if (today - latest).days > grace_days:
        logger.debug("Streak broken | latest=%s today=%s", latest, today)
        return 0

    streak = 1
    check_day = latest - timedelta(days=1)
    for _ in range(max_lookback_days):
        if check_day not in days:
            break
        streak += 1
        check_day -= timedelta(days=1)

    return streak
