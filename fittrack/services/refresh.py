"""Fetch-then-aggregate refresh of the dashboard summary."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from fastapi.concurrency import run_in_threadpool

from fittrack.config import Settings, get_settings
from fittrack.models.schemas import DashboardSummary
from fittrack.services.dashboard import compute_dashboard_summary
from fittrack.services.data_store import DashboardSnapshot
from fittrack.services.recency import recency_window
from fittrack.services.timeutils import utc_now


logger = logging.getLogger(__name__)

SnapshotLoader = Callable[[str], DashboardSnapshot]
SummaryCallback = Callable[[DashboardSummary], None]


class DashboardRefresher:
    """
    Recompute a user's dashboard summary from a full, freshly fetched snapshot.

    The caller owns the refresh lifecycle: it decides when to refresh (initial
    load, after a create or delete) and receives the result through the
    returned value or an ``on_summary`` callback. Overlapping refreshes are not
    coalesced; whichever finishes last is what the caller ends up showing.
    """

    def __init__(
        self,
        load_snapshot: SnapshotLoader,
        clock: Callable[[], datetime] = utc_now,
        settings: Settings | None = None,
    ):
        self._load_snapshot = load_snapshot
        self._clock = clock
        self.settings = settings or get_settings()

    async def refresh(self, user_id: str, on_summary: SummaryCallback | None = None) -> DashboardSummary:
        # The fetch blocks on the database; aggregation runs only once it is complete.
        snapshot = await run_in_threadpool(self._load_snapshot, user_id)
        settings = self.settings
        summary = compute_dashboard_summary(
            snapshot.workouts,
            snapshot.records,
            self._clock(),
            tz=settings.tzinfo,
            recency=recency_window(settings.record_recency_months),
            streak_grace_days=settings.streak_grace_days,
            streak_max_lookback_days=settings.streak_max_lookback_days,
            recent_limit=settings.recent_workout_limit,
        )
        logger.info(
            "Dashboard refreshed | user=%s workouts=%d streak=%d",
            user_id,
            summary.total_workouts,
            summary.current_streak,
        )
        if on_summary is not None:
            on_summary(summary)
        return summary
