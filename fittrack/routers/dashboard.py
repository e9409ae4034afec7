"""API endpoints for the dashboard summary and duration helpers."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from fittrack.dependencies import get_refresher
from fittrack.exceptions import FitTrackError
from fittrack.models.schemas import DashboardSummary
from fittrack.services.duration import format_minutes, parse_duration_minutes
from fittrack.services.refresh import DashboardRefresher


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])
duration_router = APIRouter(prefix="/api/duration", tags=["duration"])


@router.get("/summary", response_model=DashboardSummary)
async def get_dashboard_summary(
    user_id: str = Query(min_length=1),
    refresher: DashboardRefresher = Depends(get_refresher),
) -> DashboardSummary:
    """
    Get the dashboard summary for a user.

    Recomputed from the user's full workout and record history on every call.

    Returns:
        DashboardSummary: totals, streak, new personal records, recent workouts
    """
    try:
        return await refresher.refresh(user_id)
    except FitTrackError as e:
        logger.warning("Dashboard summary rejected for user %s: %s", user_id, e)
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception("Failed to build dashboard summary")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to build dashboard summary: {str(e)}"
        )


@duration_router.get("/parse")
async def parse_duration(text: str = "") -> dict[str, int | str]:
    """Parse a free-text duration into minutes (unparseable input gives 0)."""
    minutes = parse_duration_minutes(text)
    return {"text": text, "minutes": minutes}


@duration_router.get("/format")
async def format_duration(minutes: int = Query(ge=0)) -> dict[str, int | str]:
    """Format a minute count for display."""
    return {"minutes": minutes, "display": format_minutes(minutes)}
