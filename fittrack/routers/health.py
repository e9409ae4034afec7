"""Router exposing basic system endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from fittrack.config import get_settings
from fittrack.database import get_db
from fittrack.models.database_models import Workout


logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/status")
async def get_status() -> dict[str, str]:
    """Return a minimal status payload."""
    return {"status": "online", "timezone": get_settings().timezone}


@router.get("/database")
def get_database_status(db: Session = Depends(get_db)) -> dict:
    """
    Check that the data store answers queries.

    Returns:
        dict: {"database": "ok", "workouts": total workout rows}
    """
    try:
        count = db.scalar(select(func.count()).select_from(Workout))
    except Exception:
        logger.exception("Database health check failed")
        db.rollback()
        raise HTTPException(status_code=500, detail="Database unavailable")
    return {"database": "ok", "workouts": count or 0}
