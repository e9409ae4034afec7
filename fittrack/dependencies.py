"""FastAPI dependencies shared by the routers."""
from __future__ import annotations

from datetime import datetime
from typing import Callable

from fastapi import Depends
from sqlalchemy.orm import Session

from fittrack.database import get_db
from fittrack.services.data_store import WorkoutStore
from fittrack.services.refresh import DashboardRefresher
from fittrack.services.timeutils import utc_now


def get_clock() -> Callable[[], datetime]:
    """Source of "now"; overridden in tests to pin the date."""
    return utc_now


def get_store(db: Session = Depends(get_db)) -> WorkoutStore:
    return WorkoutStore(db)


def get_refresher(
    store: WorkoutStore = Depends(get_store),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> DashboardRefresher:
    return DashboardRefresher(store.load_snapshot, clock=clock)
