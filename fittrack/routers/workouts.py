"""Workout, personal record and measurement management API endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from fittrack.dependencies import get_refresher, get_store
from fittrack.exceptions import FitTrackError
from fittrack.models.schemas import (
    BodyMeasurementCreate,
    ExerciseProgressCreate,
    PersonalRecordCreate,
    PersonalRecordEntry,
    ReminderSettingsUpdate,
    WorkoutCreate,
)
from fittrack.services.data_store import WorkoutStore, workout_row
from fittrack.services.normalization import normalize_records, normalize_workouts
from fittrack.services.refresh import DashboardRefresher


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["workouts"])


async def _refreshed_dashboard(refresher: DashboardRefresher, store: WorkoutStore, user_id: str) -> dict:
    """Recompute the caller's dashboard after a change so the UI can update in place."""
    store.db.flush()
    summary = await refresher.refresh(user_id)
    return summary.model_dump(mode="json")


@router.get("/workouts")
def list_workouts(
    user_id: str = Query(min_length=1),
    store: WorkoutStore = Depends(get_store),
) -> dict:
    """
    List a user's workouts, newest first.

    Returns:
        Dictionary with count and normalized workouts
    """
    try:
        workouts = normalize_workouts(workout_row(w) for w in store.list_workouts(user_id))
    except FitTrackError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {
        "count": len(workouts),
        "workouts": [w.model_dump(mode="json") for w in workouts],
    }


@router.post("/workouts", status_code=201)
async def create_workout(
    payload: WorkoutCreate,
    store: WorkoutStore = Depends(get_store),
    refresher: DashboardRefresher = Depends(get_refresher),
) -> dict:
    """Log a workout and return it together with the recomputed dashboard."""
    workout = store.create_workout(payload)
    created = normalize_workouts([workout_row(workout)])[0]
    return {
        "workout": created.model_dump(mode="json"),
        "dashboard": await _refreshed_dashboard(refresher, store, payload.user_id),
    }


@router.delete("/workouts/{workout_id}")
async def delete_workout(
    workout_id: str,
    user_id: str = Query(min_length=1),
    store: WorkoutStore = Depends(get_store),
    refresher: DashboardRefresher = Depends(get_refresher),
) -> dict:
    """
    Delete a workout and its exercises.

    Raises:
        HTTPException: 404 if the workout does not exist for this user
    """
    if not store.delete_workout(user_id, workout_id):
        raise HTTPException(status_code=404, detail="Workout not found")
    return {
        "status": "success",
        "deleted": workout_id,
        "dashboard": await _refreshed_dashboard(refresher, store, user_id),
    }


@router.get("/records")
def list_records(
    user_id: str = Query(min_length=1),
    store: WorkoutStore = Depends(get_store),
) -> dict:
    """List a user's personal records, newest first."""
    try:
        records = normalize_records(store.list_records(user_id))
    except FitTrackError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {
        "count": len(records),
        "records": [r.model_dump(mode="json") for r in records],
    }


@router.post("/records", status_code=201)
async def create_record(
    payload: PersonalRecordCreate,
    store: WorkoutStore = Depends(get_store),
    refresher: DashboardRefresher = Depends(get_refresher),
) -> dict:
    """Save a personal record and return the recomputed dashboard."""
    record = store.create_record(payload)
    return {
        "record": PersonalRecordEntry.model_validate(record).model_dump(mode="json"),
        "dashboard": await _refreshed_dashboard(refresher, store, payload.user_id),
    }


@router.delete("/records/{record_id}")
async def delete_record(
    record_id: str,
    user_id: str = Query(min_length=1),
    store: WorkoutStore = Depends(get_store),
    refresher: DashboardRefresher = Depends(get_refresher),
) -> dict:
    """Delete a personal record."""
    if not store.delete_record(user_id, record_id):
        raise HTTPException(status_code=404, detail="Record not found")
    return {
        "status": "success",
        "deleted": record_id,
        "dashboard": await _refreshed_dashboard(refresher, store, user_id),
    }


@router.post("/progress", status_code=201)
def create_exercise_progress(
    payload: ExerciseProgressCreate,
    store: WorkoutStore = Depends(get_store),
) -> dict:
    """Add an exercise progress entry for a catalog exercise."""
    try:
        row = store.create_exercise_progress(payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"status": "success", "id": row.id, "recorded_at": row.recorded_at.isoformat()}


@router.post("/measurements", status_code=201)
def create_body_measurement(
    payload: BodyMeasurementCreate,
    store: WorkoutStore = Depends(get_store),
) -> dict:
    """Add a body measurement entry."""
    row = store.create_body_measurement(payload)
    return {"status": "success", "id": row.id, "recorded_at": row.recorded_at.isoformat()}


@router.get("/exercises")
def list_exercise_catalog(store: WorkoutStore = Depends(get_store)) -> list[dict]:
    """List the exercise catalog used by the progress forms."""
    return [
        {
            "id": e.id,
            "name": e.name,
            "category": e.category,
            "muscle_group": e.muscle_group,
            "description": e.description,
        }
        for e in store.list_catalog()
    ]


@router.put("/profile/{user_id}/reminders")
def update_reminder_settings(
    user_id: str,
    payload: ReminderSettingsUpdate,
    store: WorkoutStore = Depends(get_store),
) -> dict:
    """Turn daily reminder emails on or off and pick the half-hour slot."""
    profile = store.update_reminder_settings(user_id, payload)
    logger.info(
        "Reminder settings updated | user=%s enabled=%s time=%s",
        user_id,
        profile.reminder_enabled,
        profile.reminder_time,
    )
    return {
        "user_id": profile.id,
        "reminder_enabled": profile.reminder_enabled,
        "reminder_time": profile.reminder_time,
    }
