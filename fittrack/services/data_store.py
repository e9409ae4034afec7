"""Persistence of per-user workouts, records and measurements."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from fittrack.database import SessionLocal
from fittrack.models.database_models import (
    BodyMeasurement,
    ExerciseCatalog,
    ExerciseProgress,
    PersonalRecord,
    Profile,
    Workout,
    WorkoutExercise,
)
from fittrack.models.schemas import (
    BodyMeasurementCreate,
    ExerciseProgressCreate,
    PersonalRecordCreate,
    PersonalRecordEntry,
    ReminderSettingsUpdate,
    WorkoutCreate,
    WorkoutRecord,
)
from fittrack.services.normalization import normalize_records, normalize_workouts
from fittrack.services.timeutils import utc_now


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the dashboard aggregation needs for one user, fetched at once."""

    user_id: str
    workouts: list[WorkoutRecord] = field(default_factory=list)
    records: list[PersonalRecordEntry] = field(default_factory=list)


def workout_row(workout: Workout) -> dict[str, Any]:
    """Flatten a Workout into a raw row, keeping legacy name-only exercises as strings."""
    if workout.exercises:
        exercises: list[Any] = [
            {"name": e.name, "sets": e.sets, "reps": e.reps, "weight": e.weight}
            for e in workout.exercises
        ]
    else:
        exercises = list(workout.legacy_exercises or [])
    return {
        "id": workout.id,
        "name": workout.name,
        "occurred_at": workout.occurred_at,
        "duration": workout.duration,
        "intensity": workout.intensity,
        "exercises": exercises,
        "notes": workout.notes,
    }


class WorkoutStore:
    """CRUD access to a user's fitness data."""

    def __init__(self, db: Session | None = None):
        """Initialize with optional database session."""
        self.db = db or SessionLocal()

    # Workouts
    def list_workouts(self, user_id: str) -> list[Workout]:
        stmt = (
            select(Workout)
            .where(Workout.user_id == user_id)
            .options(selectinload(Workout.exercises))
            .order_by(Workout.occurred_at.desc())
        )
        return list(self.db.scalars(stmt))

    def get_workout(self, user_id: str, workout_id: str) -> Workout | None:
        stmt = select(Workout).where(Workout.id == workout_id, Workout.user_id == user_id)
        return self.db.scalars(stmt).first()

    def create_workout(self, payload: WorkoutCreate) -> Workout:
        workout = Workout(
            user_id=payload.user_id,
            name=payload.name,
            occurred_at=payload.occurred_at or utc_now(),
            duration=payload.duration,
            intensity=payload.intensity,
            notes=payload.notes,
        )
        workout.exercises = [
            WorkoutExercise(
                position=index,
                name=entry.name,
                sets=entry.sets,
                reps=entry.reps,
                weight=entry.weight,
            )
            for index, entry in enumerate(payload.exercises)
            if entry.name.strip()
        ]
        self.db.add(workout)
        self.db.flush()
        logger.info(
            "Workout logged | user=%s id=%s exercises=%d",
            payload.user_id,
            workout.id,
            len(workout.exercises),
        )
        return workout

    def delete_workout(self, user_id: str, workout_id: str) -> bool:
        """Delete a workout and its exercises. Returns False when it does not exist."""
        workout = self.get_workout(user_id, workout_id)
        if workout is None:
            return False
        # The delete-orphan cascade removes exercise rows before the workout row.
        self.db.delete(workout)
        self.db.flush()
        logger.info("Workout deleted | user=%s id=%s", user_id, workout_id)
        return True

    # Personal records
    def list_records(self, user_id: str) -> list[PersonalRecord]:
        stmt = (
            select(PersonalRecord)
            .where(PersonalRecord.user_id == user_id)
            .order_by(PersonalRecord.achieved_at.desc())
        )
        return list(self.db.scalars(stmt))

    def create_record(self, payload: PersonalRecordCreate) -> PersonalRecord:
        record = PersonalRecord(
            user_id=payload.user_id,
            exercise=payload.exercise,
            value=payload.value,
            previous_value=payload.previous_value,
            achieved_at=payload.achieved_at or utc_now(),
        )
        self.db.add(record)
        self.db.flush()
        logger.info("Personal record saved | user=%s exercise=%s", payload.user_id, payload.exercise)
        return record

    def delete_record(self, user_id: str, record_id: str) -> bool:
        record = self.db.scalars(
            select(PersonalRecord).where(PersonalRecord.id == record_id, PersonalRecord.user_id == user_id)
        ).first()
        if record is None:
            return False
        self.db.delete(record)
        self.db.flush()
        return True

    # Progress and measurements
    def list_exercise_progress(self, user_id: str, exercise_id: int | None = None) -> list[ExerciseProgress]:
        stmt = select(ExerciseProgress).where(ExerciseProgress.user_id == user_id)
        if exercise_id is not None:
            stmt = stmt.where(ExerciseProgress.exercise_id == exercise_id)
        return list(self.db.scalars(stmt.order_by(ExerciseProgress.recorded_at)))

    def create_exercise_progress(self, payload: ExerciseProgressCreate) -> ExerciseProgress:
        if self.db.get(ExerciseCatalog, payload.exercise_id) is None:
            raise LookupError(f"Unknown exercise id {payload.exercise_id}")
        row = ExerciseProgress(
            user_id=payload.user_id,
            exercise_id=payload.exercise_id,
            workout_id=payload.workout_id,
            recorded_at=payload.recorded_at or utc_now(),
            weight=payload.weight,
            reps=payload.reps,
            sets=payload.sets,
            duration=payload.duration,
            notes=payload.notes,
        )
        self.db.add(row)
        self.db.flush()
        return row

    def list_body_measurements(self, user_id: str) -> list[BodyMeasurement]:
        stmt = (
            select(BodyMeasurement)
            .where(BodyMeasurement.user_id == user_id)
            .order_by(BodyMeasurement.recorded_at)
        )
        return list(self.db.scalars(stmt))

    def create_body_measurement(self, payload: BodyMeasurementCreate) -> BodyMeasurement:
        values = payload.model_dump(exclude={"user_id", "recorded_at"})
        row = BodyMeasurement(user_id=payload.user_id, recorded_at=payload.recorded_at or utc_now(), **values)
        self.db.add(row)
        self.db.flush()
        return row

    def list_catalog(self) -> list[ExerciseCatalog]:
        return list(self.db.scalars(select(ExerciseCatalog).order_by(ExerciseCatalog.name)))

    # Dashboard
    def load_snapshot(self, user_id: str) -> DashboardSnapshot:
        """Fetch and normalize every workout and record for ``user_id``."""
        workouts = normalize_workouts(workout_row(w) for w in self.list_workouts(user_id))
        records = normalize_records(self.list_records(user_id))
        logger.debug(
            "Loaded snapshot | user=%s workouts=%d records=%d",
            user_id,
            len(workouts),
            len(records),
        )
        return DashboardSnapshot(user_id=user_id, workouts=workouts, records=records)

    # Reminders
    def has_workout_since(self, user_id: str, since: datetime) -> bool:
        stmt = (
            select(Workout.id)
            .where(Workout.user_id == user_id, Workout.occurred_at >= since)
            .limit(1)
        )
        return self.db.scalars(stmt).first() is not None

    def profiles_due_for_reminder(self, slot: str) -> list[Profile]:
        """Profiles with reminders on whose reminder time falls in ``slot`` (HH:MM)."""
        stmt = select(Profile).where(
            Profile.reminder_enabled.is_(True),
            Profile.reminder_time.like(f"{slot}%"),
        )
        return list(self.db.scalars(stmt))

    def update_reminder_settings(self, user_id: str, payload: ReminderSettingsUpdate) -> Profile:
        profile = self.db.get(Profile, user_id)
        if profile is None:
            profile = Profile(id=user_id)
            self.db.add(profile)
        profile.reminder_enabled = payload.reminder_enabled
        profile.reminder_time = f"{payload.reminder_time}:00"
        if payload.email is not None:
            profile.email = payload.email
        if payload.username is not None:
            profile.username = payload.username
        self.db.flush()
        return profile
