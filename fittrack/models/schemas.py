"""Pydantic models for the dashboard data model and API payloads."""
from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


_REMINDER_TIME = re.compile(r"^([01]\d|2[0-3]):(00|30)(:00)?$")

EXERCISE_METRICS = ("weight", "reps", "sets")
BODY_METRICS = ("weight", "body_fat_percentage", "chest", "waist", "hips", "biceps", "thighs")

METRIC_LABELS: dict[str, str] = {
    "weight": "Weight (lbs)",
    "reps": "Repetitions",
    "sets": "Sets",
    "duration": "Duration (min)",
    "body_fat_percentage": "Body Fat %",
    "chest": "Chest (in)",
    "waist": "Waist (in)",
    "hips": "Hips (in)",
    "biceps": "Biceps (in)",
    "thighs": "Thighs (in)",
}


def _blank_to_none(value):
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return str(value)


class ExerciseEntry(BaseModel):
    """
    One exercise inside a workout.

    Historical rows store exercises either as plain names or as detailed
    objects; a plain string is accepted here and becomes an entry with only
    the name set.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    name: str
    sets: str | None = None
    reps: str | None = None
    weight: str | None = None

    @model_validator(mode="before")
    @classmethod
    def accept_legacy_name(cls, data):
        if isinstance(data, str):
            return {"name": data}
        return data

    @field_validator("sets", "reps", "weight", mode="before")
    @classmethod
    def free_text(cls, value):
        return _blank_to_none(value)


class WorkoutRecord(BaseModel):
    """A logged workout as the engine sees it."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    name: str
    occurred_at: datetime
    duration: str | None = None
    intensity: str | None = None
    exercises: list[ExerciseEntry] = []
    notes: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, value):
        return str(value)

    @field_validator("exercises", mode="before")
    @classmethod
    def missing_exercises(cls, value):
        # Anything that is not a list (null, a stray object) means "no exercises".
        if isinstance(value, (list, tuple)):
            return list(value)
        return []

    @field_validator("duration", "intensity", "notes", mode="before")
    @classmethod
    def optional_text(cls, value):
        return _blank_to_none(value)


class PersonalRecordEntry(BaseModel):
    """A personal best for one exercise."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    exercise: str
    value: str
    previous_value: str | None = None
    achieved_at: datetime

    @field_validator("id", "value", mode="before")
    @classmethod
    def as_text(cls, value):
        return str(value)

    @field_validator("previous_value", mode="before")
    @classmethod
    def optional_text(cls, value):
        return _blank_to_none(value)


class MetricPoint(BaseModel):
    """A dated observation of one or more numeric metrics."""

    model_config = ConfigDict(frozen=True)

    recorded_at: datetime
    metrics: dict[str, float | None] = {}

    def value(self, key: str) -> float | None:
        return self.metrics.get(key)


class ChartPoint(BaseModel):
    """One ``{label, value}`` pair of a chart series."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: float | None = None


class ChartSeriesResponse(BaseModel):
    """Serialized chart series returned by the API."""

    metric_key: str
    metric_label: str
    range_token: str
    start: datetime
    end: datetime
    points: list[ChartPoint]


class DashboardSummary(BaseModel):
    """Summary numbers for the dashboard cards, derived fresh on every fetch."""

    model_config = ConfigDict(frozen=True)

    total_workouts: int = Field(ge=0)
    total_minutes: int = Field(ge=0)
    total_time: str
    current_streak: int = Field(ge=0)
    new_records: list[PersonalRecordEntry] = []
    new_record_count: int = Field(ge=0, default=0)
    recent_workouts: list[WorkoutRecord] = []


# API payloads
class WorkoutCreate(BaseModel):
    """Schema for logging a new workout."""

    user_id: str
    name: str = Field(min_length=1, max_length=200)
    occurred_at: datetime | None = None
    duration: str | None = None
    intensity: str | None = None
    exercises: list[ExerciseEntry] = []
    notes: str | None = None


class PersonalRecordCreate(BaseModel):
    """Schema for adding a personal record."""

    user_id: str
    exercise: str = Field(min_length=1, max_length=200)
    value: str = Field(min_length=1, max_length=100)
    previous_value: str | None = None
    achieved_at: datetime | None = None


class ExerciseProgressCreate(BaseModel):
    """Schema for an exercise progress entry; at least one metric is required."""

    user_id: str
    exercise_id: int
    workout_id: str | None = None
    recorded_at: datetime | None = None
    weight: float | None = Field(default=None, ge=0)
    reps: int | None = Field(default=None, ge=0)
    sets: int | None = Field(default=None, ge=0)
    duration: int | None = Field(default=None, ge=0)
    notes: str | None = None

    @model_validator(mode="after")
    def require_metric(self) -> "ExerciseProgressCreate":
        if self.weight is None and self.reps is None and self.sets is None:
            raise ValueError("Provide at least one measurement (weight, reps, or sets)")
        return self


class BodyMeasurementCreate(BaseModel):
    """Schema for a body measurement entry; at least one measurement is required."""

    user_id: str
    recorded_at: datetime | None = None
    weight: float | None = Field(default=None, ge=0)
    body_fat_percentage: float | None = Field(default=None, ge=0, le=100)
    chest: float | None = Field(default=None, ge=0)
    waist: float | None = Field(default=None, ge=0)
    hips: float | None = Field(default=None, ge=0)
    biceps: float | None = Field(default=None, ge=0)
    thighs: float | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def require_measurement(self) -> "BodyMeasurementCreate":
        if all(getattr(self, key) is None for key in BODY_METRICS):
            raise ValueError("Provide at least one measurement")
        return self


class ReminderSettingsUpdate(BaseModel):
    """Schema for turning daily reminders on or off."""

    reminder_enabled: bool
    reminder_time: str = Field(default="20:00", description="HH:MM on a half-hour boundary")
    email: str | None = None
    username: str | None = None

    @field_validator("reminder_time")
    @classmethod
    def half_hour_slot(cls, value: str) -> str:
        if not _REMINDER_TIME.match(value):
            raise ValueError("reminder_time must be HH:MM on a half-hour boundary")
        return value[:5]
