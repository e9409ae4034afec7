"""Resolve raw data-store rows into the typed dashboard data model."""
from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ValidationError

from fittrack.exceptions import RowValidationError
from fittrack.models.schemas import (
    BODY_METRICS,
    EXERCISE_METRICS,
    ExerciseEntry,
    MetricPoint,
    PersonalRecordEntry,
    WorkoutRecord,
)


logger = logging.getLogger(__name__)


def _row_id(row: Any) -> Any:
    if isinstance(row, Mapping):
        return row.get("id")
    return getattr(row, "id", None)


def _validate(model: type[BaseModel], kind: str, row: Any):
    try:
        if isinstance(row, Mapping):
            return model.model_validate(dict(row))
        return model.model_validate(row, from_attributes=True)
    except ValidationError as exc:
        raise RowValidationError(kind, _row_id(row), str(exc)) from exc


def normalize_exercise(raw: Any) -> ExerciseEntry:
    """Accept either a bare exercise name or a detailed exercise object."""
    return _validate(ExerciseEntry, "exercise", raw)


def normalize_workouts(rows: Iterable[Any]) -> list[WorkoutRecord]:
    """Turn workout rows (dicts or ORM objects) into ``WorkoutRecord`` models."""
    return [_validate(WorkoutRecord, "workout", row) for row in rows]


def normalize_records(rows: Iterable[Any]) -> list[PersonalRecordEntry]:
    """Turn personal-record rows into ``PersonalRecordEntry`` models."""
    return [_validate(PersonalRecordEntry, "personal record", row) for row in rows]


def to_metric_value(value: Any) -> float | None:
    """
    Coerce a stored metric to a float.

    Missing, non-numeric and non-finite values become ``None`` so charts can
    tell "no data" apart from zero.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.debug("Dropping non-numeric metric value %r", value)
        return None
    if not math.isfinite(number):
        return None
    return number


def _field(row: Any, key: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def _flatten(rows: Iterable[Any], keys: Iterable[str], kind: str) -> list[MetricPoint]:
    keys = tuple(keys)
    points = []
    for row in rows:
        recorded_at = _field(row, "recorded_at") or _field(row, "date")
        if recorded_at is None:
            raise RowValidationError(kind, _row_id(row), "missing date")
        metrics = {key: to_metric_value(_field(row, key)) for key in keys}
        try:
            points.append(MetricPoint(recorded_at=recorded_at, metrics=metrics))
        except ValidationError as exc:
            raise RowValidationError(kind, _row_id(row), str(exc)) from exc
    return points


def flatten_exercise_progress(rows: Iterable[Any], exercise_id: Any | None = None) -> list[MetricPoint]:
    """
    Flatten exercise progress rows into metric points.

    Args:
        rows: Progress rows carrying ``weight``, ``reps``, ``sets``, ``duration``
        exercise_id: Keep only rows for this exercise (all rows when None)
    """
    if exercise_id is not None:
        wanted = str(exercise_id)
        rows = [row for row in rows if str(_field(row, "exercise_id")) == wanted]
    return _flatten(rows, EXERCISE_METRICS + ("duration",), "exercise progress")


def flatten_body_measurements(rows: Iterable[Any]) -> list[MetricPoint]:
    """Flatten body measurement rows into metric points."""
    return _flatten(rows, BODY_METRICS, "body measurement")
