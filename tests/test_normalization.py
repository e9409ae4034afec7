"""Tests for resolving raw rows into the dashboard data model."""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from fittrack.exceptions import RowValidationError
from fittrack.services.normalization import (
    flatten_body_measurements,
    flatten_exercise_progress,
    normalize_exercise,
    normalize_records,
    normalize_workouts,
    to_metric_value,
)


class TestExerciseEntries:
    """Legacy name-only exercises and detailed exercises share one shape."""

    def test_plain_name(self):
        entry = normalize_exercise("Squats")
        assert entry.name == "Squats"
        assert entry.sets is None and entry.reps is None and entry.weight is None

    def test_detailed_exercise_keeps_free_text(self):
        entry = normalize_exercise({"name": "Bench Press", "sets": 3, "reps": "8-10", "weight": "135 lbs"})
        assert entry.sets == "3"
        assert entry.reps == "8-10"
        assert entry.weight == "135 lbs"

    def test_blank_fields_become_none(self):
        entry = normalize_exercise({"name": "Plank", "sets": " ", "reps": "", "weight": None})
        assert (entry.sets, entry.reps, entry.weight) == (None, None, None)

    def test_missing_name_is_rejected(self):
        with pytest.raises(RowValidationError):
            normalize_exercise({"sets": "3"})


class TestWorkoutRows:
    """Workout rows from dicts and ORM-like objects."""

    def test_mixed_exercise_list(self):
        (workout,) = normalize_workouts([
            {
                "id": 7,
                "name": "Leg Day",
                "occurred_at": "2024-03-14T18:00:00Z",
                "duration": "60 min",
                "intensity": "High",
                "exercises": ["Squats", {"name": "Deadlifts", "sets": "3", "reps": "5", "weight": "315"}],
            }
        ])

        assert workout.id == "7"
        assert workout.occurred_at == datetime(2024, 3, 14, 18, 0, tzinfo=timezone.utc)
        assert [e.name for e in workout.exercises] == ["Squats", "Deadlifts"]
        assert workout.exercises[1].weight == "315"

    def test_non_list_exercises_become_empty(self):
        (workout,) = normalize_workouts([
            {"id": "a", "name": "Run", "occurred_at": "2024-03-14T07:00:00Z", "exercises": None}
        ])
        assert workout.exercises == []
        assert workout.duration is None

    def test_attribute_rows(self):
        row = SimpleNamespace(
            id="r1",
            exercise="Deadlift",
            value="405 lbs",
            previous_value="",
            achieved_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
        )
        (record,) = normalize_records([row])
        assert record.exercise == "Deadlift"
        assert record.previous_value is None

    def test_unparseable_date_raises(self):
        with pytest.raises(RowValidationError) as excinfo:
            normalize_workouts([{"id": "bad", "name": "Oops", "occurred_at": "yesterday-ish"}])
        assert excinfo.value.row_id == "bad"


class TestMetricFlattening:
    """Progress and measurement rows become metric points."""

    @pytest.mark.parametrize(
        "raw,expected",
        [(135, 135.0), ("17.5", 17.5), ("", None), (None, None), ("n/a", None), (float("nan"), None), (True, None)],
    )
    def test_metric_values(self, raw, expected):
        assert to_metric_value(raw) == expected

    def test_progress_rows_filtered_by_exercise(self):
        rows = [
            {"id": "1", "exercise_id": 1, "date": "2024-03-01T10:00:00Z", "weight": 135, "reps": 8, "sets": 3},
            {"id": "2", "exercise_id": 2, "date": "2024-03-02T10:00:00Z", "weight": 225, "reps": 5, "sets": 5},
        ]

        points = flatten_exercise_progress(rows, exercise_id="1")

        assert len(points) == 1
        assert points[0].metrics == {"weight": 135.0, "reps": 8.0, "sets": 3.0, "duration": None}

    def test_body_measurements(self):
        rows = [SimpleNamespace(
            id="m1",
            recorded_at=datetime(2024, 3, 8, tzinfo=timezone.utc),
            weight=178, body_fat_percentage=17.5, chest=None, waist=33.5, hips=40, biceps=None, thighs="22",
        )]

        (measurement,) = flatten_body_measurements(rows)

        assert measurement.value("waist") == 33.5
        assert measurement.value("chest") is None
        assert measurement.value("thighs") == 22.0

    def test_row_without_date_is_rejected(self):
        with pytest.raises(RowValidationError):
            flatten_body_measurements([{"id": "x", "weight": 180}])
