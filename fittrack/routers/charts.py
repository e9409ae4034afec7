"""API endpoints for exercise-progress and body-measurement chart series."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable

from fastapi import APIRouter, Depends, HTTPException, Query

from fittrack.config import get_settings
from fittrack.dependencies import get_clock, get_store
from fittrack.exceptions import FitTrackError
from fittrack.models.schemas import BODY_METRICS, EXERCISE_METRICS, METRIC_LABELS, ChartSeriesResponse
from fittrack.services.data_store import WorkoutStore
from fittrack.services.normalization import flatten_body_measurements, flatten_exercise_progress
from fittrack.services.series_builder import build_chart_series
from fittrack.services.time_windows import RANGE_LABELS


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/charts", tags=["charts"])


def _series_response(points, range_token: str | None, metric: str, now: datetime) -> ChartSeriesResponse:
    settings = get_settings()
    series = build_chart_series(
        points,
        range_token,
        metric,
        now,
        label_format=settings.chart_label_format,
        tz=settings.tzinfo,
        default_token=settings.default_time_range,
    )
    return series.to_response()


@router.get("/metrics")
async def list_chart_metrics() -> dict[str, Any]:
    """Metric keys and time ranges the chart views can select from."""
    return {
        "exercise_metrics": [{"key": k, "label": METRIC_LABELS[k]} for k in EXERCISE_METRICS],
        "body_metrics": [{"key": k, "label": METRIC_LABELS[k]} for k in BODY_METRICS],
        "ranges": [{"token": token, "label": label} for token, label in RANGE_LABELS.items()],
        "default_range": get_settings().default_time_range,
    }


@router.get("/exercise-progress", response_model=ChartSeriesResponse)
def get_exercise_progress_chart(
    user_id: str = Query(min_length=1),
    exercise_id: int | None = None,
    range_token: str | None = Query(default=None, alias="range"),
    metric: str = Query(default="weight"),
    store: WorkoutStore = Depends(get_store),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ChartSeriesResponse:
    """
    Chart series for one exercise's progress.

    Query parameters:
        user_id: Owner of the data
        exercise_id: Catalog exercise to chart (all exercises when omitted)
        range: 7days, 30days, 3months, 6months or 1year (unknown values use the default)
        metric: weight, reps, sets or duration
    """
    try:
        rows = store.list_exercise_progress(user_id, exercise_id)
        points = flatten_exercise_progress(rows)
        return _series_response(points, range_token, metric, clock())
    except FitTrackError as e:
        logger.warning("Exercise progress chart rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception("Failed to build exercise progress chart")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to build exercise progress chart: {str(e)}"
        )


@router.get("/body-measurements", response_model=ChartSeriesResponse)
def get_body_measurement_chart(
    user_id: str = Query(min_length=1),
    range_token: str | None = Query(default=None, alias="range"),
    metric: str = Query(default="weight"),
    store: WorkoutStore = Depends(get_store),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ChartSeriesResponse:
    """Chart series for one body measurement (weight, body fat %, girths)."""
    try:
        points = flatten_body_measurements(store.list_body_measurements(user_id))
        return _series_response(points, range_token, metric, clock())
    except FitTrackError as e:
        logger.warning("Body measurement chart rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception("Failed to build body measurement chart")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to build body measurement chart: {str(e)}"
        )
