"""Build chart-ready series from dated metric points."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, tzinfo
from typing import Iterable, Iterator

from fittrack.models.schemas import METRIC_LABELS, ChartPoint, ChartSeriesResponse, MetricPoint
from fittrack.services.time_windows import DEFAULT_RANGE_TOKEN, TimeWindow, resolve_time_window
from fittrack.services.timeutils import coerce_instant


logger = logging.getLogger(__name__)

DEFAULT_LABEL_FORMAT = "%b %d"


class ChartSeries(Sequence):
    """
    Ordered ``{label, value}`` points for one metric inside one window.

    The retained points are fixed at construction; every iteration projects
    them again from the start, so the series can be consumed any number of
    times with identical results.
    """

    def __init__(
        self,
        points: Iterable[MetricPoint],
        window: TimeWindow,
        metric_key: str,
        label_format: str = DEFAULT_LABEL_FORMAT,
        tz: tzinfo | None = None,
    ) -> None:
        self.window = window
        self.metric_key = metric_key
        self.label_format = label_format
        self._tz = tz
        self._points = tuple(points)

    @property
    def metric_label(self) -> str:
        return METRIC_LABELS.get(self.metric_key, self.metric_key)

    def _project(self, point: MetricPoint) -> ChartPoint:
        instant = coerce_instant(point.recorded_at, self._tz)
        if self._tz is not None:
            instant = instant.astimezone(self._tz)
        return ChartPoint(label=instant.strftime(self.label_format), value=point.value(self.metric_key))

    def __iter__(self) -> Iterator[ChartPoint]:
        return (self._project(point) for point in self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self._project(point) for point in self._points[index]]
        return self._project(self._points[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChartSeries):
            return NotImplemented
        return (
            self.metric_key == other.metric_key
            and self.window == other.window
            and list(self) == list(other)
        )

    def __repr__(self) -> str:
        return f"ChartSeries(metric={self.metric_key!r}, window={self.window.token!r}, points={len(self)})"

    def to_response(self) -> ChartSeriesResponse:
        return ChartSeriesResponse(
            metric_key=self.metric_key,
            metric_label=self.metric_label,
            range_token=self.window.token,
            start=self.window.start,
            end=self.window.end,
            points=list(self),
        )


def build_series(
    points: Iterable[MetricPoint],
    window: TimeWindow,
    metric_key: str,
    label_format: str = DEFAULT_LABEL_FORMAT,
    tz: tzinfo | None = None,
) -> ChartSeries:
    """
    Keep points inside ``window`` (inclusive) and order them by instant.

    Points whose metric is missing stay in the series with a ``None`` value.
    """
    start = coerce_instant(window.start, tz)
    end = coerce_instant(window.end, tz)

    retained = []
    for point in points:
        instant = coerce_instant(point.recorded_at, tz)
        if start <= instant <= end:
            retained.append((instant, point))

    # sorted() is stable, so same-instant points keep their input order.
    retained.sort(key=lambda pair: pair[0])
    logger.debug(
        "Built series | metric=%s window=%s kept=%d",
        metric_key,
        window.token,
        len(retained),
    )
    return ChartSeries((point for _, point in retained), window, metric_key, label_format, tz)


def build_chart_series(
    points: Iterable[MetricPoint],
    range_token: str | None,
    metric_key: str,
    now: datetime,
    *,
    label_format: str = DEFAULT_LABEL_FORMAT,
    tz: tzinfo | None = None,
    default_token: str = DEFAULT_RANGE_TOKEN,
) -> ChartSeries:
    """Resolve ``range_token`` against ``now`` and build the series for ``metric_key``."""
    window = resolve_time_window(range_token, coerce_instant(now, tz), default_token)
    return build_series(points, window, metric_key, label_format, tz)
