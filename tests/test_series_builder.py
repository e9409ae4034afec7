"""Tests for chart series building."""

from datetime import datetime, timedelta, timezone

from fittrack.models.schemas import ChartPoint, MetricPoint
from fittrack.services.series_builder import ChartSeries, build_chart_series, build_series
from fittrack.services.time_windows import resolve_time_window


NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def point(days_ago: int, **metrics) -> MetricPoint:
    return MetricPoint(recorded_at=NOW - timedelta(days=days_ago), metrics=metrics)


class TestBuildChartSeries:
    """Filtering, ordering and projection."""

    def test_keeps_points_inside_window_in_ascending_order(self):
        points = [point(1, weight=175.0), point(40, weight=135.0), point(10, weight=155.0)]

        series = build_chart_series(points, "30days", "weight", NOW)

        assert list(series) == [
            ChartPoint(label="Mar 05", value=155.0),
            ChartPoint(label="Mar 14", value=175.0),
        ]

    def test_window_edges_are_inclusive(self):
        window = resolve_time_window("7days", NOW)
        points = [
            MetricPoint(recorded_at=window.start, metrics={"reps": 8}),
            MetricPoint(recorded_at=window.end, metrics={"reps": 6}),
            MetricPoint(recorded_at=window.end + timedelta(seconds=1), metrics={"reps": 5}),
        ]

        series = build_series(points, window, "reps")

        assert [p.value for p in series] == [8, 6]

    def test_missing_metric_is_none_not_zero(self):
        points = [point(2, weight=180.0), point(1, chest=42.0)]

        series = build_chart_series(points, "7days", "weight", NOW)

        assert [p.value for p in series] == [180.0, None]

    def test_unknown_metric_yields_all_none(self):
        series = build_chart_series([point(1, weight=1.0)], "7days", "wingspan", NOW)
        assert [p.value for p in series] == [None]
        assert series.metric_label == "wingspan"

    def test_unknown_range_token_uses_thirty_days(self):
        points = [point(25, weight=1.0), point(35, weight=2.0)]
        series = build_chart_series(points, "fortnight", "weight", NOW)
        assert series.window.token == "30days"
        assert len(series) == 1

    def test_empty_input(self):
        series = build_chart_series([], "1year", "weight", NOW)
        assert list(series) == []
        assert len(series) == 0


class TestChartSeriesSequence:
    """The series can be consumed repeatedly."""

    def test_iterating_twice_gives_same_points(self):
        series = build_chart_series([point(3, sets=3.0), point(2, sets=4.0)], "7days", "sets", NOW)

        first = list(series)
        second = list(series)

        assert first == second
        assert len(first) == 2

    def test_indexing_and_slicing(self):
        series = build_chart_series([point(3, sets=3.0), point(2, sets=4.0)], "7days", "sets", NOW)
        assert series[0].value == 3.0
        assert series[-1].value == 4.0
        assert [p.value for p in series[0:1]] == [3.0]

    def test_rebuilding_is_identical(self):
        points = [point(5, weight=150.0), point(3, weight=155.0)]
        assert build_chart_series(points, "30days", "weight", NOW) == build_chart_series(
            list(reversed(points)), "30days", "weight", NOW
        )

    def test_input_generator_is_consumed_once(self):
        series = build_chart_series((point(d, weight=float(d)) for d in (3, 1, 2)), "7days", "weight", NOW)
        assert [p.value for p in series] == [3.0, 2.0, 1.0]
        assert [p.value for p in series] == [3.0, 2.0, 1.0]

    def test_to_response_carries_window_and_label(self):
        series = build_chart_series([point(1, body_fat_percentage=16.5)], "7days", "body_fat_percentage", NOW)

        response = series.to_response()

        assert isinstance(series, ChartSeries)
        assert response.metric_label == "Body Fat %"
        assert response.range_token == "7days"
        assert response.end == NOW
        assert response.points[0].value == 16.5

    def test_custom_label_format(self):
        series = build_chart_series([point(1, weight=1.0)], "7days", "weight", NOW, label_format="%Y-%m-%d")
        assert series[0].label == "2024-03-14"
