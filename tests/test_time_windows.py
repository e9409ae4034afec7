"""Tests for chart range token resolution."""

import logging
from datetime import datetime, timezone

import pytest

from fittrack.services.time_windows import RANGE_DELTAS, normalize_range_token, resolve_time_window


NOW = datetime(2024, 3, 15, tzinfo=timezone.utc)


class TestResolveTimeWindow:
    """Token to [start, end] mapping."""

    def test_seven_days(self):
        window = resolve_time_window("7days", NOW)
        assert window.start == datetime(2024, 3, 8, tzinfo=timezone.utc)
        assert window.end == NOW
        assert window.token == "7days"

    @pytest.mark.parametrize(
        "token,start",
        [
            ("30days", datetime(2024, 2, 14, tzinfo=timezone.utc)),
            ("3months", datetime(2023, 12, 15, tzinfo=timezone.utc)),
            ("6months", datetime(2023, 9, 15, tzinfo=timezone.utc)),
            ("1year", datetime(2023, 3, 15, tzinfo=timezone.utc)),
        ],
    )
    def test_known_tokens(self, token, start):
        assert resolve_time_window(token, NOW).start == start

    def test_month_tokens_use_calendar_months(self):
        """May 31 minus three months clamps to Feb 29, not a 90-day offset."""
        window = resolve_time_window("3months", datetime(2024, 5, 31, tzinfo=timezone.utc))
        assert window.start == datetime(2024, 2, 29, tzinfo=timezone.utc)

    def test_unknown_token_falls_back_to_thirty_days(self, caplog):
        with caplog.at_level(logging.WARNING):
            fallback = resolve_time_window("foo", NOW)
        assert fallback == resolve_time_window("30days", NOW)
        assert "foo" in caplog.text

    def test_missing_token_uses_default_silently(self, caplog):
        with caplog.at_level(logging.WARNING):
            window = resolve_time_window(None, NOW)
        assert window.token == "30days"
        assert caplog.text == ""

    def test_configured_default(self):
        assert resolve_time_window("bogus", NOW, default="7days").token == "7days"
        assert normalize_range_token("bogus", default="also-bogus") == "30days"

    def test_window_contains_is_inclusive(self):
        window = resolve_time_window("7days", NOW)
        assert window.contains(window.start)
        assert window.contains(window.end)
        assert not window.contains(datetime(2024, 3, 7, tzinfo=timezone.utc))

    def test_all_ui_tokens_are_known(self):
        assert set(RANGE_DELTAS) == {"7days", "30days", "3months", "6months", "1year"}
