"""Tests for the daily reminder job."""

from datetime import datetime, timedelta, timezone

import pytest

from fittrack.config import Settings
from fittrack.models.database_models import Profile
from fittrack.models.schemas import WorkoutCreate
from fittrack.services.data_store import WorkoutStore
from fittrack.services.notification_service import NotificationError, NotificationService
from fittrack.services.reminders import REMINDER_SUBJECT, ReminderJob, display_name, reminder_slot, render_reminder


NOW = datetime(2024, 3, 15, 20, 44, tzinfo=timezone.utc)


class FakeNotifier:
    def __init__(self, fail_for: set[str] | None = None):
        self.sent: list[tuple[str, str, list[str]]] = []
        self.fail_for = fail_for or set()

    def send_email(self, subject, body, recipients):
        if set(recipients) & self.fail_for:
            raise NotificationError("mailbox unavailable")
        self.sent.append((subject, body, list(recipients)))


@pytest.fixture
def settings():
    return Settings(timezone="UTC", app_url="https://fittrack.example.com", smtp_host=None)


@pytest.fixture
def store(db_session):
    db_session.add_all([
        Profile(id="alice", username="Alice", email="alice@example.com", reminder_enabled=True,
                reminder_time="20:30:00"),
        Profile(id="bob", email="bob@example.com", reminder_enabled=True, reminder_time="20:30:00"),
        Profile(id="carol", email="carol@example.com", reminder_enabled=True, reminder_time="07:00:00"),
    ])
    db_session.commit()
    return WorkoutStore(db_session)


class TestHelpers:
    """Slot and greeting helpers."""

    @pytest.mark.parametrize(
        "hour,minute,slot",
        [(20, 44, "20:30"), (20, 30, "20:30"), (20, 29, "20:00"), (0, 0, "00:00"), (7, 59, "07:30")],
    )
    def test_reminder_slot(self, hour, minute, slot):
        assert reminder_slot(datetime(2024, 3, 15, hour, minute)) == slot

    def test_display_name(self):
        assert display_name("Alice", "alice@example.com") == "Alice"
        assert display_name(None, "bob@example.com") == "bob"
        assert display_name(None, None) == "there"

    def test_render_reminder_escapes_name(self):
        body = render_reminder("<Bob>", "https://fittrack.example.com")
        assert "&lt;Bob&gt;" in body
        assert "https://fittrack.example.com" in body


class TestReminderJob:
    """Who gets reminded."""

    def test_sends_to_due_profiles(self, store, settings):
        notifier = FakeNotifier()

        result = ReminderJob(store, notifier, settings).run(NOW)

        assert result["slot"] == "20:30"
        assert sorted(result["reminders_sent"]) == ["alice@example.com", "bob@example.com"]
        assert result["errors"] == []
        assert all(subject == REMINDER_SUBJECT for subject, _, _ in notifier.sent)

    def test_skips_users_who_logged_today(self, store, settings):
        store.create_workout(WorkoutCreate(user_id="alice", name="Run", occurred_at=NOW - timedelta(hours=2)))
        store.create_workout(WorkoutCreate(user_id="bob", name="Lift", occurred_at=NOW - timedelta(days=1)))
        notifier = FakeNotifier()

        result = ReminderJob(store, notifier, settings).run(NOW)

        assert result["reminders_sent"] == ["bob@example.com"]

    def test_one_failure_does_not_stop_others(self, store, settings):
        notifier = FakeNotifier(fail_for={"alice@example.com"})

        result = ReminderJob(store, notifier, settings).run(NOW)

        assert result["reminders_sent"] == ["bob@example.com"]
        assert result["errors"] == [{"user_id": "alice", "error": "mailbox unavailable"}]

    def test_uses_clock_when_no_time_given(self, store, settings):
        notifier = FakeNotifier()
        result = ReminderJob(store, notifier, settings, clock=lambda: NOW.replace(hour=7, minute=5)).run()
        assert result["reminders_sent"] == ["carol@example.com"]

    def test_unconfigured_smtp_is_reported_per_user(self, store, settings):
        result = ReminderJob(store, NotificationService(settings), settings).run(NOW)

        assert result["reminders_sent"] == []
        assert {e["user_id"] for e in result["errors"]} == {"alice", "bob"}
