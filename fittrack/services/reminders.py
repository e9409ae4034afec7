"""Daily workout reminder emails."""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from jinja2 import Environment, FileSystemLoader, select_autoescape

from fittrack.config import Settings, get_settings
from fittrack.services.data_store import WorkoutStore
from fittrack.services.notification_service import NotificationService
from fittrack.services.timeutils import coerce_instant, start_of_local_day, utc_now


logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
REMINDER_SUBJECT = "Time for your workout!"

_environment = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


def reminder_slot(now: datetime, interval_minutes: int = 30) -> str:
    """
    Return the ``HH:MM`` slot containing ``now``, minutes floored to the interval.

    Example:
        >>> reminder_slot(datetime(2024, 3, 15, 20, 44))
        '20:30'
    """
    minute = (now.minute // interval_minutes) * interval_minutes
    return f"{now.hour:02d}:{minute:02d}"


def display_name(username: str | None, email: str | None) -> str:
    """Username, else the local part of the email, else a generic greeting."""
    if username:
        return username
    if email and "@" in email:
        return email.split("@", 1)[0]
    return "there"


def render_reminder(name: str, app_url: str) -> str:
    template = _environment.get_template("reminder_email.html")
    return template.render(name=name, app_url=app_url)


class ReminderJob:
    """Email users whose reminder is due and who have not logged a workout today."""

    def __init__(
        self,
        store: WorkoutStore,
        notifier: NotificationService | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.settings = settings or get_settings()
        self.notifier = notifier or NotificationService(self.settings)
        self._clock = clock

    def run(self, now: datetime | None = None) -> dict[str, Any]:
        """
        Send the reminders due at ``now``.

        Returns:
            Dict with the slot, the addresses reminded, and per-user errors.
            One user's failure never stops the rest.
        """
        zone = self.settings.tzinfo
        local_now = coerce_instant(now or self._clock(), zone).astimezone(zone)
        slot = reminder_slot(local_now, self.settings.reminder_interval_minutes)
        midnight = start_of_local_day(local_now, zone)

        profiles = self.store.profiles_due_for_reminder(slot)
        logger.info("Checking reminders | slot=%s candidates=%d", slot, len(profiles))

        sent: list[str] = []
        errors: list[dict[str, str]] = []
        for profile in profiles:
            try:
                if not profile.email:
                    raise ValueError("profile has no email address")
                if self.store.has_workout_since(profile.id, midnight):
                    logger.debug("Skipping reminder | user=%s already logged today", profile.id)
                    continue
                body = render_reminder(display_name(profile.username, profile.email), self.settings.app_url)
                self.notifier.send_email(REMINDER_SUBJECT, body, [profile.email])
                sent.append(profile.email)
            except Exception as exc:
                logger.exception("Reminder failed | user=%s", profile.id)
                errors.append({"user_id": profile.id, "error": str(exc)})

        logger.info("Reminders finished | slot=%s sent=%d errors=%d", slot, len(sent), len(errors))
        return {"slot": slot, "reminders_sent": sent, "errors": errors}
