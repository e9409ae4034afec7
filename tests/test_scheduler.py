"""Tests for the asynchronous scheduler job."""
from __future__ import annotations

import logging
from typing import Any, Dict

import pytest

from scripts import run_scheduler


@pytest.mark.asyncio
async def test_run_reminder_job_invokes_reminder_run(monkeypatch, caplog):
    recorded: Dict[str, Any] = {}

    def fake_run() -> Dict[str, Any]:
        recorded["called"] = True
        return {"slot": "20:30", "reminders_sent": ["a@example.com"], "errors": []}

    monkeypatch.setattr(run_scheduler, "perform_reminder_run", fake_run)

    with caplog.at_level(logging.INFO, logger="scheduler"):
        await run_scheduler.run_reminder_job()

    assert recorded["called"] is True
    assert "slot=20:30 sent=1 errors=0" in caplog.text


@pytest.mark.asyncio
async def test_run_reminder_job_logs_failure(monkeypatch, caplog):
    def fake_failure() -> Dict[str, Any]:
        raise RuntimeError("boom")

    monkeypatch.setattr(run_scheduler, "perform_reminder_run", fake_failure)

    with caplog.at_level(logging.ERROR, logger="scheduler"):
        await run_scheduler.run_reminder_job()

    assert "Reminder job failed" in caplog.text


def test_acquire_lock_is_exclusive(tmp_path):
    lock_path = tmp_path / "locks" / "scheduler.lock"
    lock = run_scheduler.acquire_lock(lock_path)
    try:
        assert lock.is_locked
        with pytest.raises(TimeoutError):
            run_scheduler.acquire_lock(lock_path)
    finally:
        lock.release()
