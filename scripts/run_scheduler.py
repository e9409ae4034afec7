"""Standalone scheduler process sending daily workout reminders."""
from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from filelock import FileLock

from fittrack.config import get_settings
from fittrack.database import run_migrations, session_scope
from fittrack.logging_config import LOG_FORMAT, configure_logging
from fittrack.services.data_store import WorkoutStore
from fittrack.services.reminders import ReminderJob


logger = logging.getLogger("scheduler")


def acquire_lock(lock_path: Path) -> FileLock:
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    lock = FileLock(str(lock_path))
    lock.acquire(timeout=0)
    return lock


def perform_reminder_run() -> Dict[str, Any]:
    """
    Send the reminders due in the current half-hour slot.

    Returns:
        dict: slot, addresses reminded and per-user errors
    """
    with session_scope() as db:
        job = ReminderJob(WorkoutStore(db))
        return job.run()


async def run_reminder_job() -> None:
    start = datetime.now(timezone.utc)
    logger.info("Reminder job started")

    try:
        summary = await asyncio.to_thread(perform_reminder_run)
    except Exception:
        logger.exception("Reminder job failed")
        return

    elapsed = (datetime.now(timezone.utc) - start).total_seconds()
    logger.info(
        "Reminder job finished in %.2fs | slot=%s sent=%d errors=%d",
        elapsed,
        summary["slot"],
        len(summary["reminders_sent"]),
        len(summary["errors"]),
    )
    for error in summary["errors"]:
        logger.debug("Reminder error detail -> %s", error)


async def main(run_now: bool) -> None:
    configure_logging()
    settings = get_settings()
    run_migrations()

    scheduler_log = settings.log_dir / "scheduler.log"
    if not any(isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", "") == str(scheduler_log) for h in logger.handlers):
        handler = logging.FileHandler(scheduler_log, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    lock_path = settings.scheduler_lock_file
    lock = acquire_lock(lock_path)
    logger.info("Acquired scheduler lock at %s", lock_path)
    try:
        if run_now:
            await run_reminder_job()
            return

        # Reminder times are half-hour slots, so fire at the start of each slot.
        interval = settings.reminder_interval_minutes
        scheduler = AsyncIOScheduler(timezone=settings.timezone)
        scheduler.add_job(
            run_reminder_job,
            "cron",
            minute=f"*/{interval}",
        )
        scheduler.start()

        logger.info("Scheduler running (every %d min). Press Ctrl+C to exit.", interval)
        await asyncio.Event().wait()
    finally:
        lock.release()
        logger.info("Released scheduler lock at %s", lock_path)
        if lock_path.exists():
            lock_path.unlink()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run reminder scheduler process")
    parser.add_argument("--run-now", action="store_true", help="Execute job immediately and exit")
    args = parser.parse_args()

    try:
        asyncio.run(main(run_now=args.run_now))
    except TimeoutError:
        logger.warning("Scheduler already running; exiting.")
