"""Pytest configuration for global fixtures and logging setup."""
from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TIMEZONE"] = "UTC"
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from fittrack.logging_config import configure_logging

configure_logging()

from fittrack.database import create_schema, get_db
from fittrack.dependencies import get_clock
from fittrack.main import app
from fittrack.models.database_models import ExerciseCatalog

# Friday; every relative date in the tests is anchored here.
FIXED_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """The pinned current instant used across tests."""

    return FIXED_NOW


@pytest.fixture
def db_engine() -> Iterator[Engine]:
    """Fresh in-memory database with the full schema."""

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine: Engine) -> Iterator[Session]:
    """Session bound to the in-memory database."""

    session = sessionmaker(bind=db_engine, autoflush=False, future=True)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalog(db_session: Session) -> list[ExerciseCatalog]:
    """Two catalog exercises for progress entries."""

    exercises = [
        ExerciseCatalog(name="Bench Press", category="strength", muscle_group="chest"),
        ExerciseCatalog(name="Squat", category="strength", muscle_group="legs"),
    ]
    db_session.add_all(exercises)
    db_session.commit()
    return exercises


@pytest.fixture
def test_client(db_engine: Engine) -> Iterator[TestClient]:
    """Provide a FastAPI test client backed by the in-memory database and pinned clock."""

    factory = sessionmaker(bind=db_engine, autoflush=False, future=True)

    def override_get_db():
        db = factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
