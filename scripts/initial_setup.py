"""Create the database and seed the exercise catalog."""
from pathlib import Path

from sqlalchemy import select

from fittrack.database import run_migrations, session_scope
from fittrack.models.database_models import ExerciseCatalog


DEFAULT_EXERCISES = [
    ("Bench Press", "strength", "chest"),
    ("Squat", "strength", "legs"),
    ("Deadlift", "strength", "back"),
    ("Pull-up", "strength", "back"),
    ("Shoulder Press", "strength", "shoulders"),
    ("Barbell Row", "strength", "back"),
    ("Lunge", "strength", "legs"),
    ("Plank", "core", "core"),
    ("Running", "cardio", "full body"),
]


def seed_catalog() -> int:
    """Insert catalog exercises that are not present yet. Returns the number added."""
    added = 0
    with session_scope() as db:
        existing = set(db.scalars(select(ExerciseCatalog.name)))
        for name, category, muscle_group in DEFAULT_EXERCISES:
            if name in existing:
                continue
            db.add(ExerciseCatalog(name=name, category=category, muscle_group=muscle_group))
            added += 1
    return added


def main() -> None:
    data_dir = Path("data")
    data_dir.mkdir(exist_ok=True)
    run_migrations()
    added = seed_catalog()
    print("Database initialised at", data_dir, "| catalog exercises added:", added)


if __name__ == "__main__":
    main()
