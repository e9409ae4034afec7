"""Initial FitTrack schema."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20250301_01"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("username", sa.String(length=100), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("reminder_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("reminder_time", sa.String(length=8), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "exercise_catalog",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=200), nullable=False, unique=True),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("muscle_group", sa.String(length=50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )

    op.create_table(
        "workouts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("duration", sa.String(length=50), nullable=True),
        sa.Column("intensity", sa.String(length=50), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("legacy_exercises", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_workouts_user_id", "workouts", ["user_id"], unique=False)
    op.create_index("ix_workouts_user_date", "workouts", ["user_id", "date"], unique=False)

    op.create_table(
        "exercises",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("workout_id", sa.String(length=36), sa.ForeignKey("workouts.id"), nullable=False),
        sa.Column("exercise_id", sa.Integer(), sa.ForeignKey("exercise_catalog.id"), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("sets", sa.String(length=50), nullable=True),
        sa.Column("reps", sa.String(length=50), nullable=True),
        sa.Column("weight", sa.String(length=50), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_exercises_workout_id", "exercises", ["workout_id"], unique=False)

    op.create_table(
        "personal_records",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("exercise", sa.String(length=200), nullable=False),
        sa.Column("value", sa.String(length=100), nullable=False),
        sa.Column("previous_value", sa.String(length=100), nullable=True),
        sa.Column("date", sa.DateTime(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_personal_records_user_id", "personal_records", ["user_id"], unique=False)

    op.create_table(
        "exercise_progress",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("exercise_id", sa.Integer(), sa.ForeignKey("exercise_catalog.id"), nullable=False),
        sa.Column(
            "workout_id",
            sa.String(length=36),
            sa.ForeignKey("workouts.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("sets", sa.Integer(), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_exercise_progress_user_id", "exercise_progress", ["user_id"], unique=False)
    op.create_index("ix_exercise_progress_exercise_id", "exercise_progress", ["exercise_id"], unique=False)

    op.create_table(
        "body_measurements",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("body_fat_percentage", sa.Float(), nullable=True),
        sa.Column("chest", sa.Float(), nullable=True),
        sa.Column("waist", sa.Float(), nullable=True),
        sa.Column("hips", sa.Float(), nullable=True),
        sa.Column("biceps", sa.Float(), nullable=True),
        sa.Column("thighs", sa.Float(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_body_measurements_user_id", "body_measurements", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_body_measurements_user_id", table_name="body_measurements")
    op.drop_table("body_measurements")
    op.drop_index("ix_exercise_progress_exercise_id", table_name="exercise_progress")
    op.drop_index("ix_exercise_progress_user_id", table_name="exercise_progress")
    op.drop_table("exercise_progress")
    op.drop_index("ix_personal_records_user_id", table_name="personal_records")
    op.drop_table("personal_records")
    op.drop_index("ix_exercises_workout_id", table_name="exercises")
    op.drop_table("exercises")
    op.drop_index("ix_workouts_user_date", table_name="workouts")
    op.drop_index("ix_workouts_user_id", table_name="workouts")
    op.drop_table("workouts")
    op.drop_table("exercise_catalog")
    op.drop_table("profiles")
