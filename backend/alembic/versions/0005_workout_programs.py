"""Workout programs: catalog, enrollments, logged sessions and achievements

Revision ID: 0005_workout_programs
Revises: 0004_medication_reminder_times
Create Date: 2026-10-18 00:00:01.000000

Seeds the built-in exercise library, condition-specific plans, the first
week of the Type 2 beginner plan and the achievement catalog.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from diabfit.services.workout_catalog import (
    ACHIEVEMENTS,
    EXERCISES,
    PLANS,
    SESSION_EXERCISES,
    SESSIONS,
)


# revision identifiers, used by Alembic.
revision: str = "0005_workout_programs"
down_revision: Union[str, None] = "0004_medication_reminder_times"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]


def _sync_columns() -> list:
    return [
        sa.Column("last_synced_at", sa.DateTime(), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
    ]


def _owner_column() -> sa.Column:
    return sa.Column(
        "user_id",
        sa.String(length=36),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
    )


def upgrade() -> None:
    # Catalog
    workout_plans = op.create_table(
        "workout_plans",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("target_condition", sa.String(), nullable=False),
        sa.Column("fitness_level", sa.String(), nullable=False),
        sa.Column("duration_weeks", sa.Integer(), nullable=False, server_default="8"),
        sa.Column("sessions_per_week", sa.Integer(), nullable=False, server_default="3"),
        sa.Column("session_duration_minutes", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("equipment_needed", sa.JSON(), nullable=True),
        sa.Column("benefits", sa.JSON(), nullable=True),
        sa.Column("precautions", sa.JSON(), nullable=True),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("created_by", sa.String(), nullable=False, server_default="system"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index(
        "idx_workout_plans_condition_level",
        "workout_plans",
        ["target_condition", "fitness_level"],
    )

    workout_sessions = op.create_table(
        "workout_sessions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "workout_plan_id",
            sa.String(length=36),
            sa.ForeignKey("workout_plans.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("session_number", sa.Integer(), nullable=False),
        sa.Column("week_number", sa.Integer(), nullable=False),
        sa.Column("day_number", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("warm_up_duration", sa.Integer(), nullable=False, server_default="5"),
        sa.Column("cool_down_duration", sa.Integer(), nullable=False, server_default="5"),
        sa.Column("total_duration", sa.Integer(), nullable=False),
        sa.Column("intensity_level", sa.String(), nullable=True),
        sa.Column("focus_areas", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "idx_workout_sessions_plan_week", "workout_sessions", ["workout_plan_id", "week_number"]
    )

    exercise_library = op.create_table(
        "exercise_library",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("subcategory", sa.String(), nullable=True),
        sa.Column("difficulty_level", sa.String(), nullable=False),
        sa.Column("equipment_needed", sa.JSON(), nullable=True),
        sa.Column("muscle_groups", sa.JSON(), nullable=True),
        sa.Column("instructions", sa.JSON(), nullable=True),
        sa.Column("safety_tips", sa.JSON(), nullable=True),
        sa.Column("modifications", sa.JSON(), nullable=True),
        sa.Column("diabetes_benefits", sa.JSON(), nullable=True),
        sa.Column("glp1_considerations", sa.JSON(), nullable=True),
        sa.Column("contraindications", sa.JSON(), nullable=True),
        sa.Column("calories_per_minute", sa.Float(), nullable=True),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("video_url", sa.String(), nullable=True),
        sa.Column("demonstration_gif_url", sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "idx_exercise_library_category_difficulty",
        "exercise_library",
        ["category", "difficulty_level"],
    )

    session_exercises = op.create_table(
        "session_exercises",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "workout_session_id",
            sa.String(length=36),
            sa.ForeignKey("workout_sessions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "exercise_id",
            sa.String(length=36),
            sa.ForeignKey("exercise_library.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("order_in_session", sa.Integer(), nullable=False),
        sa.Column("sets", sa.Integer(), nullable=True),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("duration_seconds", sa.Integer(), nullable=True),
        sa.Column("rest_seconds", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("intensity_percentage", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("is_optional", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index(
        "idx_session_exercises_session_order",
        "session_exercises",
        ["workout_session_id", "order_in_session"],
    )

    workout_achievements = op.create_table(
        "workout_achievements",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(), nullable=True),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("condition_type", sa.String(), nullable=False, server_default="general"),
        sa.Column("criteria", sa.JSON(), nullable=False),
        sa.Column("reward_points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    # User progress
    op.create_table(
        "user_workout_plans",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _owner_column(),
        sa.Column(
            "workout_plan_id",
            sa.String(length=36),
            sa.ForeignKey("workout_plans.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("target_end_date", sa.Date(), nullable=True),
        sa.Column("current_week", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("current_session", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("status", sa.String(), nullable=False, server_default="active"),
        sa.Column("progress_percentage", sa.Float(), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        *_sync_columns(),
    )
    op.create_index(
        "idx_user_workout_plans_user_status", "user_workout_plans", ["user_id", "status"]
    )

    op.create_table(
        "user_workout_sessions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _owner_column(),
        sa.Column(
            "user_workout_plan_id",
            sa.String(length=36),
            sa.ForeignKey("user_workout_plans.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "workout_session_id",
            sa.String(length=36),
            sa.ForeignKey("workout_sessions.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("calories_burned", sa.Integer(), nullable=True),
        sa.Column("perceived_exertion", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("glucose_before", sa.Integer(), nullable=True),
        sa.Column("glucose_after", sa.Integer(), nullable=True),
        sa.Column("mood_before", sa.String(), nullable=True),
        sa.Column("mood_after", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="scheduled"),
        *_timestamps(),
        *_sync_columns(),
    )
    op.create_index(
        "idx_user_workout_sessions_user_completed",
        "user_workout_sessions",
        ["user_id", "completed_at"],
    )

    op.create_table(
        "user_exercise_performance",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _owner_column(),
        sa.Column(
            "exercise_id",
            sa.String(length=36),
            sa.ForeignKey("exercise_library.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_workout_session_id",
            sa.String(length=36),
            sa.ForeignKey("user_workout_sessions.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("sets_completed", sa.Integer(), nullable=True),
        sa.Column("reps_completed", sa.Integer(), nullable=True),
        sa.Column("duration_completed_seconds", sa.Integer(), nullable=True),
        sa.Column("weight_used", sa.Float(), nullable=True),
        sa.Column("difficulty_rating", sa.Integer(), nullable=True),
        sa.Column("form_rating", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        *_sync_columns(),
    )
    op.create_index(
        "idx_user_exercise_performance_user_exercise",
        "user_exercise_performance",
        ["user_id", "exercise_id"],
    )

    op.create_table(
        "user_achievements",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _owner_column(),
        sa.Column(
            "achievement_id",
            sa.String(length=36),
            sa.ForeignKey("workout_achievements.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("earned_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("progress_data", sa.JSON(), nullable=True),
        sa.UniqueConstraint(
            "user_id", "achievement_id", name="uq_user_achievements_user_achievement"
        ),
    )
    op.create_index("idx_user_achievements_user_id", "user_achievements", ["user_id"])

    op.bulk_insert(exercise_library, EXERCISES)
    op.bulk_insert(workout_plans, PLANS)
    op.bulk_insert(workout_sessions, SESSIONS)
    op.bulk_insert(session_exercises, SESSION_EXERCISES)
    op.bulk_insert(workout_achievements, ACHIEVEMENTS)


def downgrade() -> None:
    for table in (
        "user_achievements",
        "user_exercise_performance",
        "user_workout_sessions",
        "user_workout_plans",
        "workout_achievements",
        "session_exercises",
        "exercise_library",
        "workout_sessions",
        "workout_plans",
    ):
        op.drop_table(table)
