"""Initial schema: auth, profiles and tracking tables

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-01 00:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _owner_column() -> sa.Column:
    return sa.Column(
        "user_id",
        sa.String(length=36),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
    )


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


def upgrade() -> None:
    op.create_table(
        "auth_users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("raw_user_meta_data", sa.JSON(), nullable=True),
        sa.Column("email_confirmed_at", sa.DateTime(), nullable=True),
        sa.Column("confirmed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_auth_users_email", "auth_users", ["email"])

    op.create_table(
        "auth_config",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("enable_signup", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("enable_confirmations", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            "enable_email_confirmations", sa.Boolean(), nullable=False, server_default=sa.true()
        ),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "auth_user_id",
            sa.String(length=36),
            sa.ForeignKey("auth_users.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("gender", sa.String(), nullable=True),
        sa.Column("height", sa.Float(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("has_diabetes", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("diabetes_type", sa.String(), nullable=True),
        sa.Column("diagnosis_date", sa.Date(), nullable=True),
        *_timestamps(),
        sa.Column("last_synced_at", sa.DateTime(), nullable=True),
    )
    op.create_index("idx_users_email", "users", ["email"])
    op.create_index("idx_users_auth_user_id", "users", ["auth_user_id"])

    op.create_table(
        "meals",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _owner_column(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("meal_type", sa.String(), nullable=True),
        sa.Column("carbs", sa.Float(), nullable=False, server_default="0"),
        sa.Column("protein", sa.Float(), nullable=False, server_default="0"),
        sa.Column("calories", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        *_sync_columns(),
    )
    op.create_index("idx_meals_user_id", "meals", ["user_id"])
    op.create_index("idx_meals_timestamp", "meals", ["timestamp"])

    op.create_table(
        "glucose_readings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _owner_column(),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        *_sync_columns(),
    )
    op.create_index("idx_glucose_readings_user_id", "glucose_readings", ["user_id"])
    op.create_index("idx_glucose_readings_timestamp", "glucose_readings", ["timestamp"])

    op.create_table(
        "exercises",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _owner_column(),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("intensity", sa.String(), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        *_sync_columns(),
    )
    op.create_index("idx_exercises_user_id", "exercises", ["user_id"])
    op.create_index("idx_exercises_timestamp", "exercises", ["timestamp"])

    op.create_table(
        "health_metrics",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _owner_column(),
        sa.Column("systolic_bp", sa.Integer(), nullable=True),
        sa.Column("diastolic_bp", sa.Integer(), nullable=True),
        sa.Column("heart_rate", sa.Integer(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("temperature", sa.Float(), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        *_timestamps(),
        *_sync_columns(),
    )
    op.create_index("idx_health_metrics_user_id", "health_metrics", ["user_id"])
    op.create_index("idx_health_metrics_timestamp", "health_metrics", ["timestamp"])

    # Enrichment columns are added by 0002_meal_analyses_columns.
    op.create_table(
        "meal_analyses",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _owner_column(),
        sa.Column("meal_name", sa.String(), nullable=False),
        sa.Column("analysis_data", sa.JSON(), nullable=True),
        sa.Column("recommendations", sa.JSON(), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        *_timestamps(),
        *_sync_columns(),
    )
    op.create_index("idx_meal_analyses_user_id", "meal_analyses", ["user_id"])
    op.create_index("idx_meal_analyses_timestamp", "meal_analyses", ["timestamp"])
    op.create_index("idx_meal_analyses_created_at", "meal_analyses", ["created_at"])

    op.create_table(
        "medications",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _owner_column(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("dosage", sa.String(), nullable=True),
        sa.Column("frequency", sa.String(), nullable=True),
        sa.Column("medication_type", sa.String(), nullable=True),
        sa.Column("instructions", sa.Text(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        *_sync_columns(),
    )
    op.create_index("idx_medications_user_id", "medications", ["user_id"])

    op.create_table(
        "medication_doses",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _owner_column(),
        sa.Column(
            "medication_id",
            sa.String(length=36),
            sa.ForeignKey("medications.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("scheduled_time", sa.DateTime(), nullable=False),
        sa.Column("taken_time", sa.DateTime(), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="scheduled"),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        *_sync_columns(),
    )
    op.create_index("idx_medication_doses_user_id", "medication_doses", ["user_id"])
    op.create_index(
        "idx_medication_doses_scheduled_time", "medication_doses", ["scheduled_time"]
    )

    op.create_table(
        "user_settings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _owner_column(),
        sa.Column("setting_key", sa.String(), nullable=False),
        sa.Column("setting_value", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "setting_key", name="uq_user_settings_user_key"),
    )
    op.create_index("idx_user_settings_user_id", "user_settings", ["user_id"])

    op.create_table(
        "app_analytics",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _owner_column(),
        sa.Column("event_type", sa.String(), nullable=False),
        sa.Column("event_data", sa.JSON(), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("session_id", sa.String(), nullable=True),
    )
    op.create_index("idx_app_analytics_user_id", "app_analytics", ["user_id"])
    op.create_index("idx_app_analytics_timestamp", "app_analytics", ["timestamp"])


def downgrade() -> None:
    for table in (
        "app_analytics",
        "user_settings",
        "medication_doses",
        "medications",
        "meal_analyses",
        "health_metrics",
        "exercises",
        "glucose_readings",
        "meals",
        "users",
        "auth_config",
        "auth_users",
    ):
        op.drop_table(table)
