"""
Workout programs.

The catalog tables (plans, sessions, exercise library, achievements) are
shared by every user and read-only through the API. Enrollments, logged
sessions, exercise performance and earned achievements belong to a user.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from ..utils.time_utils import utcnow
from .base import Base, SyncMixin, TimestampMixin, new_id


# ============================================================
# CATALOG
# ============================================================


class WorkoutPlan(Base, TimestampMixin):
    """A multi-week program aimed at one condition and fitness level."""

    __tablename__ = "workout_plans"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    target_condition = Column(String, nullable=False)  # type1_diabetes, type2_diabetes, glp1_users, ...
    fitness_level = Column(String, nullable=False)  # beginner, intermediate, advanced, athlete
    duration_weeks = Column(Integer, nullable=False, default=8)
    sessions_per_week = Column(Integer, nullable=False, default=3)
    session_duration_minutes = Column(Integer, nullable=False, default=30)
    equipment_needed = Column(JSON, nullable=True)
    benefits = Column(JSON, nullable=True)
    precautions = Column(JSON, nullable=True)
    image_url = Column(String, nullable=True)
    created_by = Column(String, nullable=False, default="system")
    is_active = Column(Boolean, nullable=False, default=True)

    sessions = relationship(
        "WorkoutSession",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="WorkoutSession.session_number",
    )

    __table_args__ = (
        Index("idx_workout_plans_condition_level", "target_condition", "fitness_level"),
    )

    @property
    def total_sessions(self) -> int:
        return self.duration_weeks * self.sessions_per_week


class WorkoutSession(Base):
    """One planned session of a workout plan."""

    __tablename__ = "workout_sessions"

    id = Column(String(36), primary_key=True, default=new_id)
    workout_plan_id = Column(
        String(36), ForeignKey("workout_plans.id", ondelete="CASCADE"), nullable=False
    )
    session_number = Column(Integer, nullable=False)
    week_number = Column(Integer, nullable=False)
    day_number = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    warm_up_duration = Column(Integer, nullable=False, default=5)
    cool_down_duration = Column(Integer, nullable=False, default=5)
    total_duration = Column(Integer, nullable=False)
    intensity_level = Column(String, nullable=True)  # low, moderate, high
    focus_areas = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    plan = relationship("WorkoutPlan", back_populates="sessions")
    exercises = relationship(
        "SessionExercise",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="SessionExercise.order_in_session",
    )

    __table_args__ = (
        Index("idx_workout_sessions_plan_week", "workout_plan_id", "week_number"),
    )


class ExerciseLibraryItem(Base, TimestampMixin):
    """A reusable exercise with diabetes and GLP-1 guidance."""

    __tablename__ = "exercise_library"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)  # cardio, strength, flexibility, balance
    subcategory = Column(String, nullable=True)
    difficulty_level = Column(String, nullable=False)
    equipment_needed = Column(JSON, nullable=True)
    muscle_groups = Column(JSON, nullable=True)
    instructions = Column(JSON, nullable=True)
    safety_tips = Column(JSON, nullable=True)
    modifications = Column(JSON, nullable=True)
    diabetes_benefits = Column(JSON, nullable=True)
    glp1_considerations = Column(JSON, nullable=True)
    contraindications = Column(JSON, nullable=True)
    calories_per_minute = Column(Float, nullable=True)
    image_url = Column(String, nullable=True)
    video_url = Column(String, nullable=True)
    demonstration_gif_url = Column(String, nullable=True)

    __table_args__ = (
        Index("idx_exercise_library_category_difficulty", "category", "difficulty_level"),
    )


class SessionExercise(Base):
    """An exercise slot inside a planned session."""

    __tablename__ = "session_exercises"

    id = Column(String(36), primary_key=True, default=new_id)
    workout_session_id = Column(
        String(36), ForeignKey("workout_sessions.id", ondelete="CASCADE"), nullable=False
    )
    exercise_id = Column(
        String(36), ForeignKey("exercise_library.id", ondelete="CASCADE"), nullable=False
    )
    order_in_session = Column(Integer, nullable=False)
    sets = Column(Integer, nullable=True)
    reps = Column(Integer, nullable=True)
    duration_seconds = Column(Integer, nullable=True)
    rest_seconds = Column(Integer, nullable=False, default=60)
    intensity_percentage = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    is_optional = Column(Boolean, nullable=False, default=False)

    session = relationship("WorkoutSession", back_populates="exercises")
    exercise = relationship("ExerciseLibraryItem")

    __table_args__ = (
        Index("idx_session_exercises_session_order", "workout_session_id", "order_in_session"),
    )


class WorkoutAchievement(Base):
    """
    A badge earned when logged sessions meet ``criteria``.

    ``condition_type`` is ``general`` or the target condition of the plans
    it applies to.
    """

    __tablename__ = "workout_achievements"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False, unique=True)
    description = Column(Text, nullable=True)
    icon = Column(String, nullable=True)
    category = Column(String, nullable=True)  # milestone, consistency, special
    condition_type = Column(String, nullable=False, default="general")
    criteria = Column(JSON, nullable=False)
    reward_points = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)


# ============================================================
# USER PROGRESS
# ============================================================


class UserWorkoutPlan(Base, TimestampMixin, SyncMixin):
    """A user's enrollment in a workout plan."""

    __tablename__ = "user_workout_plans"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    workout_plan_id = Column(
        String(36), ForeignKey("workout_plans.id", ondelete="CASCADE"), nullable=False
    )
    start_date = Column(Date, nullable=False)
    target_end_date = Column(Date, nullable=True)
    current_week = Column(Integer, nullable=False, default=1)
    current_session = Column(Integer, nullable=False, default=1)
    status = Column(String, nullable=False, default="active")  # active, paused, completed, cancelled
    progress_percentage = Column(Float, nullable=False, default=0.0)
    notes = Column(Text, nullable=True)

    user = relationship("User", back_populates="workout_plans")
    plan = relationship("WorkoutPlan")

    __table_args__ = (
        Index("idx_user_workout_plans_user_status", "user_id", "status"),
    )


class UserWorkoutSession(Base, TimestampMixin, SyncMixin):
    """A workout the user logged, with optional glucose and mood readings."""

    __tablename__ = "user_workout_sessions"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    user_workout_plan_id = Column(
        String(36), ForeignKey("user_workout_plans.id", ondelete="CASCADE"), nullable=True
    )
    workout_session_id = Column(
        String(36), ForeignKey("workout_sessions.id", ondelete="SET NULL"), nullable=True
    )
    completed_at = Column(DateTime, nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    calories_burned = Column(Integer, nullable=True)
    perceived_exertion = Column(Integer, nullable=True)  # 1-10
    notes = Column(Text, nullable=True)
    glucose_before = Column(Integer, nullable=True)
    glucose_after = Column(Integer, nullable=True)
    mood_before = Column(String, nullable=True)
    mood_after = Column(String, nullable=True)
    status = Column(String, nullable=False, default="scheduled")  # scheduled, in_progress, completed, skipped

    user = relationship("User", back_populates="workout_sessions")
    enrollment = relationship("UserWorkoutPlan")
    performances = relationship(
        "UserExercisePerformance", back_populates="session", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_user_workout_sessions_user_completed", "user_id", "completed_at"),
    )


class UserExercisePerformance(Base, TimestampMixin, SyncMixin):
    """Sets, reps and ratings for one exercise in a logged session."""

    __tablename__ = "user_exercise_performance"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    exercise_id = Column(
        String(36), ForeignKey("exercise_library.id", ondelete="CASCADE"), nullable=False
    )
    user_workout_session_id = Column(
        String(36), ForeignKey("user_workout_sessions.id", ondelete="CASCADE"), nullable=True
    )
    sets_completed = Column(Integer, nullable=True)
    reps_completed = Column(Integer, nullable=True)
    duration_completed_seconds = Column(Integer, nullable=True)
    weight_used = Column(Float, nullable=True)
    difficulty_rating = Column(Integer, nullable=True)  # 1-5
    form_rating = Column(Integer, nullable=True)  # 1-5
    notes = Column(Text, nullable=True)

    user = relationship("User", back_populates="exercise_performances")
    session = relationship("UserWorkoutSession", back_populates="performances")

    __table_args__ = (
        Index("idx_user_exercise_performance_user_exercise", "user_id", "exercise_id"),
    )


class UserAchievement(Base):
    """An achievement a user has earned; one row per (user, achievement)."""

    __tablename__ = "user_achievements"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    achievement_id = Column(
        String(36), ForeignKey("workout_achievements.id", ondelete="CASCADE"), nullable=False
    )
    earned_at = Column(DateTime, nullable=False, default=utcnow)
    progress_data = Column(JSON, nullable=True)

    user = relationship("User", back_populates="achievements")
    achievement = relationship("WorkoutAchievement")

    __table_args__ = (
        UniqueConstraint("user_id", "achievement_id", name="uq_user_achievements_user_achievement"),
        Index("idx_user_achievements_user_id", "user_id"),
    )
