"""User profile model."""

from sqlalchemy import Boolean, Column, Date, DateTime, Float, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, new_id


class User(Base, TimestampMixin):
    """
    Health profile of an app user.

    Email is deliberately not unique here: older clients created duplicate
    profiles, which MaintenanceService.deduplicate_users removes.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    auth_user_id = Column(
        String(36), ForeignKey("auth_users.id", ondelete="CASCADE"), nullable=True
    )
    email = Column(String, nullable=False)
    name = Column(String, nullable=True)

    date_of_birth = Column(Date, nullable=True)
    gender = Column(String, nullable=True)
    height = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)
    has_diabetes = Column(Boolean, nullable=False, default=False)
    diabetes_type = Column(String, nullable=True)  # type1, type2, gestational, prediabetes
    diagnosis_date = Column(Date, nullable=True)

    last_synced_at = Column(DateTime, nullable=True)

    # Relationships
    meals = relationship("Meal", back_populates="user", cascade="all, delete-orphan")
    glucose_readings = relationship(
        "GlucoseReading", back_populates="user", cascade="all, delete-orphan"
    )
    exercises = relationship(
        "Exercise", back_populates="user", cascade="all, delete-orphan"
    )
    health_metrics = relationship(
        "HealthMetric", back_populates="user", cascade="all, delete-orphan"
    )
    meal_analyses = relationship(
        "MealAnalysis", back_populates="user", cascade="all, delete-orphan"
    )
    medications = relationship(
        "Medication", back_populates="user", cascade="all, delete-orphan"
    )
    medication_doses = relationship(
        "MedicationDose", back_populates="user", cascade="all, delete-orphan"
    )
    settings = relationship(
        "UserSetting", back_populates="user", cascade="all, delete-orphan"
    )
    analytics_events = relationship(
        "AppAnalyticsEvent", back_populates="user", cascade="all, delete-orphan"
    )
    workout_plans = relationship(
        "UserWorkoutPlan", back_populates="user", cascade="all, delete-orphan"
    )
    workout_sessions = relationship(
        "UserWorkoutSession", back_populates="user", cascade="all, delete-orphan"
    )
    exercise_performances = relationship(
        "UserExercisePerformance", back_populates="user", cascade="all, delete-orphan"
    )
    achievements = relationship(
        "UserAchievement", back_populates="user", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_users_email", "email"),
        Index("idx_users_auth_user_id", "auth_user_id"),
    )
