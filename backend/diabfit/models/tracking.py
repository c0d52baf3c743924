"""Day-to-day tracking models: meals, glucose, exercise, vitals."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from .base import Base, SyncMixin, TimestampMixin, new_id


class Meal(Base, TimestampMixin, SyncMixin):
    """A logged meal with its macro totals."""

    __tablename__ = "meals"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)

    name = Column(String, nullable=False)
    meal_type = Column(String, nullable=True)  # breakfast, lunch, dinner, snack
    carbs = Column(Float, nullable=False, default=0)
    protein = Column(Float, nullable=False, default=0)
    calories = Column(Integer, nullable=False, default=0)
    timestamp = Column(DateTime, nullable=False)
    notes = Column(Text, nullable=True)

    user = relationship("User", back_populates="meals")

    __table_args__ = (
        Index("idx_meals_user_id", "user_id"),
        Index("idx_meals_timestamp", "timestamp"),
    )


class GlucoseReading(Base, TimestampMixin, SyncMixin):
    """Blood glucose reading in mg/dL."""

    __tablename__ = "glucose_readings"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)

    level = Column(Integer, nullable=False)
    timestamp = Column(DateTime, nullable=False)
    notes = Column(Text, nullable=True)

    user = relationship("User", back_populates="glucose_readings")

    __table_args__ = (
        Index("idx_glucose_readings_user_id", "user_id"),
        Index("idx_glucose_readings_timestamp", "timestamp"),
    )


class Exercise(Base, TimestampMixin, SyncMixin):
    """Workout entry; duration is in minutes."""

    __tablename__ = "exercises"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)

    type = Column(String, nullable=False)
    duration = Column(Integer, nullable=False)
    intensity = Column(String, nullable=True)  # low, moderate, high
    timestamp = Column(DateTime, nullable=False)
    notes = Column(Text, nullable=True)

    user = relationship("User", back_populates="exercises")

    __table_args__ = (
        Index("idx_exercises_user_id", "user_id"),
        Index("idx_exercises_timestamp", "timestamp"),
    )


class HealthMetric(Base, TimestampMixin, SyncMixin):
    """Vital signs snapshot."""

    __tablename__ = "health_metrics"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)

    systolic_bp = Column(Integer, nullable=True)
    diastolic_bp = Column(Integer, nullable=True)
    heart_rate = Column(Integer, nullable=True)
    weight = Column(Float, nullable=True)
    temperature = Column(Float, nullable=True)
    timestamp = Column(DateTime, nullable=False)

    user = relationship("User", back_populates="health_metrics")

    __table_args__ = (
        Index("idx_health_metrics_user_id", "user_id"),
        Index("idx_health_metrics_timestamp", "timestamp"),
    )
