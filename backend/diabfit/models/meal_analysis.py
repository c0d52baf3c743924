"""Stored results of photo-based meal analyses."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .base import Base, SyncMixin, TimestampMixin, new_id

# Columns added after the table first shipped, with the value existing rows
# are backfilled to by MaintenanceService.backfill_meal_analyses.
ENRICHMENT_DEFAULTS = {
    "nutritional_score": 0.0,
    "confidence": 0.0,
    "total_calories": 0,
    "carbohydrates": 0.0,
    "protein": 0.0,
    "fat": 0.0,
    "glycemic_index": 0,
    "glp1_compatibility_score": 0.0,
    "overall_health_score": 0.0,
    "is_favorite": False,
}


class MealAnalysis(Base, TimestampMixin, SyncMixin):
    """
    Nutrition analysis of a meal.

    analysis_data holds the full analyzer payload; the flat columns are the
    fields the app filters and sorts on.
    """

    __tablename__ = "meal_analyses"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)

    meal_name = Column(String, nullable=False, default="Unknown Meal")
    analysis_data = Column(JSON, nullable=True)
    recommendations = Column(JSON, nullable=True)

    # Scores
    nutritional_score = Column(Float, nullable=True, default=0.0)
    confidence = Column(Float, nullable=True, default=0.0)
    glp1_compatibility_score = Column(Float, nullable=True, default=0.0)
    overall_health_score = Column(Float, nullable=True, default=0.0)

    # Macro breakdown
    total_calories = Column(Integer, nullable=True, default=0)
    carbohydrates = Column(Float, nullable=True, default=0.0)
    protein = Column(Float, nullable=True, default=0.0)
    fat = Column(Float, nullable=True, default=0.0)
    glycemic_index = Column(Integer, nullable=True, default=0)

    primary_dish = Column(String, nullable=True)
    key_recommendations = Column(Text, nullable=True)
    warnings = Column(Text, nullable=True)
    analysis_version = Column(String, nullable=True, default="1.0")
    image_url = Column(String, nullable=True)

    # User feedback
    user_rating = Column(Integer, nullable=True)  # 1-5
    user_notes = Column(Text, nullable=True)
    is_favorite = Column(Boolean, nullable=True, default=False)

    timestamp = Column(DateTime, nullable=False)

    user = relationship("User", back_populates="meal_analyses")

    __table_args__ = (
        Index("idx_meal_analyses_user_id", "user_id"),
        Index("idx_meal_analyses_timestamp", "timestamp"),
        Index("idx_meal_analyses_created_at", "created_at"),
    )
