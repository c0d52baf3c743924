"""Database models."""

from .base import Base
from .auth import AuthUser, AuthConfig
from .user import User

# Tracking models
from .tracking import Meal, GlucoseReading, Exercise, HealthMetric
from .meal_analysis import MealAnalysis
from .medication import Medication, MedicationDose

# Settings and analytics
from .preferences import UserSetting, AppAnalyticsEvent

# Workout programs
from .workout import (
    WorkoutPlan,
    WorkoutSession,
    ExerciseLibraryItem,
    SessionExercise,
    WorkoutAchievement,
    UserWorkoutPlan,
    UserWorkoutSession,
    UserExercisePerformance,
    UserAchievement,
)

# Tables whose rows belong to a user (user_id -> users.id)
USER_OWNED_MODELS = (
    Meal,
    GlucoseReading,
    Exercise,
    HealthMetric,
    MealAnalysis,
    Medication,
    MedicationDose,
    UserSetting,
    AppAnalyticsEvent,
    UserExercisePerformance,
    UserWorkoutSession,
    UserWorkoutPlan,
    UserAchievement,
)

__all__ = [
    "Base",
    "AuthUser",
    "AuthConfig",
    "User",
    # Tracking
    "Meal",
    "GlucoseReading",
    "Exercise",
    "HealthMetric",
    "MealAnalysis",
    "Medication",
    "MedicationDose",
    # Settings and analytics
    "UserSetting",
    "AppAnalyticsEvent",
    # Workout programs
    "WorkoutPlan",
    "WorkoutSession",
    "ExerciseLibraryItem",
    "SessionExercise",
    "WorkoutAchievement",
    "UserWorkoutPlan",
    "UserWorkoutSession",
    "UserExercisePerformance",
    "UserAchievement",
    "USER_OWNED_MODELS",
]
