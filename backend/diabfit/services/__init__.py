"""
Services package initialization.
"""

from diabfit.services.auth_service import AuthService
from diabfit.services.user_service import UserService
from diabfit.services.record_service import OwnedRecordService
from diabfit.services.glucose_service import GlucoseService
from diabfit.services.medication_service import MedicationService
from diabfit.services.preference_service import SettingsService, AnalyticsService
from diabfit.services.sync_service import SyncService, SYNC_ENTITIES
from diabfit.services.maintenance_service import MaintenanceService
from diabfit.services.launch_service import LaunchService
from diabfit.services.workout_service import WorkoutService
from diabfit.services.workout_catalog import seed_workout_catalog

__all__ = [
    "AuthService",
    "UserService",
    "OwnedRecordService",
    "GlucoseService",
    "MedicationService",
    "SettingsService",
    "AnalyticsService",
    "SyncService",
    "SYNC_ENTITIES",
    "MaintenanceService",
    "LaunchService",
    "WorkoutService",
    "seed_workout_catalog",
]
