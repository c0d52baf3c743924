"""
API v1 routes aggregation.
"""

from fastapi import APIRouter
from diabfit.api.v1.auth import router as auth_router
from diabfit.api.v1.users import router as users_router
from diabfit.api.v1.records import (
    meals_router,
    exercises_router,
    health_metrics_router,
    meal_analyses_router,
)
from diabfit.api.v1.glucose import router as glucose_router
from diabfit.api.v1.medications import router as medications_router
from diabfit.api.v1.settings import router as settings_router
from diabfit.api.v1.analytics import router as analytics_router
from diabfit.api.v1.sync import router as sync_router
from diabfit.api.v1.launch import router as launch_router
from diabfit.api.v1.admin import router as admin_router
from diabfit.api.v1.workouts import router as workouts_router

router = APIRouter(prefix="/v1")

# Include sub-routers
router.include_router(auth_router)
router.include_router(users_router)
router.include_router(meals_router, prefix="/meals", tags=["meals"])
router.include_router(exercises_router, prefix="/exercises", tags=["exercises"])
router.include_router(
    health_metrics_router, prefix="/health-metrics", tags=["health-metrics"]
)
router.include_router(
    meal_analyses_router, prefix="/meal-analyses", tags=["meal-analyses"]
)
router.include_router(glucose_router, prefix="/glucose", tags=["glucose"])
router.include_router(
    medications_router, prefix="/medications", tags=["medications"]
)
router.include_router(settings_router)
router.include_router(analytics_router)
router.include_router(sync_router)
router.include_router(launch_router)
router.include_router(admin_router)
router.include_router(workouts_router)
