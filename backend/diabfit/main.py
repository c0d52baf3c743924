"""
Diabfit FastAPI Backend Application

Main application entry point for the diabetes and GLP-1 tracking API.
"""

import logging
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from diabfit.api import router
from diabfit.core.config import settings
from diabfit.core.database import auto_create_enabled, get_db_context, init_db
from diabfit.core.exceptions import DiabfitError
from diabfit.schemas.common import ErrorResponse, HealthCheck
from diabfit.services.workout_catalog import seed_workout_catalog

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="FastAPI backend for diabetes and GLP-1 tracking: meals, glucose, exercise, medications and sync",
    version=settings.app_version,
    debug=settings.debug,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)


@app.exception_handler(DiabfitError)
async def diabfit_error_handler(request: Request, exc: DiabfitError):
    """Map service-layer errors to a JSON error body."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    body = ErrorResponse(error=exc.message, detail=exc.detail, status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


# Include API routes
app.include_router(router, prefix="/api")


@app.get("/", tags=["root"])
async def root():
    """Root endpoint with API information."""
    return {
        "message": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "docs": "/docs",
        "api_v1": "/api/v1",
    }


@app.get("/health", response_model=HealthCheck, tags=["health"])
async def health_check():
    """Health check endpoint."""
    return HealthCheck(
        status="healthy", version=settings.app_version, timestamp=datetime.now()
    )


# Startup event
@app.on_event("startup")
async def startup_event():
    """Actions to perform on application startup."""
    if auto_create_enabled():
        init_db()
        with get_db_context() as db:
            seed_workout_catalog(db)
    else:
        logger.info("Skipping create_all, schema is managed by `alembic upgrade head`")
    logger.info(f"{settings.app_name} v{settings.app_version} started")
    logger.info(f"API v1 endpoint: http://{settings.host}:{settings.port}/api/v1")


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Actions to perform on application shutdown."""
    logger.info(f"Shutting down {settings.app_name}")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "diabfit.main:app", host=settings.host, port=settings.port, reload=settings.debug
    )
