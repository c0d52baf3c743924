"""Database configuration and session management."""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..core.config import get_settings

settings = get_settings()


def _engine_kwargs(url: str) -> dict:
    """SQLite (used by tests and local runs) needs a shared connection."""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return kwargs
    return {"pool_pre_ping": True}


# Create database engine
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    **_engine_kwargs(settings.DATABASE_URL),
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage:
        @router.get("/meals")
        def list_meals(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context():
    """
    Context manager for database sessions.

    Usage:
        with get_db_context() as db:
            db.query(User).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def auto_create_enabled(url: str = None, debug: bool = None) -> bool:
    """
    Whether startup may create tables directly.

    Only debug runs and SQLite databases do; PostgreSQL schemas are owned by
    Alembic (`alembic upgrade head`).
    """
    url = settings.DATABASE_URL if url is None else url
    debug = settings.debug if debug is None else debug
    return debug or url.startswith("sqlite")


def init_db():
    """Initialize database - create all tables."""
    from ..models import Base

    Base.metadata.create_all(bind=engine)


def drop_db():
    """Drop every table. Used by the test suite."""
    from ..models import Base

    Base.metadata.drop_all(bind=engine)
