"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for the configured database URL."""

    connect_args: dict[str, object] = {}
    if settings.database_url.startswith("sqlite"):
        # Store calls run on worker threads, one session per call.
        connect_args["check_same_thread"] = False
    return create_engine(
        settings.database_url, pool_pre_ping=True, connect_args=connect_args
    )


engine = build_engine(settings)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from app.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Database schema ready")


def get_db() -> Generator:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
