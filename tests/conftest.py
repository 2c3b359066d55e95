"""Shared fixtures for the test-suite."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from factories import TEST_JWT_SECRET

TEST_DB_PATH = Path(__file__).parent / "test.db"

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["AUTH_JWT_SECRET"] = TEST_JWT_SECRET
os.environ["ENVIRONMENT"] = "test"
os.environ["EMAIL_ENABLED"] = "false"
os.environ["DIGEST_SCHEDULER_ENABLED"] = "false"
os.environ["APP_TIMEZONE"] = "Asia/Tokyo"
for name in ("SENDGRID_API_KEY", "SENDGRID_SENDER", "AUTH_JWT_AUDIENCE"):
    os.environ.pop(name, None)

from app.config import reset_settings_cache  # noqa: E402

reset_settings_cache()


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def clean_database():
    """Recreate every table so each test starts from an empty database."""

    from app.infrastructure import database, models  # noqa: F401

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    yield database
    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)


@pytest.fixture
def session(clean_database):
    db = clean_database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def app(clean_database):
    from main import create_app

    return create_app()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client


def pytest_sessionfinish(session, exitstatus):  # noqa: ARG001
    if "app.infrastructure.database" in sys.modules:
        from app.infrastructure.database import engine

        engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()
