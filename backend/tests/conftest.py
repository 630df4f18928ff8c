from __future__ import annotations

import os
import sys
import tempfile
from datetime import date
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

# Ensure the project root (which exposes the ``backend`` package) is on ``sys.path``
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

AUTH_USERNAME = "admin@lameca.test"
AUTH_PASSWORD = "M3ca-Dashb0ard!"

os.environ["AUTHORIZATION_USER"] = AUTH_USERNAME
os.environ["AUTHORIZATION_PASSWORD"] = AUTH_PASSWORD
os.environ["AUTH_TOKEN_SECRET"] = "test-secret-with-enough-entropy-0123456789"
os.environ["ENABLE_STARTUP_MIGRATIONS"] = "0"
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite:///{Path(tempfile.mkdtemp(prefix='meca-tests-')) / 'app.db'}",
)

from backend.app.dashboard_cache import DashboardCache  # noqa: E402
from backend.app.database import Base, get_db, get_session_factory  # noqa: E402
from backend.app.main import app  # noqa: E402


class FixedDate(date):
    """``date`` whose ``today()`` is pinned by the ``fixed_today`` fixture."""

    current = date(2025, 6, 15)

    @classmethod
    def today(cls):
        return cls.current


@pytest.fixture
def fixed_today(monkeypatch) -> date:
    FixedDate.current = date(2025, 6, 15)
    monkeypatch.setattr("backend.app.routers.dashboard.date", FixedDate)
    monkeypatch.setattr("backend.app.routers.sectors.date", FixedDate)
    return FixedDate.current


@pytest.fixture
def credentials() -> dict:
    return {"username": AUTH_USERNAME, "password": AUTH_PASSWORD}


@pytest.fixture(autouse=True)
def _reset_dashboard_cache() -> Generator[None, None, None]:
    DashboardCache.invalidate()
    yield
    DashboardCache.invalidate()


@pytest.fixture
def engine(tmp_path):
    # A file database so gateway reads running in worker threads see the same data
    test_engine = create_engine(
        f"sqlite:///{tmp_path / 'dashboard.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def anonymous_client(session_factory) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)
    app.dependency_overrides.pop(get_session_factory, None)


@pytest.fixture
def client(anonymous_client: TestClient) -> TestClient:
    response = anonymous_client.post(
        "/auth/login",
        json={"username": AUTH_USERNAME, "password": AUTH_PASSWORD},
    )
    assert response.status_code == 200
    return anonymous_client
