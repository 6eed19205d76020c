"""
Shared test fixtures for projectboard.

Uses an in-memory SQLite database (aiosqlite, single shared connection) with
per-test table create/drop, and an httpx client bound to the ASGI app with
``get_db`` overridden.
"""

import os

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-tests")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SEED_ON_STARTUP", "false")

from projectboard.db.base import Base  # noqa: E402
from projectboard.main import app  # noqa: E402
import projectboard.models  # noqa: E402,F401

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    engine = create_async_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine):
    factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with factory() as session:
        yield session


# ---------------------------------------------------------------------------
# Test client
# ---------------------------------------------------------------------------


def override_db(target_app, db_session):
    from projectboard.db.session import get_db

    async def override_get_db():
        try:
            yield db_session
        finally:
            pass

    target_app.dependency_overrides[get_db] = override_get_db


@pytest_asyncio.fixture(scope="function")
async def test_client(db_session):
    override_db(app, db_session)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def dev_client(db_session):
    """Client for an app built in development mode, so /api/dev is mounted."""
    from projectboard.config import Settings
    from projectboard.main import create_app

    dev_app = create_app(Settings(environment="development"))
    override_db(dev_app, db_session)

    async with AsyncClient(
        transport=ASGITransport(app=dev_app), base_url="http://test"
    ) as client:
        yield client


@pytest_asyncio.fixture(scope="function")
async def auth_headers(test_client):
    """JWT auth headers for the demo identity."""
    resp = await test_client.post(
        "/api/auth/login",
        json={"email": "demo@demo.cz", "password": "demo"},
    )
    assert resp.status_code == 200, resp.text
    token = resp.json()["token"]
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture(scope="function")
async def project_factory(db_session):
    from projectboard.db.projects import ProjectRepository

    repository = ProjectRepository(db_session)

    async def _create(title: str = "Test Project", description: str = ""):
        return await repository.create_project(title, description)

    return _create
