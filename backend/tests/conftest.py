"""
Zogakzip Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── db_engine: in-memory SQLite engine with the full schema
    ├── db_session: AsyncSession on that engine, for service-level tests
    ├── temp_uploads: temporary upload directory
    └── test_client: HTTPX AsyncClient whose requests share db_engine

The schema is created per test, so every test starts from empty tables.
"""

import os
import tempfile
from typing import AsyncGenerator

# Override settings for testing BEFORE any zogakzip imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="zogakzip_test_")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import zogakzip.models  # noqa: F401  (registers tables)
from zogakzip.database import Base, get_db_session


@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite database shared by every connection of one test.

    StaticPool hands out a single connection, so the schema created here is
    visible to the route handlers' sessions.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    Session for calling services directly.

    Usage:
        async def test_create(db_session):
            group = await group_service.create_group(db_session, data)
    """
    async with session_factory() as session:
        yield session


@pytest.fixture
def temp_uploads(tmp_path):
    upload_dir = tmp_path / "uploads"
    upload_dir.mkdir()
    return str(upload_dir)


@pytest_asyncio.fixture
async def test_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP test client wired to the test database.

    Each request gets its own session with the same commit/rollback
    behaviour as zogakzip.database.get_db_session.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from zogakzip.main import create_app

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db_session] = override_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Request payload helpers
# ══════════════════════════════════════════════════════════════════════════

def group_payload(**overrides):
    payload = {
        "name": "Summer Trip",
        "groupPassword": "group-secret",
        "imageUrl": "/uploads/1.jpg",
        "isPublic": True,
        "introduction": "Friends from college",
    }
    payload.update(overrides)
    return payload


def post_payload(**overrides):
    payload = {
        "nickname": "jiwoo",
        "title": "Beach day",
        "content": "We watched the sunset",
        "postPassword": "post-secret",
        "groupPassword": "group-secret",
        "imageUrl": "/uploads/2.jpg",
        "tags": ["beach", "sunset"],
        "location": "Busan",
        "moment": "2024-07-01T18:30:00Z",
        "isPublic": True,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_group(test_client):
    """POSTs a group and returns its JSON."""
    async def _make(**overrides):
        response = await test_client.post("/api/groups", json=group_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_post(test_client):
    """POSTs a post into a group and returns its JSON."""
    async def _make(group_id, **overrides):
        response = await test_client.post(
            f"/api/groups/{group_id}/posts", json=post_payload(**overrides)
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _make
