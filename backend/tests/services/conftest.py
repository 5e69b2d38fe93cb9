"""Service test fixtures: async DB, FastAPI test client, fake plan generator.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe talks to the test engine
    - get_plan_generator overridden: no test ever reaches the Anthropic API

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - FakePlanGenerator returns whatever plan (or raises whatever error) the
      test configured, and records the profile it was called with
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import app.models  # noqa: F401
from app.api.deps import get_plan_generator
from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.models.muscle_group import MuscleGroup
import app.infrastructure.database as db_module
from tests.services.factories import FakePlanGenerator
from app.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fake_generator():
    return FakePlanGenerator()


@pytest.fixture
async def client(test_engine, test_session_factory, fake_generator):
    """FastAPI test client with DB and plan generator dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_plan_generator] = lambda: fake_generator

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_muscle_groups(test_db):
    """Insert the reference muscle groups the migration seeds in production."""
    groups = [MuscleGroup(name=n) for n in ("Chest", "Back", "Biceps")]
    test_db.add_all(groups)
    await test_db.commit()
    return groups
