"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to a DatabaseSessionManager bound to the test engine,
      so route tests exercise the same rollback/error mapping as production
    - db_manager patched for the readiness probe, which reads it directly

Design Decisions:
    - SQLite in-memory: fast, no external dependency; recursive CTEs and the
      conditional UPDATE sweep behave the same as on PostgreSQL
    - Clock pinned to T0 for service tests that assert timestamps
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from adboard.db.base import Base
from adboard.infrastructure.database import get_db, DatabaseSessionManager
from adboard.infrastructure.repositories import (
    SqlAdRepository,
    SqlCategoryRepository,
    SqlTagRepository,
    SqlUserRepository,
)
from adboard.models import User
from adboard.services.ad_service import AdService
from adboard.services.category_hierarchy_manager import CategoryHierarchyManager
from adboard.services.tag_service import TagService
import adboard.infrastructure.database as db_module
from adboard.main import app

T0 = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


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
async def seed_user(test_db):
    """Insert an ad owner directly into the test DB."""
    user = User(email="owner@example.com", first_name="Ada", last_name="Owner")
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def other_user(test_db):
    user = User(email="other@example.com", first_name="Bo", last_name="Other")
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
def category_manager(test_db):
    return CategoryHierarchyManager(SqlCategoryRepository(test_db))


@pytest.fixture
def tag_service(test_db):
    return TagService(SqlTagRepository(test_db))


@pytest.fixture
def ad_service(test_db):
    return AdService(
        SqlAdRepository(test_db),
        SqlCategoryRepository(test_db),
        SqlTagRepository(test_db),
        SqlUserRepository(test_db),
        clock=lambda: T0,
    )


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    test_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    test_manager.engine = test_engine
    test_manager._session_factory = test_session_factory

    async def override_get_db():
        async with test_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    db_module.db_manager = test_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
