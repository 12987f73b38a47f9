"""Pytest configuration for all tests."""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

os.environ.setdefault("ACTIONBASE_ENVIRONMENT", "testing")
os.environ.setdefault("ACTIONBASE_LOG_FORMAT", "console")

from actionbase.core.config import get_settings  # noqa: E402
from actionbase.infrastructure.persistence.database import Base  # noqa: E402
from actionbase.infrastructure.persistence.models import (  # noqa: E402, F401
    ActionCollectionModel,
    ActionModel,
    PageModel,
)


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Make every test read settings from the current environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency.

    The lifespan is not run, so the built-in hooks are registered here.
    """
    from actionbase.infrastructure.api.app import create_app
    from actionbase.infrastructure.hooks import register_builtin_hooks
    from actionbase.infrastructure.persistence.database import get_db_session

    app = create_app()
    register_builtin_hooks(app.state.hook_registry)
    app.dependency_overrides[get_db_session] = lambda: db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}
