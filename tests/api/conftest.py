"""API test fixtures: in-memory SQLite behind a freshly built app.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the schema created
    - The app under test owns a DatabaseSessionManager over that engine, so the
      real get_db dependency runs (no dependency override)
    - App exceptions are turned into responses, not re-raised into the test

Design Decisions:
    - SQLite in-memory: fast, no external dependency, enough for CRUD routes
    - make_client builds apps with explicit Settings (e.g. production mode)
"""

from contextlib import asynccontextmanager
from typing import Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from farminvest.config import Settings
from farminvest.core.domain_types import Environment
from farminvest.db.base import Base
from farminvest.infrastructure.database import DatabaseSessionManager
from farminvest.main import create_app
import farminvest.models  # noqa: F401


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_db(test_engine):
    factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with factory() as session:
        yield session


@pytest.fixture
def make_client(test_engine):
    """Build an AsyncClient for an app running in the given environment."""

    @asynccontextmanager
    async def _make(
        environment: Environment = Environment.TEST,
        configure: Callable[[FastAPI], None] | None = None,
        with_database: bool = True,
    ):
        app = create_app(Settings(environment=environment))
        if configure:
            configure(app)
        if with_database:
            app.state.db = DatabaseSessionManager(test_engine)
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(
            transport=transport, base_url="http://test",
        ) as c:
            yield c

    return _make


@pytest.fixture
async def client(make_client):
    async with make_client() as c:
        yield c


@pytest.fixture
async def drop_investments(test_engine):
    """Simulate a storage failure: the table disappears under the app."""

    async def _drop():
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    return _drop
