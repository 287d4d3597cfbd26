"""Database Session Manager: owned async connection pool with scoped sessions.

Invariants:
    - One manager per application, created in the lifespan and stored on
      app.state.db (no module-level singleton)
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Pool is bounded: once pool_size + max_overflow connections are checked
      out, further requests wait for a release
    - All SQLAlchemy exceptions raised inside session() become DatabaseError

Design Decisions:
    - Manager wraps an AsyncEngine it was handed: tests build one over
      in-memory SQLite, production over asyncpg via from_url()
    - expire_on_commit=False: returned ORM rows stay readable after commit
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from farminvest.core.errors import DatabaseError

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Owns an engine and hands out scoped sessions."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )

    @classmethod
    def from_url(
        cls, database_url: str, pool_size: int = 10, max_overflow: int = 0,
    ) -> "DatabaseSessionManager":
        engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        return cls(engine)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error: {e}")
            raise DatabaseError(
                "Database operation failed", "session", error_cause(e),
            ) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except (DatabaseError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_db_manager(request: Request) -> DatabaseSessionManager:
    """Return the manager owned by the running application."""
    manager = getattr(request.app.state, "db", None)
    if manager is None:
        raise RuntimeError("Database not initialized")
    return manager


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for a request-scoped database session."""
    async with get_db_manager(request).session() as session:
        yield session


def error_cause(e: SQLAlchemyError) -> str:
    """The driver's own message when there is one."""
    orig = getattr(e, "orig", None)
    return str(orig) if orig is not None else str(e)
