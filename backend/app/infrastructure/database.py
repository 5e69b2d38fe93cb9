"""Database Session Manager: async engine, per-request sessions, readiness probe.

Invariants:
    - A session that sees an exception is rolled back before it is closed
    - SQLAlchemy exceptions escaping a request become DatabaseError (503);
      anything else propagates unchanged
    - Services commit; the manager never commits on their behalf

Design Decisions:
    - Singleton db_manager created by the FastAPI lifespan (init_db), replaced
      by a test-engine manager in route tests
    - expire_on_commit=False: responses read attributes after commit without
      an implicit async refresh
    - Pool sizing only applies to server databases; SQLite keeps its dialect pool
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from app.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_ERROR_TRANSLATIONS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "commit", "Integrity constraint violated"),
    (OperationalError, "execute", "Connection or operational error"),
    (DBAPIError, "query", "Database driver error"),
    (SQLAlchemyError, "unknown", "Database operation failed"),
)


def translate_db_error(exc: SQLAlchemyError) -> DatabaseError:
    for error_type, operation, message in _ERROR_TRANSLATIONS:
        if isinstance(exc, error_type):
            return DatabaseError(message, operation)
    return DatabaseError("Database operation failed", "unknown")


def engine_options(
    database_url: str, pool_size: int, max_overflow: int,
) -> dict:
    options: dict = {"pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
        )
    return options


class DatabaseSessionManager:
    """Owns the engine and hands out request-scoped AsyncSessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            **engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = translate_db_error(e)
            logger.error(
                f"{type(e).__name__} during {error.operation}: {e}",
                extra={"error_code": error.code},
            )
            raise error from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query round-trips (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
