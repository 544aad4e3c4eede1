"""Database configuration and session management."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Request
from sqlalchemy import Executable, event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import Settings
from .models.base import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Storage client owning the async engine and session factory.

    Built once at startup and injected where needed; nothing in the package
    holds a module-level engine.

    Example:
        database = Database.from_settings(settings)
        await database.init()
        async with database.session() as session:
            ...
        await database.close()
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs: Any):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Create a pooled database client from application settings."""
        return cls(
            settings.sqlalchemy_url,
            echo=settings.debug,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=True,
        )

    async def init(self) -> None:
        """Create all tables and indexes if they don't exist.

        Safe to call on every startup.
        """
        async with self.engine.begin() as conn:
            # Import all models to ensure they are registered
            from .models import (  # noqa: F401
                Profile,
                Project,
                ProjectSkill,
                Skill,
                WorkExperience,
            )

            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema initialized")

    async def close(self) -> None:
        """Dispose the engine and close all pooled connections."""
        await self.engine.dispose()
        logger.info("Database connections closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Transactional session scope: commit on success, roll back on error."""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> None:
        """Run ``SELECT 1``; raises if the database is unreachable."""
        await self.fetch_one(text("SELECT 1"))

    async def fetch_all(self, statement: Executable) -> list[Any]:
        """Execute a query and return all rows."""
        async with self.session() as session:
            result = await session.execute(statement)
            return list(result.all())

    async def fetch_one(self, statement: Executable) -> Any | None:
        """Execute a query and return the first row, or None."""
        async with self.session() as session:
            result = await session.execute(statement)
            return result.first()

    async def execute(self, statement: Executable) -> int:
        """Execute a write statement and return the affected row count."""
        async with self.session() as session:
            result = await session.execute(statement)
            return result.rowcount


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency to get a database session.

    Repository functions commit their own writes, so a failed commit becomes
    an error response. Anything left uncommitted is rolled back on close.

    Yields:
        AsyncSession: Session bound to the app's Database

    Example:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            result = await db.execute(select(Item))
            return result.scalars().all()
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        yield session
