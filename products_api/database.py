"""
Database binding - async engine, session factory and the declarative base.

The ``Database`` object is built and opened by the application lifespan and
stored on ``app.state``; request handlers get sessions from it through the
``get_db`` dependency instead of a module-level engine.
"""
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from products_api.utils.logger import get_logger

logger = get_logger(__name__)

# Base class for models
Base = declarative_base()


def get_async_url(url: str) -> str:
    """Convert database URL to async variant"""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return url


class Database:
    """Owns the engine and session factory for one relational store."""

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = get_async_url(url)
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    async def connect(self) -> None:
        """Create the engine and session factory (no-op when already open)"""
        if self.engine is not None:
            return

        engine_kwargs = {"echo": self.echo}
        # SQLite doesn't support pool_size
        if not self.is_sqlite:
            engine_kwargs["pool_size"] = 20
            engine_kwargs["max_overflow"] = 10

        self.engine = create_async_engine(self.url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info(f"Connected to database ({self.engine.url.get_backend_name()})")

    async def create_tables(self) -> None:
        """Create every table registered on Base that does not exist yet"""
        if self.engine is None:
            raise RuntimeError("Database is not connected")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    def session(self) -> AsyncSession:
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory()

    async def dispose(self) -> None:
        """Close every pooled connection; the object can be connected again"""
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self._session_factory = None
        logger.info("Database connections closed")


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Dependency for getting database session"""
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session
