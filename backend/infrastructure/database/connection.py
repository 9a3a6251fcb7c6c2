"""Database connection and session management."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ..config import Settings
from .models import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Storage client owning the async engine and session factory.

    Constructed explicitly at startup and handed to whatever needs sessions;
    ``connect()`` opens the pool and ``close()`` disposes it.
    """

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        pool_size: int | None = None,
        max_overflow: int | None = None,
        connect_args: dict | None = None,
    ):
        self._url = url
        self._echo = echo
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._connect_args = connect_args or {}
        self._engine: AsyncEngine | None = None
        self._session_maker: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    async def connect(self) -> None:
        """Create the engine and verify connectivity."""
        if self._engine is not None:
            return

        engine_kwargs: dict = {
            "echo": self._echo,
            "pool_pre_ping": True,
            "connect_args": self._connect_args,
        }
        # SQLite pools don't take sizing arguments
        if not self._url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=self._pool_size or 5,
                max_overflow=self._max_overflow or 10,
                pool_timeout=10,
                pool_recycle=3600,
            )

        self._engine = create_async_engine(self._url, **engine_kwargs)
        self._session_maker = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection established")

    async def close(self) -> None:
        """Dispose of the connection pool."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        logger.info("Database connection closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Scoped session; rolled back on error and always closed."""
        if self._session_maker is None:
            raise RuntimeError("Database is not connected")
        async with self._session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_all(self) -> None:
        """Create tables for all registered models."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)


def create_database(settings: Settings) -> Database:
    """Build the storage client from settings."""
    connect_args = {"ssl": "require"} if settings.is_production else {}
    return Database(
        settings.database_url,
        echo=settings.database_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        connect_args=connect_args,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting database sessions."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
