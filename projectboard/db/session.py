"""
Persistence handle: owns the async engine and session factory.

One ``Database`` is built at startup, kept on ``app.state.database`` and
disposed at shutdown. Request handlers get a session through ``get_db``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from projectboard.db.base import Base

logger = logging.getLogger(__name__)


def _engine_options(database_url: str, echo: bool) -> dict:
    options: dict = {"echo": echo, "pool_pre_ping": True}
    # SQLite pools do not accept sizing arguments
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=5,
            max_overflow=10,
            pool_timeout=30,
            pool_recycle=300,
            pool_use_lifo=True,
            pool_reset_on_return="rollback",
        )
    return options


class Database:
    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> None:
        if self._engine is not None:
            return
        logger.info("Creating async database engine")
        self._engine = create_async_engine(
            self.database_url, **_engine_options(self.database_url, self.echo)
        )
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    async def create_tables(self) -> None:
        # Register models with the metadata before create_all
        import projectboard.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if self._session_factory is None:
            raise RuntimeError("Database is not open")
        async with self._session_factory() as session:
            try:
                yield session
            finally:
                await session.close()

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database connections closed")


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Per-request session, the main FastAPI dependency."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
