from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from sqlalchemy import MetaData, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.ext.asyncio import create_async_engine as _sa_create_async_engine
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)

T = TypeVar("T")

_ASYNC_DRIVERS = {
    "postgresql": "postgresql+psycopg",
    "postgres": "postgresql+psycopg",
    "sqlite": "sqlite+aiosqlite",
}


class Base(DeclarativeBase):
    """Declarative base shared by every table the services own."""


def normalize_database_dsn(dsn: str) -> str:
    """Swap a bare driver name for the async driver the services ship with."""
    scheme, sep, rest = dsn.partition("://")
    if not sep:
        return dsn
    return f"{_ASYNC_DRIVERS.get(scheme, scheme)}://{rest}"


def create_async_engine(dsn: str) -> AsyncEngine:
    url = make_url(normalize_database_dsn(dsn))
    options: dict[str, Any] = {"pool_pre_ping": True}
    if url.get_backend_name() != "sqlite":
        options["pool_recycle"] = 1800
    return _sa_create_async_engine(url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all_tables(engine: AsyncEngine, metadata: MetaData) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


class AsyncDatabaseManager:
    """One engine per DSN; each unit of work commits on success and rolls back on error."""

    def __init__(self, dsn: str) -> None:
        self._dsn = normalize_database_dsn(dsn)
        self._engine: AsyncEngine | None = None
        self._sessions: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("database manager is not connected")
        return self._engine

    @property
    def backend(self) -> str:
        return make_url(self._dsn).get_backend_name()

    async def connect(self) -> None:
        if self._engine is None:
            self._engine = create_async_engine(self._dsn)
            self._sessions = create_session_factory(self._engine)
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("database_connected", extra={"component": "devkit", "backend": self.backend})

    async def disconnect(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessions = None

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self._sessions is None:
            await self.connect()
        assert self._sessions is not None
        async with self._sessions() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def run_with_session(self, fn: Callable[[AsyncSession], Awaitable[T]]) -> T:
        async with self.session() as session:
            return await fn(session)
