"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from topup_market.core.config import DatabaseSettings, get_settings
from topup_market.infrastructure.database.base import Base

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
AsyncSessionFactory: async_sessionmaker[AsyncSession] | None = None


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _install_sqlite_write_locking(engine: AsyncEngine) -> None:
    """Make every SQLite transaction take the write lock up front.

    pysqlite defers BEGIN until the first write, so two connections can both
    read a balance before either writes. BEGIN IMMEDIATE serialises writers at
    transaction start instead, which is what ``SELECT ... FOR UPDATE`` gives us
    on PostgreSQL.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, _connection_record):
        # hand transaction control to SQLAlchemy
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(database: DatabaseSettings, *, debug: bool = False) -> AsyncEngine:
    """Create an engine for ``database``; SQLite engines take the write lock on BEGIN."""
    engine_kwargs: dict[str, Any] = {
        "echo": database.echo or debug,
        "future": True,
    }
    if database.pool_size is not None:
        engine_kwargs["pool_size"] = database.pool_size
    if database.max_overflow is not None:
        engine_kwargs["max_overflow"] = database.max_overflow
    if _is_sqlite(database.url):
        engine_kwargs["connect_args"] = {"timeout": database.sqlite_busy_timeout}

    engine = create_async_engine(database.url, **engine_kwargs)
    if _is_sqlite(database.url):
        _install_sqlite_write_locking(engine)
    logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def _build_engine() -> AsyncEngine:
    settings = get_settings()
    return build_engine(settings.database, debug=settings.debug)


def get_engine() -> AsyncEngine:
    global _engine, AsyncSessionFactory
    if _engine is None:
        _engine = _build_engine()
        AsyncSessionFactory = async_sessionmaker(
            bind=_engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if AsyncSessionFactory is None:
        get_engine()
    assert AsyncSessionFactory is not None  # for mypy
    return AsyncSessionFactory


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create database tables in development mode (migrations preferred)."""
    # imported lazily to register the models on Base.metadata
    from topup_market.db import models  # noqa: F401

    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine (shutdown and tests)."""
    global _engine, AsyncSessionFactory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    AsyncSessionFactory = None
