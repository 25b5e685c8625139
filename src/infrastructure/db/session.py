from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from src.core.config import Settings, get_settings

from .base import Base

_engine: AsyncEngine | None = None
_engine_url: str | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _get_engine(settings: Settings | None = None) -> AsyncEngine:
    """Return the process engine, building it from ``settings`` on first use.

    One engine exists at a time; asking for a different URL before
    ``dispose_engine()`` is an error rather than a silent reuse.
    """
    global _engine, _engine_url

    url = (settings or get_settings()).async_database_url
    if _engine is None:
        _engine = create_async_engine(
            url,
            echo=False,
            future=True,
            pool_pre_ping=True,
        )
        _engine_url = url
    elif url != _engine_url:
        raise RuntimeError("Database engine is already bound to a different DATABASE_URL")
    return _engine


def get_session_factory(settings: Settings | None = None) -> async_sessionmaker[AsyncSession]:
    global _session_factory

    if _session_factory is None:
        _session_factory = async_sessionmaker(
            _get_engine(settings),
            expire_on_commit=False,
        )
    else:
        _get_engine(settings)
    return _session_factory


async def get_session() -> AsyncIterator[AsyncSession]:
    session_factory = get_session_factory()
    async with session_factory() as session:
        yield session


async def create_schema(settings: Settings | None = None) -> None:
    """Create missing tables. Local SQLite runs use this instead of migrations."""
    async with _get_engine(settings).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _engine, _engine_url, _session_factory

    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _engine_url = None
    _session_factory = None
