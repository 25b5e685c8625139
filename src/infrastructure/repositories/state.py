"""
State repositories.

Services persist JSON-compatible snapshots under a small set of keys and make
no assumption about where they end up.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Protocol

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from src.infrastructure.db.models import StateSnapshot

logger = structlog.get_logger()

USERS_KEY = "users"
SESSION_KEY = "session"
PROJECTS_KEY = "projects"


class StateRepository(Protocol):
    """Key/snapshot store used by the domain services (allows swapping media)."""

    async def load(self, key: str) -> Any | None:
        """Return the stored snapshot for ``key`` or None."""
        ...

    async def save(self, key: str, snapshot: Any) -> None:
        """Replace the stored snapshot for ``key``."""
        ...

    async def delete(self, key: str) -> None:
        """Drop the snapshot for ``key`` if present."""
        ...


@dataclass
class InMemoryStateRepository:
    """Process-local store. Snapshots are deep-copied in and out."""

    snapshots: dict[str, Any] = field(default_factory=dict)

    async def load(self, key: str) -> Any | None:
        if key not in self.snapshots:
            return None
        return copy.deepcopy(self.snapshots[key])

    async def save(self, key: str, snapshot: Any) -> None:
        self.snapshots[key] = copy.deepcopy(snapshot)

    async def delete(self, key: str) -> None:
        self.snapshots.pop(key, None)


class SqlStateRepository:
    """Stores each snapshot as a JSON row in ``state_snapshots``."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def load(self, key: str) -> Any | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(StateSnapshot.payload).where(StateSnapshot.key == key)
            )
            return result.scalar_one_or_none()

    async def save(self, key: str, snapshot: Any) -> None:
        async with self.session_factory() as session:
            row = await session.get(StateSnapshot, key)
            if row is None:
                session.add(StateSnapshot(key=key, payload=snapshot))
            else:
                row.payload = snapshot
            await session.commit()
        logger.debug("state_snapshot_saved", key=key)

    async def delete(self, key: str) -> None:
        async with self.session_factory() as session:
            await session.execute(delete(StateSnapshot).where(StateSnapshot.key == key))
            await session.commit()
        logger.debug("state_snapshot_deleted", key=key)
