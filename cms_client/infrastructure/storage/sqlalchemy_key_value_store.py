"""Durable KeyValueStore backed by SQLAlchemy (SQLite per client profile by default)."""

import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from cms_client.application.interfaces import KeyValueStore
from cms_client.infrastructure.database.base import Base
from cms_client.infrastructure.database.models import LocalStorageEntryModel

logger = logging.getLogger(__name__)


class SQLAlchemyKeyValueStore(KeyValueStore):
    """Implements the KeyValueStore port on the ``local_storage`` table.

    Each call runs in its own short transaction. The table is created on
    first use.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession],
    ):
        self._engine = engine
        self._session_factory = session_factory
        self._schema_ready = False

    async def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._schema_ready = True
        logger.debug("local_storage table ready")

    async def get(self, key: str) -> str | None:
        await self._ensure_schema()
        async with self._session_factory() as session:
            entry = await session.get(LocalStorageEntryModel, key)
            return entry.value if entry else None

    async def set(self, key: str, value: str) -> None:
        await self._ensure_schema()
        async with self._session_factory() as session:
            entry = await session.get(LocalStorageEntryModel, key)
            if entry is None:
                session.add(LocalStorageEntryModel(key=key, value=value))
            else:
                entry.value = value
            await session.commit()

    async def remove(self, key: str) -> None:
        await self._ensure_schema()
        async with self._session_factory() as session:
            await session.execute(
                delete(LocalStorageEntryModel).where(LocalStorageEntryModel.key == key)
            )
            await session.commit()
