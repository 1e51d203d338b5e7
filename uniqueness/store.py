from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession


class RecordStore:
    """Read-only lookup abstraction used by the uniqueness checker."""

    async def exists(self, query: Select) -> bool:
        raise NotImplementedError

    async def fetch_up_to(self, query: Select, limit: int) -> Sequence[Any]:
        raise NotImplementedError


class SqlAlchemyRecordStore(RecordStore):
    """
    Runs lookups on an `AsyncSession`.

    Autoflush is disabled around every lookup: the candidate is usually dirty or
    pending in the same session, and flushing it first would make it match itself
    (or write a primary-key change we're still deciding about).
    """

    def __init__(self, *, session: AsyncSession):
        self._session = session

    async def exists(self, query: Select) -> bool:
        with self._session.no_autoflush:
            row = (await self._session.execute(query.limit(1))).first()
        return row is not None

    async def fetch_up_to(self, query: Select, limit: int) -> Sequence[Any]:
        with self._session.no_autoflush:
            result = await self._session.execute(query.limit(limit))
            return result.scalars().all()
