from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import ClassVar

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

# Multi-column unique constraints are the DB-side twin of combination checks,
# so their names spell out every column.
metadata_obj = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_N_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)


class Base(DeclarativeBase):
    """Declarative base for models validated by this package.

    `attribute_labels` maps attribute names to the human-readable labels used in
    validation messages; attributes without an entry get a generated label.
    """

    metadata = metadata_obj

    attribute_labels: ClassVar[dict[str, str]] = {}


def create_engine(*, database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, pool_pre_ping=True)


def create_sessionmaker(*, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@asynccontextmanager
async def session_scope(*, database_url: str) -> AsyncIterator[AsyncSession]:
    """Open a one-off engine + session (scripts, tests). Disposes the engine on exit."""
    engine = create_engine(database_url=database_url)
    try:
        async with create_sessionmaker(engine=engine)() as session:
            yield session
    finally:
        await engine.dispose()
