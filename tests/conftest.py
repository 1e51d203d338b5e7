from __future__ import annotations

import asyncio
import os

import pytest

from uniqueness.core.db import Base, create_engine


@pytest.fixture()
def database_url(tmp_path) -> str:
    db_file = tmp_path / "test.sqlite3"
    return f"sqlite+aiosqlite:///{db_file}"


@pytest.fixture(autouse=True)
def _reset_cached_config() -> None:
    # Settings and the message catalog are cached via @lru_cache; tests may tweak env vars.
    os.environ.pop("MESSAGES_PATH", None)
    os.environ.pop("MESSAGE_LANGUAGE", None)
    from uniqueness.core.settings import get_settings
    from uniqueness.messages import get_message_catalog

    get_settings.cache_clear()
    get_message_catalog.cache_clear()


@pytest.fixture(autouse=True)
def _create_test_schema(database_url: str) -> None:
    async def run() -> None:
        # Ensure model modules are imported so Base.metadata is populated.
        from tests import _models as _test_models  # noqa: F401

        engine = create_engine(database_url=database_url)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        await engine.dispose()

    asyncio.run(run())
