"""
Test setup: a throwaway SQLite file for DATABASE_URL (set before bible_study is imported),
no Redis, schema recreated for every test that asks for the database.
"""
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="bible_study_test_")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(_DB_DIR, "test.sqlite")
os.environ["APP_ENV"] = "test"
os.environ.pop("REDIS_URL", None)

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

import bible_study.models  # noqa: F401,E402
from bible_study.db import Base, async_session_factory, engine


async def _reset_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest_asyncio.fixture
async def db_session():
    """Fresh schema + one session."""
    await _reset_schema()
    async with async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client():
    """Fresh schema + httpx client bound to the ASGI app."""
    await _reset_schema()
    from bible_study.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
