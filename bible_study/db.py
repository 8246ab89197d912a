"""Async database session and engine (SQLAlchemy 2.0 + aiosqlite)."""
from collections.abc import AsyncGenerator
from datetime import datetime, timezone

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from bible_study.config import get_settings

settings = get_settings()

_is_sqlite = settings.database_url.startswith("sqlite")

# Embedded SQLite file: one connection per session, no pooling across event loops.
engine = create_async_engine(
    settings.database_url,
    echo=settings.db_echo,
    future=True,
    **({"poolclass": NullPool} if _is_sqlite else {}),
)

if _is_sqlite:

    @event.listens_for(engine.sync_engine, "connect")
    def _sqlite_pragmas(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """Declarative base for all models."""

    pass


def utcnow() -> datetime:
    """Timezone-aware now() used for created_at / completed_at columns."""
    return datetime.now(timezone.utc)


async def init_models() -> None:
    """Create tables that do not exist yet (embedded DB bootstrap; Alembic for upgrades)."""
    import bible_study.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields an async session; close after request."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
