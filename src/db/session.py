"""Async engine and session wiring for the disclosure record store.

Provides:
- Base: declarative base with a constraint naming convention, so SQLite
  batch migrations can address constraints by name
- engine / async_session_factory: bound to Settings.DATABASE_URL
- init_models: create missing tables (embedded SQLite store only)
- get_async_session: FastAPI dependency, one Unit-of-Work per request
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from src.config.settings import Environment, get_settings

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def _engine_options(database_url: str, environment: Environment) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": environment == Environment.DEV}
    if not database_url.startswith("sqlite"):
        # File-backed SQLite has no server connection to go stale.
        options["pool_pre_ping"] = True
    return options


_settings = get_settings()

engine = create_async_engine(
    _settings.DATABASE_URL,
    **_engine_options(_settings.DATABASE_URL, _settings.ENVIRONMENT),
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_models() -> None:
    """Create any missing disclosure tables on the configured engine."""
    import src.db.tables  # noqa: F401 — register ORM models on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session and commit once the request succeeds.

    Repositories only add/flush/refresh, so a write reported as saved is
    committed before the response is sent. Any exception rolls back.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
