"""Shared pytest fixtures for the disclosure test suite.

Provides:
- db_engine: in-memory SQLite async engine with the disclosure tables
- db_session: SAVEPOINT-isolated async session (app commits don't leak)
- service: DisclosureService bound to db_session, current year pinned
- client: AsyncClient whose requests share db_session and the pinned year
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from src.api.dependencies import get_disclosure_service
from src.compliance.service import DisclosureService
from src.db.session import Base, get_async_session
import src.db.tables  # noqa: F401 — register ORM models on Base.metadata

# Reporting-window checks in tests never read the wall clock.
CURRENT_YEAR = 2025


@pytest.fixture
async def db_engine():
    eng = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Session whose commits only release a SAVEPOINT.

    The outer transaction rolls back at teardown, so nothing a test writes
    is visible to the next one.
    """
    async with db_engine.connect() as conn:
        trans = await conn.begin()
        session = AsyncSession(bind=conn, expire_on_commit=False)
        await conn.begin_nested()

        @event.listens_for(session.sync_session, "after_transaction_end")
        def restart_savepoint(sync_session, transaction):  # noqa: ARG001
            if transaction.nested and not transaction._parent.nested:
                conn.sync_connection.begin_nested()

        yield session

        await session.close()
        await trans.rollback()


@pytest.fixture
def service(db_session) -> DisclosureService:
    return DisclosureService.from_session(db_session, current_year=CURRENT_YEAR)


@pytest.fixture
async def client(db_session, service):
    """AsyncClient with the session and service dependencies overridden."""
    from src.api.main import app

    async def _override_session():
        yield db_session

    app.dependency_overrides[get_async_session] = _override_session
    app.dependency_overrides[get_disclosure_service] = lambda: service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
