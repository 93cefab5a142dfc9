"""Generic record store for disclosure records.

Repositories call add()/flush()/refresh() only — never commit().
The session dependency handles commit/rollback (Unit-of-Work).

Every read returns fresh pydantic models built from the rows, so callers
never hold a reference into the session. Writes stamp the audit timestamps:
``add`` sets created_at and modified_at, ``update`` sets modified_at only.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import delete, exists, func, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from src.compliance.errors import NotFoundError, StoreUnavailableError
from src.db.session import Base
from src.models.common import utc_now
from src.models.disclosure import AuditedRecord

ModelT = TypeVar("ModelT", bound=AuditedRecord)
RowT = TypeVar("RowT", bound=Base)

# Fields owned by the store, never copied from the caller's model.
_STORE_FIELDS = frozenset({"id", "created_at", "modified_at"})


@asynccontextmanager
async def store_errors(operation: str) -> AsyncIterator[None]:
    """Re-raise connectivity failures as StoreUnavailableError."""
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        raise StoreUnavailableError(
            f"Record store unavailable during {operation}",
            details={"operation": operation, "cause": str(exc.orig)},
        ) from exc


class DisclosureRepository(Generic[ModelT, RowT]):
    """Async CRUD for one disclosure record kind, keyed by integer id."""

    model: ClassVar[type[AuditedRecord]]
    row: ClassVar[type[Base]]
    record_kind: ClassVar[str]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    # ---------------------------------------------------------------
    # Mapping
    # ---------------------------------------------------------------

    @classmethod
    def _columns(cls) -> list[str]:
        return [c.key for c in cls.row.__table__.columns]

    @classmethod
    def _to_model(cls, row: RowT) -> ModelT:
        return cls.model.model_validate(row)  # type: ignore[return-value]

    @classmethod
    def _values(cls, entity: ModelT) -> dict[str, Any]:
        data = entity.model_dump(include=set(cls._columns()) - _STORE_FIELDS)
        return data

    # ---------------------------------------------------------------
    # Reads
    # ---------------------------------------------------------------

    async def _get_row(self, record_id: int) -> RowT | None:
        return await self._session.get(self.row, record_id)  # type: ignore[return-value]

    async def get_all(self) -> list[ModelT]:
        """All records, newest reporting year first then most recently modified."""
        async with store_errors(f"{self.record_kind}.get_all"):
            result = await self._session.execute(
                select(self.row).order_by(
                    self.row.reporting_year.desc(),
                    self.row.modified_at.desc(),
                    self.row.id.desc(),
                )
            )
        return [self._to_model(r) for r in result.scalars().all()]

    async def get_by_id(self, record_id: int) -> ModelT | None:
        async with store_errors(f"{self.record_kind}.get_by_id"):
            row = await self._get_row(record_id)
        return self._to_model(row) if row is not None else None

    async def get_by_year(self, year: int) -> list[ModelT]:
        """Records for one reporting year, most recently modified first."""
        async with store_errors(f"{self.record_kind}.get_by_year"):
            result = await self._session.execute(
                select(self.row)
                .where(self.row.reporting_year == year)
                .order_by(self.row.modified_at.desc(), self.row.id.desc())
            )
        return [self._to_model(r) for r in result.scalars().all()]

    async def exists_for_year(self, year: int) -> bool:
        async with store_errors(f"{self.record_kind}.exists_for_year"):
            result = await self._session.execute(
                select(exists().where(self.row.reporting_year == year))
            )
        return bool(result.scalar())

    async def count(self) -> int:
        async with store_errors(f"{self.record_kind}.count"):
            result = await self._session.execute(
                select(func.count()).select_from(self.row)
            )
        return int(result.scalar_one())

    # ---------------------------------------------------------------
    # Writes
    # ---------------------------------------------------------------

    async def add(self, entity: ModelT) -> ModelT:
        """Insert a new record. Any id on ``entity`` is ignored."""
        now = utc_now()
        row = self.row(**self._values(entity), created_at=now, modified_at=now)
        async with store_errors(f"{self.record_kind}.add"):
            self._session.add(row)
            await self._session.flush()
            await self._session.refresh(row)
        return self._to_model(row)

    async def update(self, entity: ModelT) -> ModelT:
        """Replace every field of an existing record.

        Raises NotFoundError when ``entity.id`` is unset or not stored.
        """
        if entity.id is None:
            raise NotFoundError(self.record_kind, None)
        async with store_errors(f"{self.record_kind}.update"):
            row = await self._get_row(entity.id)
            if row is None:
                raise NotFoundError(self.record_kind, entity.id)
            for key, value in self._values(entity).items():
                setattr(row, key, value)
            row.modified_at = utc_now()
            await self._session.flush()
            await self._session.refresh(row)
        return self._to_model(row)

    async def delete(self, record_id: int) -> bool:
        """Delete by id. Returns True if a row was removed."""
        async with store_errors(f"{self.record_kind}.delete"):
            result = await self._session.execute(
                delete(self.row).where(self.row.id == record_id)
            )
            await self._session.flush()
        return result.rowcount > 0
