"""Disclosure repositories — one per record kind.

Repos take AsyncSession, call add()/flush() only — never commit().
The session dependency handles commit/rollback (Unit-of-Work).
"""

from sqlalchemy import select

from src.db.tables import (
    EmissionRecordRow,
    EnergyConsumptionRow,
    MaterialityAssessmentRow,
    WorkforceDiversityRow,
)
from src.models.disclosure import (
    EmissionRecord,
    EnergyConsumption,
    MaterialityAssessment,
    WorkforceDiversity,
)
from src.repositories.base import DisclosureRepository, store_errors


class EmissionRecordRepository(DisclosureRepository[EmissionRecord, EmissionRecordRow]):
    """Repository for annual GHG inventories (ESRS E1)."""

    model = EmissionRecord
    row = EmissionRecordRow
    record_kind = "EmissionRecord"

    async def get_by_year_range(self, start_year: int, end_year: int) -> list[EmissionRecord]:
        """Records with start_year <= reporting_year <= end_year, oldest year first."""
        async with store_errors(f"{self.record_kind}.get_by_year_range"):
            result = await self._session.execute(
                select(EmissionRecordRow)
                .where(EmissionRecordRow.reporting_year.between(start_year, end_year))
                .order_by(
                    EmissionRecordRow.reporting_year,
                    EmissionRecordRow.modified_at.desc(),
                )
            )
        return [self._to_model(r) for r in result.scalars().all()]


class EnergyConsumptionRepository(
    DisclosureRepository[EnergyConsumption, EnergyConsumptionRow],
):
    """Repository for per-source energy consumption (ESRS E1)."""

    model = EnergyConsumption
    row = EnergyConsumptionRow
    record_kind = "EnergyConsumption"


class WorkforceDiversityRepository(
    DisclosureRepository[WorkforceDiversity, WorkforceDiversityRow],
):
    """Repository for workforce diversity breakdowns (ESRS S1)."""

    model = WorkforceDiversity
    row = WorkforceDiversityRow
    record_kind = "WorkforceDiversity"


class MaterialityAssessmentRepository(
    DisclosureRepository[MaterialityAssessment, MaterialityAssessmentRow],
):
    """Repository for double materiality assessments (ESRS 1)."""

    model = MaterialityAssessment
    row = MaterialityAssessmentRow
    record_kind = "MaterialityAssessment"
