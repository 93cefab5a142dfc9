"""Disclosure service — validate, persist, assess.

Sits between the HTTP layer and the record store:

1. ``submit_*`` runs the rule validators and writes only when no finding is
   an Error (Warnings never block). A record without an id is added, one
   with an id fully replaces the stored record.
2. ``assess_*`` and the report methods read one or more years from the
   repositories and hand the detached records to the pure assessors and
   aggregators.

The current year for the reporting-window rule is read here, once per
call, so the validators themselves stay clock-free.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Generic, TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from src.compliance import aggregators
from src.compliance.completeness import (
    assess_completeness,
    assess_emission_completeness,
    esrs_completeness_facts,
)
from src.compliance.config import ESRS_CATEGORIES, ESRS_TIERS, ComplianceConfig
from src.compliance.errors import ValidationError
from src.compliance.models import (
    CompletenessAssessment,
    CompletenessScope,
    EnergyMix,
    Finding,
    TargetAssessment,
    WorkforceSummary,
    has_blocking_errors,
    warnings_only,
)
from src.compliance.validators import RuleValidator
from src.models.common import utc_now
from src.models.disclosure import (
    AuditedRecord,
    EmissionRecord,
    EnergyConsumption,
    MaterialityAssessment,
    WorkforceDiversity,
)
from src.repositories.base import DisclosureRepository
from src.repositories.disclosures import (
    EmissionRecordRepository,
    EnergyConsumptionRepository,
    MaterialityAssessmentRepository,
    WorkforceDiversityRepository,
)

logger = structlog.get_logger(__name__)

RecordT = TypeVar("RecordT", bound=AuditedRecord)


@dataclass
class SubmissionResult(Generic[RecordT]):
    """A saved record together with the non-blocking findings it raised."""

    record: RecordT
    created: bool
    findings: list[Finding] = field(default_factory=list)

    @property
    def warnings(self) -> list[Finding]:
        return warnings_only(self.findings)


class DisclosureService:
    """Orchestrates validation, persistence and assessment of disclosures."""

    def __init__(
        self,
        *,
        emissions: EmissionRecordRepository,
        energy: EnergyConsumptionRepository,
        workforce: WorkforceDiversityRepository,
        materiality: MaterialityAssessmentRepository,
        config: ComplianceConfig | None = None,
        current_year: int | None = None,
    ) -> None:
        self.emissions = emissions
        self.energy = energy
        self.workforce = workforce
        self.materiality = materiality
        self._config = config or ComplianceConfig()
        self._current_year = current_year

    @classmethod
    def from_session(
        cls,
        session: AsyncSession,
        config: ComplianceConfig | None = None,
        current_year: int | None = None,
    ) -> DisclosureService:
        return cls(
            emissions=EmissionRecordRepository(session),
            energy=EnergyConsumptionRepository(session),
            workforce=WorkforceDiversityRepository(session),
            materiality=MaterialityAssessmentRepository(session),
            config=config,
            current_year=current_year,
        )

    def validator(self) -> RuleValidator:
        year = self._current_year if self._current_year is not None else utc_now().year
        return RuleValidator(year, self._config)

    # ---------------------------------------------------------------
    # Validation / submission
    # ---------------------------------------------------------------

    def validate(self, record: AuditedRecord) -> list[Finding]:
        return self.validator().validate(record)

    async def _submit(
        self, repo: DisclosureRepository, record: RecordT,
    ) -> SubmissionResult[RecordT]:
        findings = self.validate(record)
        if has_blocking_errors(findings):
            logger.info(
                "disclosure_rejected",
                record_kind=repo.record_kind,
                record_id=record.id,
                errors=[f.rule for f in findings if f.is_error],
            )
            raise ValidationError(repo.record_kind, findings)

        created = record.id is None
        saved = await (repo.add(record) if created else repo.update(record))
        logger.info(
            "disclosure_saved",
            record_kind=repo.record_kind,
            record_id=saved.id,
            created=created,
            warning_count=len(findings),
        )
        return SubmissionResult(record=saved, created=created, findings=findings)

    async def submit_emission(self, record: EmissionRecord) -> SubmissionResult[EmissionRecord]:
        return await self._submit(self.emissions, record)

    async def submit_energy(self, record: EnergyConsumption) -> SubmissionResult[EnergyConsumption]:
        return await self._submit(self.energy, record)

    async def submit_workforce(
        self, record: WorkforceDiversity,
    ) -> SubmissionResult[WorkforceDiversity]:
        return await self._submit(self.workforce, record)

    async def submit_materiality(
        self, record: MaterialityAssessment,
    ) -> SubmissionResult[MaterialityAssessment]:
        return await self._submit(self.materiality, record)

    async def _delete(self, repo: DisclosureRepository, record_id: int) -> bool:
        deleted = await repo.delete(record_id)
        if deleted:
            logger.info(
                "disclosure_deleted", record_kind=repo.record_kind, record_id=record_id,
            )
        return deleted

    async def delete_emission(self, record_id: int) -> bool:
        return await self._delete(self.emissions, record_id)

    async def delete_energy(self, record_id: int) -> bool:
        return await self._delete(self.energy, record_id)

    async def delete_workforce(self, record_id: int) -> bool:
        return await self._delete(self.workforce, record_id)

    async def delete_materiality(self, record_id: int) -> bool:
        return await self._delete(self.materiality, record_id)

    # ---------------------------------------------------------------
    # Completeness
    # ---------------------------------------------------------------

    async def assess_esrs_completeness(
        self, year: int, *, has_governance_data: bool = False,
    ) -> CompletenessAssessment:
        facts = esrs_completeness_facts(
            emissions=await self.emissions.get_by_year(year),
            energy=await self.energy.get_by_year(year),
            workforce=await self.workforce.get_by_year(year),
            materiality=await self.materiality.get_by_year(year),
            has_governance_data=has_governance_data,
        )
        return assess_completeness(
            facts,
            ESRS_CATEGORIES,
            ESRS_TIERS,
            scope=CompletenessScope.ESRS,
            reporting_year=year,
        )

    async def assess_emission_completeness(self, year: int) -> CompletenessAssessment:
        records = await self.emissions.get_by_year(year)
        return assess_emission_completeness(records, reporting_year=year)

    # ---------------------------------------------------------------
    # Emission reports
    # ---------------------------------------------------------------

    async def emission_trends(
        self, start_year: int | None = None, end_year: int | None = None,
    ) -> dict[int, Decimal]:
        if start_year is None and end_year is None:
            records = await self.emissions.get_all()
        else:
            records = await self.emissions.get_by_year_range(
                start_year if start_year is not None else self._config.min_reporting_year,
                end_year if end_year is not None else self.validator().max_reporting_year,
            )
        return aggregators.emission_trends(records)

    async def emission_intensity(self, year: int, intensity_base: Decimal) -> Decimal | None:
        if intensity_base <= 0:
            return None
        records = await self.emissions.get_by_year(year)
        return aggregators.emission_intensity(records, intensity_base)

    async def verification_statistics(self) -> dict[str, int]:
        return aggregators.verification_statistics(await self.emissions.get_all())

    async def assess_emission_target(
        self,
        *,
        baseline_year: int,
        current_year: int,
        target_reduction_pct: Decimal,
    ) -> TargetAssessment:
        records = await self.emissions.get_by_year(baseline_year)
        if current_year != baseline_year:
            records += await self.emissions.get_by_year(current_year)
        return aggregators.assess_emission_target(
            records,
            baseline_year=baseline_year,
            current_year=current_year,
            target_reduction_pct=target_reduction_pct,
        )

    # ---------------------------------------------------------------
    # Energy / workforce / materiality roll-ups
    # ---------------------------------------------------------------

    async def energy_mix(self, year: int) -> EnergyMix:
        return aggregators.energy_mix(
            await self.energy.get_by_year(year), reporting_year=year,
        )

    async def workforce_summary(self, year: int) -> WorkforceSummary:
        return aggregators.workforce_summary(
            await self.workforce.get_by_year(year), reporting_year=year,
        )

    async def material_topics(self, year: int) -> list[MaterialityAssessment]:
        return aggregators.material_topics(await self.materiality.get_by_year(year))
