"""FastAPI assessment and report endpoints.

GET /v1/assessments/{year}/completeness            — ESRS E/S/G/materiality completeness
GET /v1/assessments/{year}/emissions-completeness  — ESRS E1 emissions completeness
GET /v1/reports/emissions/trends                   — total emissions per year
GET /v1/reports/emissions/verification             — records per verification status
GET /v1/reports/emissions/target                   — reduction target check
GET /v1/reports/emissions/{year}/intensity         — emissions per unit of intensity base
GET /v1/reports/{year}/energy-mix                  — renewable share of consumption
GET /v1/reports/{year}/workforce-summary           — headcount and diversity totals
GET /v1/reports/{year}/material-topics             — material topics by score

Read-only. Undefined results (non-positive intensity base, zero baseline)
come back as null values, not errors.
"""

from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from src.api.dependencies import get_disclosure_service
from src.compliance.models import (
    CompletenessAssessment,
    EnergyMix,
    TargetAssessment,
    WorkforceSummary,
)
from src.compliance.service import DisclosureService

assessments_router = APIRouter(prefix="/v1/assessments", tags=["assessments"])
reports_router = APIRouter(prefix="/v1/reports", tags=["reports"])


class TrendResponse(BaseModel):
    """Emission totals keyed by reporting year (as strings in JSON)."""

    trends: dict[int, Decimal]


class IntensityResponse(BaseModel):
    reporting_year: int
    intensity_base: Decimal
    intensity: Decimal | None


class VerificationResponse(BaseModel):
    statistics: dict[str, int]


# ---------------------------------------------------------------------------
# Completeness
# ---------------------------------------------------------------------------


@assessments_router.get(
    "/{year}/completeness", response_model=CompletenessAssessment,
)
async def esrs_completeness(
    year: int,
    has_governance_data: bool = Query(
        default=False,
        description="Governance (ESRS G) disclosures are tracked outside this store.",
    ),
    service: DisclosureService = Depends(get_disclosure_service),
) -> CompletenessAssessment:
    return await service.assess_esrs_completeness(
        year, has_governance_data=has_governance_data,
    )


@assessments_router.get(
    "/{year}/emissions-completeness", response_model=CompletenessAssessment,
)
async def emissions_completeness(
    year: int,
    service: DisclosureService = Depends(get_disclosure_service),
) -> CompletenessAssessment:
    return await service.assess_emission_completeness(year)


# ---------------------------------------------------------------------------
# Emission reports
# ---------------------------------------------------------------------------


@reports_router.get("/emissions/trends", response_model=TrendResponse)
async def emission_trends(
    start_year: int | None = Query(default=None),
    end_year: int | None = Query(default=None),
    service: DisclosureService = Depends(get_disclosure_service),
) -> TrendResponse:
    return TrendResponse(trends=await service.emission_trends(start_year, end_year))


@reports_router.get("/emissions/verification", response_model=VerificationResponse)
async def verification_statistics(
    service: DisclosureService = Depends(get_disclosure_service),
) -> VerificationResponse:
    return VerificationResponse(statistics=await service.verification_statistics())


@reports_router.get("/emissions/target", response_model=TargetAssessment)
async def emission_target(
    baseline_year: int = Query(...),
    current_year: int = Query(...),
    target_reduction_pct: Decimal = Query(..., description="Required reduction in percent"),
    service: DisclosureService = Depends(get_disclosure_service),
) -> TargetAssessment:
    return await service.assess_emission_target(
        baseline_year=baseline_year,
        current_year=current_year,
        target_reduction_pct=target_reduction_pct,
    )


@reports_router.get("/emissions/{year}/intensity", response_model=IntensityResponse)
async def emission_intensity(
    year: int,
    intensity_base: Decimal = Query(..., description="Revenue, output units, ..."),
    service: DisclosureService = Depends(get_disclosure_service),
) -> IntensityResponse:
    return IntensityResponse(
        reporting_year=year,
        intensity_base=intensity_base,
        intensity=await service.emission_intensity(year, intensity_base),
    )


# ---------------------------------------------------------------------------
# Energy / workforce / materiality
# ---------------------------------------------------------------------------


@reports_router.get("/{year}/energy-mix", response_model=EnergyMix)
async def energy_mix(
    year: int,
    service: DisclosureService = Depends(get_disclosure_service),
) -> EnergyMix:
    return await service.energy_mix(year)


@reports_router.get("/{year}/workforce-summary", response_model=WorkforceSummary)
async def workforce_summary(
    year: int,
    service: DisclosureService = Depends(get_disclosure_service),
) -> WorkforceSummary:
    return await service.workforce_summary(year)


@reports_router.get("/{year}/material-topics")
async def material_topics(
    year: int,
    service: DisclosureService = Depends(get_disclosure_service),
) -> list[dict[str, Any]]:
    return [a.model_dump(mode="json") for a in await service.material_topics(year)]
