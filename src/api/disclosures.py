"""FastAPI disclosure record endpoints.

For each record kind (emissions, energy, workforce, materiality):

POST   /v1/disclosures/{kind}          — validate and create
GET    /v1/disclosures/{kind}          — list (optionally ?year=)
GET    /v1/disclosures/{kind}/{id}     — fetch one
PUT    /v1/disclosures/{kind}/{id}     — validate and replace
DELETE /v1/disclosures/{kind}/{id}     — delete
POST   /v1/disclosures/{kind}/validate — dry-run validation, nothing stored

Error findings reject the write with 422 (see the exception handlers in
``src.api.main``). Warnings are returned alongside the saved record.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel

from src.api.dependencies import get_disclosure_service
from src.compliance.models import Finding, has_blocking_errors
from src.compliance.service import DisclosureService, SubmissionResult
from src.models.disclosure import (
    AuditedRecord,
    EmissionRecord,
    EnergyConsumption,
    MaterialityAssessment,
    WorkforceDiversity,
)
from src.repositories.base import DisclosureRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/disclosures", tags=["disclosures"])


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class SubmissionResponse(BaseModel):
    """A saved record plus the warnings it raised."""

    record: dict[str, Any]
    created: bool
    warnings: list[Finding]


class ValidationResponse(BaseModel):
    """Dry-run validation outcome."""

    valid: bool
    findings: list[Finding]


def _submission_response(result: SubmissionResult) -> SubmissionResponse:
    return SubmissionResponse(
        record=result.record.model_dump(mode="json"),
        created=result.created,
        warnings=result.warnings,
    )


# ---------------------------------------------------------------------------
# Route factory
# ---------------------------------------------------------------------------


def _register(
    path: str,
    model: type[AuditedRecord],
    repo_of: Callable[[DisclosureService], DisclosureRepository],
    submit_of: Callable[[DisclosureService], Callable[[Any], Awaitable[SubmissionResult]]],
    delete_of: Callable[[DisclosureService], Callable[[int], Awaitable[bool]]],
) -> None:
    """Attach the six record endpoints for one record kind to ``router``."""

    async def create_record(
        body: model,  # type: ignore[valid-type]
        service: DisclosureService = Depends(get_disclosure_service),
    ) -> SubmissionResponse:
        result = await submit_of(service)(body.model_copy(update={"id": None}))
        return _submission_response(result)

    async def validate_record(
        body: model,  # type: ignore[valid-type]
        service: DisclosureService = Depends(get_disclosure_service),
    ) -> ValidationResponse:
        findings = service.validate(body)
        logger.debug("Dry-run validation of %s: %d findings", model.__name__, len(findings))
        return ValidationResponse(valid=not has_blocking_errors(findings), findings=findings)

    async def list_records(
        year: int | None = Query(default=None, description="Filter by reporting year"),
        service: DisclosureService = Depends(get_disclosure_service),
    ) -> list[dict[str, Any]]:
        repo = repo_of(service)
        records = await (repo.get_all() if year is None else repo.get_by_year(year))
        return [r.model_dump(mode="json") for r in records]

    async def get_record(
        record_id: int,
        service: DisclosureService = Depends(get_disclosure_service),
    ) -> dict[str, Any]:
        record = await repo_of(service).get_by_id(record_id)
        if record is None:
            raise HTTPException(
                status_code=404,
                detail=f"{model.__name__} {record_id} not found",
            )
        return record.model_dump(mode="json")

    async def replace_record(
        record_id: int,
        body: model,  # type: ignore[valid-type]
        service: DisclosureService = Depends(get_disclosure_service),
    ) -> SubmissionResponse:
        result = await submit_of(service)(body.model_copy(update={"id": record_id}))
        return _submission_response(result)

    async def delete_record(
        record_id: int,
        service: DisclosureService = Depends(get_disclosure_service),
    ) -> Response:
        deleted = await delete_of(service)(record_id)
        if not deleted:
            raise HTTPException(
                status_code=404,
                detail=f"{model.__name__} {record_id} not found",
            )
        return Response(status_code=204)

    name = path.replace("-", "_")
    router.add_api_route(
        f"/{path}", create_record, methods=["POST"], status_code=201,
        response_model=SubmissionResponse, name=f"create_{name}",
    )
    router.add_api_route(
        f"/{path}/validate", validate_record, methods=["POST"],
        response_model=ValidationResponse, name=f"validate_{name}",
    )
    router.add_api_route(
        f"/{path}", list_records, methods=["GET"], name=f"list_{name}",
    )
    router.add_api_route(
        f"/{path}/{{record_id}}", get_record, methods=["GET"], name=f"get_{name}",
    )
    router.add_api_route(
        f"/{path}/{{record_id}}", replace_record, methods=["PUT"],
        response_model=SubmissionResponse, name=f"replace_{name}",
    )
    router.add_api_route(
        f"/{path}/{{record_id}}", delete_record, methods=["DELETE"],
        status_code=204, name=f"delete_{name}",
    )


_register(
    "emissions", EmissionRecord,
    lambda s: s.emissions, lambda s: s.submit_emission, lambda s: s.delete_emission,
)
_register(
    "energy", EnergyConsumption,
    lambda s: s.energy, lambda s: s.submit_energy, lambda s: s.delete_energy,
)
_register(
    "workforce", WorkforceDiversity,
    lambda s: s.workforce, lambda s: s.submit_workforce, lambda s: s.delete_workforce,
)
_register(
    "materiality", MaterialityAssessment,
    lambda s: s.materiality, lambda s: s.submit_materiality, lambda s: s.delete_materiality,
)
