"""Compliance error taxonomy.

Only structural failures are exceptions. Expected domain conditions (zero
denominators, zero baselines, missing categories) are result values.
"""

from __future__ import annotations

from typing import Any

from src.compliance.models import Finding, errors_only, warnings_only


class ComplianceError(Exception):
    """Base class for all errors surfaced to the presentation layer."""

    code: str = "COMPLIANCE_ERROR"

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}


class ValidationError(ComplianceError):
    """A record failed at least one Error-severity rule and was not saved.

    Carries every finding (errors and warnings) so the caller can show them
    verbatim.
    """

    code = "VALIDATION_ERROR"

    def __init__(self, record_kind: str, findings: list[Finding]) -> None:
        self.record_kind = record_kind
        self.findings = list(findings)
        errors = errors_only(self.findings)
        summary = "; ".join(f.message for f in errors)
        super().__init__(
            f"{record_kind} validation failed: {summary}",
            details={"record_kind": record_kind, "error_count": len(errors)},
        )

    @property
    def errors(self) -> list[Finding]:
        return errors_only(self.findings)

    @property
    def warnings(self) -> list[Finding]:
        return warnings_only(self.findings)


class NotFoundError(ComplianceError):
    """Update or delete referenced an identifier the store does not hold."""

    code = "NOT_FOUND"

    def __init__(self, record_kind: str, record_id: int | None) -> None:
        self.record_kind = record_kind
        self.record_id = record_id
        super().__init__(
            f"{record_kind} with ID {record_id} not found.",
            details={"record_kind": record_kind, "record_id": record_id},
        )


class StoreUnavailableError(ComplianceError):
    """The record store could not be reached or initialised.

    Fatal for the current operation only.
    """

    code = "STORE_UNAVAILABLE"
