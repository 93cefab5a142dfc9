"""Compliance module enums and result models.

Findings produced by the rule validators, completeness assessments, and the
value objects returned by the aggregators.

Deterministic -- no I/O, no wall clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from fractions import Fraction

from pydantic import Field, computed_field

from src.models.common import DisclosureBase


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class FindingSeverity(StrEnum):
    """Severity of a validation finding. Only ERROR blocks persistence."""

    ERROR = "ERROR"
    WARNING = "WARNING"


class CompletenessScope(StrEnum):
    """Which category set a completeness assessment was run against."""

    ESRS = "ESRS"
    EMISSIONS = "EMISSIONS"


# ---------------------------------------------------------------------------
# Frozen dataclasses (configuration rows)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CompletenessCategory:
    """A required disclosure category: fact key plus human-readable label."""

    key: str
    label: str


@dataclass(frozen=True)
class TierThreshold:
    """Lower bound (inclusive, percent) at which ``tier`` applies."""

    min_percentage: int
    tier: str


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class Finding(DisclosureBase, frozen=True):
    """A single rule outcome for one record."""

    severity: FindingSeverity
    message: str
    rule: str
    field: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == FindingSeverity.ERROR


def has_blocking_errors(findings: list[Finding]) -> bool:
    """True when at least one finding must reject the write."""
    return any(f.is_error for f in findings)


def errors_only(findings: list[Finding]) -> list[Finding]:
    return [f for f in findings if f.severity == FindingSeverity.ERROR]


def warnings_only(findings: list[Finding]) -> list[Finding]:
    return [f for f in findings if f.severity == FindingSeverity.WARNING]


class CompletenessAssessment(DisclosureBase, frozen=True):
    """Immutable completeness result.

    Only the raw counts are stored. ``percentage`` is recomputed from them on
    every access so repeated reads never drift.
    """

    scope: CompletenessScope
    reporting_year: int | None = None
    present_count: int = Field(ge=0)
    total_count: int = Field(gt=0)
    present: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    tier: str

    @property
    def percentage_exact(self) -> Fraction:
        return Fraction(100 * self.present_count, self.total_count)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def percentage(self) -> float:
        return float(self.percentage_exact)


class TargetAssessment(DisclosureBase, frozen=True):
    """Outcome of a year-over-year reduction target check."""

    baseline_year: int
    current_year: int
    baseline_total: Decimal
    current_total: Decimal
    target_reduction_pct: Decimal
    actual_reduction_pct: Decimal | None = None
    met: bool


class EnergyMix(DisclosureBase, frozen=True):
    """Renewable vs non-renewable split of a year's energy consumption."""

    reporting_year: int | None = None
    total_mwh: Decimal
    renewable_mwh: Decimal
    non_renewable_mwh: Decimal
    renewable_share_pct: Decimal | None = None
    sources: dict[str, Decimal] = Field(default_factory=dict)


class WorkforceSummary(DisclosureBase, frozen=True):
    """Headcount totals across all employee categories of a year."""

    reporting_year: int | None = None
    category_count: int
    total_employees: int
    female_employees: int
    male_employees: int
    non_binary_employees: int
    employees_with_disabilities: int
    female_percentage: Decimal
    disability_percentage: Decimal
