"""Aggregators over already-loaded disclosure records.

Emission trend series, intensity ratios, verification tallies, reduction
target checks, and the energy / workforce / materiality roll-ups used by the
annual assessment views.

All functions are pure folds over their inputs and safe to call
concurrently on the same record list. Undefined results (zero or negative
denominators, zero baselines) are returned as None / False, never raised.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable
from decimal import Decimal

from src.compliance.models import EnergyMix, TargetAssessment, WorkforceSummary
from src.models.disclosure import (
    EmissionRecord,
    EnergyConsumption,
    MaterialityAssessment,
    WorkforceDiversity,
)

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


# ---------------------------------------------------------------------------
# Emissions
# ---------------------------------------------------------------------------


def total_emissions(records: Iterable[EmissionRecord]) -> Decimal:
    return sum((r.total_emissions for r in records), _ZERO)


def emission_trends(records: Iterable[EmissionRecord]) -> dict[int, Decimal]:
    """Total emissions per reporting year, ascending by year.

    Years without records are absent rather than zero-filled.
    """
    by_year: defaultdict[int, Decimal] = defaultdict(lambda: _ZERO)
    for record in records:
        by_year[record.reporting_year] += record.total_emissions
    return {year: by_year[year] for year in sorted(by_year)}


def emission_intensity(
    records: Iterable[EmissionRecord], intensity_base: Decimal,
) -> Decimal | None:
    """Total emissions divided by ``intensity_base`` (revenue, output, ...).

    None when the base is zero or negative.
    """
    if intensity_base <= _ZERO:
        return None
    return total_emissions(records) / intensity_base


def verification_statistics(records: Iterable[EmissionRecord]) -> dict[str, int]:
    """Record count per verification status. Blank or whitespace-only statuses are skipped."""
    counts = Counter(
        r.verification_status for r in records if r.verification_status.strip()
    )
    return dict(counts)


def reduction_percentage(
    baseline_total: Decimal, current_total: Decimal,
) -> Decimal | None:
    """Percentage reduction from baseline; None for a zero baseline."""
    if baseline_total == _ZERO:
        return None
    return (baseline_total - current_total) / baseline_total * _HUNDRED


def assess_emission_target(
    records: Iterable[EmissionRecord],
    *,
    baseline_year: int,
    current_year: int,
    target_reduction_pct: Decimal,
) -> TargetAssessment:
    """Compare the reduction between two reporting years to a target.

    ``met`` is False when the baseline year has no emissions, since no
    reduction percentage exists without a non-zero baseline.
    """
    trends = emission_trends(records)
    baseline_total = trends.get(baseline_year, _ZERO)
    current_total = trends.get(current_year, _ZERO)
    actual = reduction_percentage(baseline_total, current_total)

    return TargetAssessment(
        baseline_year=baseline_year,
        current_year=current_year,
        baseline_total=baseline_total,
        current_total=current_total,
        target_reduction_pct=target_reduction_pct,
        actual_reduction_pct=actual,
        met=actual is not None and actual >= target_reduction_pct,
    )


def is_emission_target_met(
    records: Iterable[EmissionRecord],
    *,
    baseline_year: int,
    current_year: int,
    target_reduction_pct: Decimal,
) -> bool:
    return assess_emission_target(
        records,
        baseline_year=baseline_year,
        current_year=current_year,
        target_reduction_pct=target_reduction_pct,
    ).met


# ---------------------------------------------------------------------------
# Energy
# ---------------------------------------------------------------------------


def energy_mix(
    records: Iterable[EnergyConsumption], *, reporting_year: int | None = None,
) -> EnergyMix:
    """Split consumption by the renewable flag and by source label."""
    total = _ZERO
    renewable = _ZERO
    sources: defaultdict[str, Decimal] = defaultdict(lambda: _ZERO)
    for record in records:
        total += record.consumption_mwh
        if record.is_renewable:
            renewable += record.consumption_mwh
        sources[record.energy_source] += record.consumption_mwh

    share = renewable / total * _HUNDRED if total > _ZERO else None
    return EnergyMix(
        reporting_year=reporting_year,
        total_mwh=total,
        renewable_mwh=renewable,
        non_renewable_mwh=total - renewable,
        renewable_share_pct=share,
        sources=dict(sorted(sources.items())),
    )


# ---------------------------------------------------------------------------
# Workforce
# ---------------------------------------------------------------------------


def workforce_summary(
    records: Iterable[WorkforceDiversity], *, reporting_year: int | None = None,
) -> WorkforceSummary:
    """Sum headcounts across categories and recompute the shares."""
    rows = list(records)
    total = sum(r.total_employees for r in rows)
    female = sum(r.female_employees for r in rows)
    disabled = sum(r.employees_with_disabilities for r in rows)

    def _pct(part: int) -> Decimal:
        if total <= 0:
            return _ZERO
        return Decimal(part) / Decimal(total) * _HUNDRED

    return WorkforceSummary(
        reporting_year=reporting_year,
        category_count=len(rows),
        total_employees=total,
        female_employees=female,
        male_employees=sum(r.male_employees for r in rows),
        non_binary_employees=sum(r.non_binary_employees for r in rows),
        employees_with_disabilities=disabled,
        female_percentage=_pct(female),
        disability_percentage=_pct(disabled),
    )


# ---------------------------------------------------------------------------
# Double materiality
# ---------------------------------------------------------------------------


def material_topics(
    assessments: Iterable[MaterialityAssessment],
) -> list[MaterialityAssessment]:
    """Material assessments, highest materiality score first, then by topic."""
    return sorted(
        (a for a in assessments if a.is_material),
        key=lambda a: (-a.materiality_score, a.sustainability_topic),
    )
