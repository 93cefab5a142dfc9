"""Completeness assessors.

Turn a fixed set of presence facts into a percentage, an ordered list of
missing categories, and a named tier. Percentages are exact fractions of the
raw counts; nothing is rounded or carried over between calls.

Deterministic -- no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal
from fractions import Fraction

from src.compliance.config import (
    EMISSION_CATEGORIES,
    EMISSION_TIERS,
    ESRS_CATEGORIES,
    ESRS_TIERS,
)
from src.compliance.models import (
    CompletenessAssessment,
    CompletenessCategory,
    CompletenessScope,
    TierThreshold,
)
from src.models.common import VerificationStatus
from src.models.disclosure import (
    EmissionRecord,
    EnergyConsumption,
    MaterialityAssessment,
    WorkforceDiversity,
)

_ZERO = Decimal("0")


def tier_for(percentage: Fraction, tiers: Sequence[TierThreshold]) -> str:
    """Walk the threshold table (highest first) and return the first match.

    Falls back to the last tier when no lower bound is met.
    """
    for threshold in tiers:
        if percentage >= threshold.min_percentage:
            return threshold.tier
    return tiers[-1].tier


def assess_completeness(
    facts: Mapping[str, bool],
    categories: Sequence[CompletenessCategory] = ESRS_CATEGORIES,
    tiers: Sequence[TierThreshold] = ESRS_TIERS,
    *,
    scope: CompletenessScope = CompletenessScope.ESRS,
    reporting_year: int | None = None,
) -> CompletenessAssessment:
    """Score ``facts`` against ``categories``.

    Keys missing from ``facts`` count as absent; keys not in ``categories``
    are ignored. ``missing`` follows the declaration order of ``categories``.
    """
    if not categories:
        raise ValueError("At least one completeness category is required")

    present = [c.label for c in categories if facts.get(c.key, False)]
    missing = [c.label for c in categories if not facts.get(c.key, False)]
    percentage = Fraction(100 * len(present), len(categories))

    return CompletenessAssessment(
        scope=scope,
        reporting_year=reporting_year,
        present_count=len(present),
        total_count=len(categories),
        present=present,
        missing=missing,
        tier=tier_for(percentage, tiers),
    )


# ---------------------------------------------------------------------------
# ESRS overall (E / S / G / double materiality)
# ---------------------------------------------------------------------------


def esrs_completeness_facts(
    *,
    emissions: Iterable[EmissionRecord] = (),
    energy: Iterable[EnergyConsumption] = (),
    workforce: Iterable[WorkforceDiversity] = (),
    materiality: Iterable[MaterialityAssessment] = (),
    has_governance_data: bool = False,
) -> dict[str, bool]:
    """Derive ESRS presence facts from one year's stored records.

    Governance disclosures are not stored as records, so their presence is
    supplied by the caller.
    """
    return {
        "environmental": any(True for _ in emissions) or any(True for _ in energy),
        "social": any(True for _ in workforce),
        "governance": has_governance_data,
        "materiality": any(True for _ in materiality),
    }


def assess_esrs_completeness(
    *,
    environmental: bool,
    social: bool,
    governance: bool,
    materiality: bool,
    reporting_year: int | None = None,
) -> CompletenessAssessment:
    return assess_completeness(
        {
            "environmental": environmental,
            "social": social,
            "governance": governance,
            "materiality": materiality,
        },
        ESRS_CATEGORIES,
        ESRS_TIERS,
        scope=CompletenessScope.ESRS,
        reporting_year=reporting_year,
    )


# ---------------------------------------------------------------------------
# Emissions disclosure (ESRS E1)
# ---------------------------------------------------------------------------


def emission_completeness_facts(records: Iterable[EmissionRecord]) -> dict[str, bool]:
    """A category is present when any record of the year supplies it."""
    facts = {c.key: False for c in EMISSION_CATEGORIES}
    for record in records:
        if record.scope1_emissions > _ZERO:
            facts["scope1"] = True
        if record.scope2_location_based > _ZERO or record.scope2_market_based > _ZERO:
            facts["scope2"] = True
        if record.scope3_emissions > _ZERO:
            facts["scope3"] = True
        if (
            record.verification_status.strip()
            and record.verification != VerificationStatus.UNVERIFIED
        ):
            facts["verification"] = True
        if record.data_quality.strip():
            facts["data_quality"] = True
    return facts


def assess_emission_completeness(
    records: Iterable[EmissionRecord],
    *,
    reporting_year: int | None = None,
) -> CompletenessAssessment:
    return assess_completeness(
        emission_completeness_facts(records),
        EMISSION_CATEGORIES,
        EMISSION_TIERS,
        scope=CompletenessScope.EMISSIONS,
        reporting_year=reporting_year,
    )
