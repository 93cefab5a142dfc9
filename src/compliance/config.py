"""Compliance rule configuration.

Reporting window, renewable keyword sets, stored decimal precision, and
completeness category / tier tables. Defaults follow ESRS E1, S1 and
ESRS 1 practice and can be overridden per deployment through ``Settings``.

Deterministic -- no I/O.
"""

from __future__ import annotations

from pydantic import Field

from src.compliance.models import CompletenessCategory, TierThreshold
from src.config.settings import Settings
from src.models.common import (
    QUANTITY_DIGITS,
    QUANTITY_SCALE,
    RATIO_DIGITS,
    RATIO_SCALE,
    DisclosureBase,
)

ESRS_CATEGORIES: tuple[CompletenessCategory, ...] = (
    CompletenessCategory("environmental", "Environmental data (ESRS E)"),
    CompletenessCategory("social", "Social data (ESRS S)"),
    CompletenessCategory("governance", "Governance data (ESRS G)"),
    CompletenessCategory("materiality", "Double materiality assessment"),
)

ESRS_TIERS: tuple[TierThreshold, ...] = (
    TierThreshold(100, "Complete"),
    TierThreshold(75, "Mostly Complete"),
    TierThreshold(50, "Partially Complete"),
    TierThreshold(25, "Limited Data"),
    TierThreshold(0, "Insufficient Data"),
)

EMISSION_CATEGORIES: tuple[CompletenessCategory, ...] = (
    CompletenessCategory("scope1", "Scope 1 emissions data"),
    CompletenessCategory("scope2", "Scope 2 emissions data"),
    CompletenessCategory("scope3", "Scope 3 emissions data"),
    CompletenessCategory("verification", "Emissions verification"),
    CompletenessCategory("data_quality", "Data quality rating"),
)

EMISSION_TIERS: tuple[TierThreshold, ...] = (
    TierThreshold(90, "Excellent"),
    TierThreshold(75, "Good"),
    TierThreshold(50, "Adequate"),
    TierThreshold(25, "Poor"),
    TierThreshold(0, "Incomplete"),
)


class ComplianceConfig(DisclosureBase):
    """Configuration for the rule validators.

    ``min_reporting_year`` is the regulatory start year; the upper bound of
    the window is ``current_year + max_future_years`` with ``current_year``
    supplied by the caller.
    """

    min_reporting_year: int = 2020
    max_future_years: int = Field(default=1, ge=0)

    renewable_keywords: tuple[str, ...] = (
        "solar",
        "wind",
        "hydro",
        "geothermal",
        "biomass",
    )
    non_renewable_keywords: tuple[str, ...] = (
        "coal",
        "natural gas",
        "oil",
        "nuclear",
    )

    max_materiality_score: int = 5
    min_materiality_score: int = 1
    max_turnover_rate: int = 100

    # Must match the stored column precision in src.db.types.
    quantity_digits: int = QUANTITY_DIGITS
    quantity_scale: int = QUANTITY_SCALE
    ratio_digits: int = RATIO_DIGITS
    ratio_scale: int = RATIO_SCALE


def compliance_config_from_settings(settings: Settings) -> ComplianceConfig:
    """Build the rule configuration from deployment settings."""
    return ComplianceConfig(
        min_reporting_year=settings.MIN_REPORTING_YEAR,
        max_future_years=settings.MAX_FUTURE_REPORTING_YEARS,
    )
