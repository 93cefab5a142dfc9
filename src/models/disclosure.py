"""Pydantic schemas for the four disclosure record kinds.

EmissionRecord (ESRS E1 GHG), EnergyConsumption (ESRS E1 energy),
WorkforceDiversity (ESRS S1) and MaterialityAssessment (ESRS 1 double
materiality).

Models accept any numeric value: range and consistency rules live in
``src.compliance.validators`` so that violations come back as findings
instead of parse errors. Derived values are computed fields, recomputed on
every access and never persisted.
"""

from decimal import Decimal

from pydantic import Field, computed_field

from src.models.common import (
    DataQuality,
    DisclosureBase,
    OtherValue,
    Quantity,
    RecordId,
    ReviewStatus,
    UTCTimestamp,
    VerificationStatus,
    parse_open_enum,
)

MATERIALITY_THRESHOLD = 3

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


class AuditedRecord(DisclosureBase):
    """Identifier and audit fields shared by every stored record.

    ``id``, ``created_at`` and ``modified_at`` are assigned by the record
    store on write; callers leave them unset for new records.
    """

    id: RecordId | None = None
    reporting_year: int
    created_at: UTCTimestamp | None = None
    modified_at: UTCTimestamp | None = None
    created_by: str = ""


# ---------------------------------------------------------------------------
# ESRS E1: emissions
# ---------------------------------------------------------------------------


class EmissionRecord(AuditedRecord):
    """Annual GHG inventory for Scopes 1, 2 and 3 (tCO2e)."""

    scope1_emissions: Quantity = _ZERO
    scope2_location_based: Quantity = _ZERO
    scope2_market_based: Quantity = _ZERO
    scope3_emissions: Quantity = _ZERO
    data_quality: str = ""
    verification_status: str = VerificationStatus.UNVERIFIED.value
    notes: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_emissions(self) -> Decimal:
        """Scope 1 + Scope 2 (market-based) + Scope 3."""
        return (
            self.scope1_emissions
            + self.scope2_market_based
            + self.scope3_emissions
        )

    @property
    def data_quality_tier(self) -> DataQuality | OtherValue | None:
        return parse_open_enum(DataQuality, self.data_quality)

    @property
    def verification(self) -> VerificationStatus | OtherValue | None:
        return parse_open_enum(VerificationStatus, self.verification_status)


# ---------------------------------------------------------------------------
# ESRS E1: energy
# ---------------------------------------------------------------------------


class EnergyConsumption(AuditedRecord):
    """Energy consumed from one source in a reporting year (MWh)."""

    energy_source: str = ""
    consumption_mwh: Quantity = _ZERO
    is_renewable: bool = False
    grid_electricity: Quantity = _ZERO
    self_generated_renewable: Quantity = _ZERO
    purchased_renewable_certificates: Quantity = _ZERO
    energy_intensity: Decimal | None = Field(
        default=None,
        description="Optional energy intensity ratio (MWh per unit of activity).",
    )
    methodology: str = ""
    notes: str = ""


# ---------------------------------------------------------------------------
# ESRS S1: own workforce
# ---------------------------------------------------------------------------


class WorkforceDiversity(AuditedRecord):
    """Headcount and diversity breakdown for one employee category."""

    employee_category: str = ""
    total_employees: int = 0
    female_employees: int = 0
    male_employees: int = 0
    non_binary_employees: int = 0
    employees_under_30: int = 0
    employees_30_to_50: int = 0
    employees_over_50: int = 0
    employees_with_disabilities: int = 0
    ethnic_minority_employees: int = 0
    average_training_hours: Quantity = _ZERO
    turnover_rate: Quantity = Field(
        default=_ZERO,
        description="Annual turnover as a percentage (0-100).",
    )
    gender_pay_gap: Decimal | None = None
    notes: str = ""

    @property
    def gender_total(self) -> int:
        return self.female_employees + self.male_employees + self.non_binary_employees

    @computed_field  # type: ignore[prop-decorator]
    @property
    def female_percentage(self) -> Decimal:
        if self.total_employees <= 0:
            return _ZERO
        return Decimal(self.female_employees) / Decimal(self.total_employees) * _HUNDRED

    @computed_field  # type: ignore[prop-decorator]
    @property
    def disability_percentage(self) -> Decimal:
        if self.total_employees <= 0:
            return _ZERO
        return (
            Decimal(self.employees_with_disabilities)
            / Decimal(self.total_employees)
            * _HUNDRED
        )


# ---------------------------------------------------------------------------
# ESRS 1: double materiality
# ---------------------------------------------------------------------------


class MaterialityAssessment(AuditedRecord):
    """Impact and financial materiality scoring of one sustainability topic.

    Both scores are on a 1-5 scale. A topic is material when either score
    reaches ``MATERIALITY_THRESHOLD``.
    """

    sustainability_topic: str = ""
    esrs_standard: str = ""
    impact_materiality: int
    financial_materiality: int
    time_horizon: str = ""
    stakeholder_groups: str = ""
    assessment_methodology: str = ""
    identified_risks: str = ""
    identified_opportunities: str = ""
    supporting_evidence: str = ""
    management_response: str = ""
    review_status: str = ReviewStatus.DRAFT.value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_material(self) -> bool:
        return (
            self.impact_materiality >= MATERIALITY_THRESHOLD
            or self.financial_materiality >= MATERIALITY_THRESHOLD
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def materiality_score(self) -> int:
        return max(self.impact_materiality, self.financial_materiality)

    @property
    def review(self) -> ReviewStatus | OtherValue | None:
        return parse_open_enum(ReviewStatus, self.review_status)


DisclosureRecord = EmissionRecord | EnergyConsumption | WorkforceDiversity | MaterialityAssessment
