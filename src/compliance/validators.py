"""Rule validators for disclosure records.

Each ``validate_*`` method checks one record against its structural and
business rules and returns every finding, errors and warnings alike. No
method mutates its input, touches storage, logs, or reads the clock: the
current year is injected at construction.

Deterministic -- no I/O.
"""

from __future__ import annotations

from decimal import Decimal
from functools import singledispatchmethod

from src.compliance.config import ComplianceConfig
from src.compliance.models import Finding, FindingSeverity
from src.models.common import (
    DataQuality,
    OtherValue,
    VerificationStatus,
    parse_open_enum,
)
from src.models.disclosure import (
    EmissionRecord,
    EnergyConsumption,
    MaterialityAssessment,
    WorkforceDiversity,
)

_ZERO = Decimal("0")


def _error(rule: str, message: str, field: str | None = None) -> Finding:
    return Finding(severity=FindingSeverity.ERROR, rule=rule, message=message, field=field)


def _warning(rule: str, message: str, field: str | None = None) -> Finding:
    return Finding(severity=FindingSeverity.WARNING, rule=rule, message=message, field=field)


def _fits_precision(value: Decimal, integer_digits: int, scale: int) -> bool:
    if not value.is_finite():
        return False
    if value.is_zero():
        return True
    if value.normalize().as_tuple().exponent < -scale:
        return False
    return abs(value) < Decimal(10) ** integer_digits


class RuleValidator:
    """Validates the four disclosure record kinds.

    ``validate(record)`` dispatches on the record type. Findings come back in
    rule order: reporting year first, then per-field rules, then
    cross-field and data quality rules.
    """

    def __init__(self, current_year: int, config: ComplianceConfig | None = None) -> None:
        self._config = config or ComplianceConfig()
        self._current_year = current_year

    @property
    def max_reporting_year(self) -> int:
        return self._current_year + self._config.max_future_years

    @singledispatchmethod
    def validate(self, record: object) -> list[Finding]:
        raise TypeError(f"No validation rules for {type(record).__name__}")

    @validate.register(EmissionRecord)
    def _validate_emission(self, record: EmissionRecord) -> list[Finding]:
        return self.validate_emission_record(record)

    @validate.register(EnergyConsumption)
    def _validate_energy(self, record: EnergyConsumption) -> list[Finding]:
        return self.validate_energy_consumption(record)

    @validate.register(WorkforceDiversity)
    def _validate_workforce(self, record: WorkforceDiversity) -> list[Finding]:
        return self.validate_workforce_diversity(record)

    @validate.register(MaterialityAssessment)
    def _validate_materiality(self, record: MaterialityAssessment) -> list[Finding]:
        return self.validate_materiality_assessment(record)

    # ---------------------------------------------------------------
    # Shared rules
    # ---------------------------------------------------------------

    def check_reporting_year(self, year: int) -> list[Finding]:
        """Year must lie in [min_reporting_year, current_year + max_future_years]."""
        low, high = self._config.min_reporting_year, self.max_reporting_year
        if low <= year <= high:
            return []
        return [
            _error(
                "reporting_year_window",
                f"Reporting year {year} must be between {low} and {high}.",
                field="reporting_year",
            )
        ]

    @staticmethod
    def _non_negative(
        values: list[tuple[str, str, Decimal | int]], rule: str,
    ) -> list[Finding]:
        return [
            _error(rule, f"{label} cannot be negative.", field=name)
            for name, label, value in values
            if value < 0
        ]

    @staticmethod
    def _fixed_precision(
        values: list[tuple[str, str, Decimal | None]], digits: int, scale: int,
    ) -> list[Finding]:
        """Values must fit the stored column, which never rounds."""
        integer_digits = digits - scale
        return [
            _error(
                "decimal_precision",
                f"{label} must have at most {integer_digits} integer digits and "
                f"{scale} decimal places.",
                field=name,
            )
            for name, label, value in values
            if value is not None and not _fits_precision(value, integer_digits, scale)
        ]

    def _quantity_precision(self, values: list[tuple[str, str, Decimal | None]]) -> list[Finding]:
        return self._fixed_precision(
            values, self._config.quantity_digits, self._config.quantity_scale,
        )

    def _ratio_precision(self, values: list[tuple[str, str, Decimal | None]]) -> list[Finding]:
        return self._fixed_precision(values, self._config.ratio_digits, self._config.ratio_scale)

    # ---------------------------------------------------------------
    # Emissions (ESRS E1)
    # ---------------------------------------------------------------

    def validate_emission_record(self, record: EmissionRecord) -> list[Finding]:
        scopes = [
            ("scope1_emissions", "Scope 1 emissions", record.scope1_emissions),
            ("scope2_location_based", "Scope 2 location-based emissions", record.scope2_location_based),
            ("scope2_market_based", "Scope 2 market-based emissions", record.scope2_market_based),
            ("scope3_emissions", "Scope 3 emissions", record.scope3_emissions),
        ]
        findings = self.check_reporting_year(record.reporting_year)
        findings += self._non_negative(scopes, rule="emissions_non_negative")
        findings += self._quantity_precision(scopes)

        if (
            record.scope2_market_based > record.scope2_location_based
            and record.scope2_location_based > _ZERO
        ):
            findings.append(
                _warning(
                    "scope2_market_above_location",
                    "Market-based Scope 2 emissions are higher than location-based. "
                    "Please verify data.",
                    field="scope2_market_based",
                )
            )

        if all(
            value == _ZERO
            for value in (
                record.scope1_emissions,
                record.scope2_location_based,
                record.scope2_market_based,
                record.scope3_emissions,
            )
        ):
            findings.append(
                _warning(
                    "all_scopes_zero",
                    "All emission scopes are zero. This may indicate missing data.",
                )
            )

        findings += self.validate_data_quality(record.data_quality, record.verification_status)
        return findings

    def validate_data_quality(
        self, data_quality: str, verification_status: str,
    ) -> list[Finding]:
        """Flag non-standard tiers and unverified high-quality data."""
        findings: list[Finding] = []
        tier = parse_open_enum(DataQuality, data_quality)
        status = parse_open_enum(VerificationStatus, verification_status)

        if isinstance(tier, OtherValue):
            findings.append(
                _warning(
                    "non_standard_data_quality",
                    f"'{tier.text}' is not a standard data quality level.",
                    field="data_quality",
                )
            )
        if isinstance(status, OtherValue):
            findings.append(
                _warning(
                    "non_standard_verification_status",
                    f"'{status.text}' is not a standard verification status.",
                    field="verification_status",
                )
            )
        if tier == DataQuality.HIGH and status == VerificationStatus.UNVERIFIED:
            findings.append(
                _warning(
                    "high_quality_unverified",
                    "High data quality typically requires some form of verification.",
                    field="verification_status",
                )
            )
        return findings

    # ---------------------------------------------------------------
    # Energy (ESRS E1)
    # ---------------------------------------------------------------

    def validate_energy_consumption(self, record: EnergyConsumption) -> list[Finding]:
        findings = self.check_reporting_year(record.reporting_year)
        findings += self._non_negative(
            [
                ("consumption_mwh", "Energy consumption", record.consumption_mwh),
                ("grid_electricity", "Grid electricity", record.grid_electricity),
                ("self_generated_renewable", "Self-generated renewable energy", record.self_generated_renewable),
                (
                    "purchased_renewable_certificates",
                    "Purchased renewable certificates",
                    record.purchased_renewable_certificates,
                ),
            ],
            rule="energy_non_negative",
        )
        if record.energy_intensity is not None and record.energy_intensity < 0:
            findings.append(
                _error(
                    "energy_non_negative",
                    "Energy intensity cannot be negative.",
                    field="energy_intensity",
                )
            )
        findings += self._quantity_precision(
            [
                ("consumption_mwh", "Energy consumption", record.consumption_mwh),
                ("grid_electricity", "Grid electricity", record.grid_electricity),
                ("self_generated_renewable", "Self-generated renewable energy", record.self_generated_renewable),
                (
                    "purchased_renewable_certificates",
                    "Purchased renewable certificates",
                    record.purchased_renewable_certificates,
                ),
                ("energy_intensity", "Energy intensity", record.energy_intensity),
            ]
        )

        source = record.energy_source.strip()
        if not source:
            findings.append(
                _error(
                    "energy_source_required",
                    "Energy source must be specified.",
                    field="energy_source",
                )
            )
            return findings

        # Source labels are free text, so the keyword match only warns.
        label = source.lower()
        looks_renewable = any(k in label for k in self._config.renewable_keywords)
        looks_fossil = any(k in label for k in self._config.non_renewable_keywords)
        if record.is_renewable and looks_fossil:
            findings.append(
                _warning(
                    "renewable_flag_mismatch",
                    f"'{source}' is marked as renewable but appears to be a "
                    "non-renewable source.",
                    field="is_renewable",
                )
            )
        if not record.is_renewable and looks_renewable:
            findings.append(
                _warning(
                    "renewable_flag_mismatch",
                    f"'{source}' is marked as non-renewable but appears to be a "
                    "renewable source.",
                    field="is_renewable",
                )
            )
        return findings

    # ---------------------------------------------------------------
    # Workforce (ESRS S1)
    # ---------------------------------------------------------------

    def validate_workforce_diversity(self, record: WorkforceDiversity) -> list[Finding]:
        findings = self.check_reporting_year(record.reporting_year)
        findings += self._non_negative(
            [
                ("total_employees", "Total employees", record.total_employees),
                ("female_employees", "Female employees", record.female_employees),
                ("male_employees", "Male employees", record.male_employees),
                ("non_binary_employees", "Non-binary employees", record.non_binary_employees),
                ("employees_under_30", "Employees under 30", record.employees_under_30),
                ("employees_30_to_50", "Employees aged 30-50", record.employees_30_to_50),
                ("employees_over_50", "Employees over 50", record.employees_over_50),
                (
                    "employees_with_disabilities",
                    "Employees with disabilities",
                    record.employees_with_disabilities,
                ),
                (
                    "ethnic_minority_employees",
                    "Ethnic minority employees",
                    record.ethnic_minority_employees,
                ),
                ("average_training_hours", "Average training hours", record.average_training_hours),
            ],
            rule="workforce_non_negative",
        )
        findings += self._ratio_precision(
            [
                ("average_training_hours", "Average training hours", record.average_training_hours),
                ("turnover_rate", "Turnover rate", record.turnover_rate),
                ("gender_pay_gap", "Gender pay gap", record.gender_pay_gap),
            ]
        )

        if record.total_employees > 0 and record.gender_total != record.total_employees:
            findings.append(
                _error(
                    "gender_breakdown_total",
                    f"Gender breakdown ({record.gender_total}) does not match "
                    f"total employees ({record.total_employees}).",
                    field="total_employees",
                )
            )

        if not 0 <= record.turnover_rate <= self._config.max_turnover_rate:
            findings.append(
                _error(
                    "turnover_rate_range",
                    f"Turnover rate {record.turnover_rate} must be between 0 and "
                    f"{self._config.max_turnover_rate}.",
                    field="turnover_rate",
                )
            )

        if not record.employee_category.strip():
            findings.append(
                _warning(
                    "employee_category_missing",
                    "Employee category is not specified.",
                    field="employee_category",
                )
            )
        return findings

    # ---------------------------------------------------------------
    # Double materiality (ESRS 1)
    # ---------------------------------------------------------------

    def validate_materiality_assessment(self, record: MaterialityAssessment) -> list[Finding]:
        findings = self.check_reporting_year(record.reporting_year)
        low = self._config.min_materiality_score
        high = self._config.max_materiality_score

        for name, label, score in (
            ("impact_materiality", "Impact materiality", record.impact_materiality),
            ("financial_materiality", "Financial materiality", record.financial_materiality),
        ):
            if not low <= score <= high:
                findings.append(
                    _error(
                        "materiality_score_range",
                        f"{label} score must be between {low} and {high}.",
                        field=name,
                    )
                )

        if not record.sustainability_topic.strip():
            findings.append(
                _warning(
                    "sustainability_topic_missing",
                    "Sustainability topic is not specified.",
                    field="sustainability_topic",
                )
            )

        review = record.review
        if isinstance(review, OtherValue):
            findings.append(
                _warning(
                    "non_standard_review_status",
                    f"'{review.text}' is not a standard review status.",
                    field="review_status",
                )
            )
        return findings


def validate(
    record: EmissionRecord | EnergyConsumption | WorkforceDiversity | MaterialityAssessment,
    *,
    current_year: int,
    config: ComplianceConfig | None = None,
) -> list[Finding]:
    """Validate one record with a throwaway RuleValidator."""
    return RuleValidator(current_year, config).validate(record)
