"""Tests for disclosure Pydantic models and open enumerations.

Covers derived fields (total emissions, gender percentages, materiality
flags), default values, and parse_open_enum.
"""

from decimal import Decimal

import pytest

from src.models.common import (
    DataQuality,
    OtherValue,
    ReviewStatus,
    VerificationStatus,
    parse_open_enum,
)
from src.models.disclosure import (
    EmissionRecord,
    MaterialityAssessment,
    WorkforceDiversity,
)


class TestOpenEnum:
    def test_known_value(self):
        assert parse_open_enum(DataQuality, "High") is DataQuality.HIGH

    def test_unknown_value_is_kept(self):
        assert parse_open_enum(VerificationStatus, "Audited") == OtherValue("Audited")

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_is_none(self, value):
        assert parse_open_enum(ReviewStatus, value) is None

    def test_match_is_case_sensitive(self):
        assert isinstance(parse_open_enum(DataQuality, "high"), OtherValue)


class TestEmissionRecord:
    def test_defaults(self):
        record = EmissionRecord(reporting_year=2024)
        assert record.id is None
        assert record.verification_status == "Unverified"
        assert record.verification is VerificationStatus.UNVERIFIED
        assert record.data_quality_tier is None
        assert record.total_emissions == Decimal("0")

    def test_total_excludes_location_based(self):
        record = EmissionRecord(
            reporting_year=2024,
            scope1_emissions=Decimal("100"),
            scope2_location_based=Decimal("50"),
            scope2_market_based=Decimal("30"),
            scope3_emissions=Decimal("20"),
        )
        assert record.total_emissions == Decimal("150")

    def test_total_follows_replacement(self):
        record = EmissionRecord(reporting_year=2024, scope1_emissions=Decimal("10"))
        updated = record.model_copy(update={"scope3_emissions": Decimal("5")})
        assert updated.total_emissions == Decimal("15")

    def test_negative_values_accepted_for_validation(self):
        record = EmissionRecord(reporting_year=2024, scope1_emissions=Decimal("-3"))
        assert record.total_emissions == Decimal("-3")

    def test_total_is_serialised(self):
        record = EmissionRecord(reporting_year=2024, scope1_emissions=Decimal("1.5"))
        assert record.model_dump(mode="json")["total_emissions"] == "1.5"


class TestWorkforceDiversity:
    def test_percentages(self):
        record = WorkforceDiversity(
            reporting_year=2024, total_employees=200, female_employees=90,
            male_employees=110, employees_with_disabilities=10,
        )
        assert record.female_percentage == Decimal("45")
        assert record.disability_percentage == Decimal("5")
        assert record.gender_total == 200

    def test_zero_total_percentages(self):
        record = WorkforceDiversity(reporting_year=2024, female_employees=3)
        assert record.female_percentage == Decimal("0")
        assert record.disability_percentage == Decimal("0")


class TestMaterialityAssessment:
    @pytest.mark.parametrize("impact", range(1, 6))
    @pytest.mark.parametrize("financial", range(1, 6))
    def test_derived_flags(self, impact, financial):
        record = MaterialityAssessment(
            reporting_year=2024, impact_materiality=impact, financial_materiality=financial,
        )
        assert record.is_material == (impact >= 3 or financial >= 3)
        assert record.materiality_score == max(impact, financial)

    def test_default_review_status(self):
        record = MaterialityAssessment(
            reporting_year=2024, impact_materiality=1, financial_materiality=1,
        )
        assert record.review is ReviewStatus.DRAFT
