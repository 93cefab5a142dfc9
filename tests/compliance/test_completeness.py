"""Tests for the completeness assessors (ESRS overall and emissions)."""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

import pytest

from src.compliance.completeness import (
    assess_completeness,
    assess_emission_completeness,
    assess_esrs_completeness,
    emission_completeness_facts,
    esrs_completeness_facts,
    tier_for,
)
from src.compliance.config import (
    EMISSION_CATEGORIES,
    EMISSION_TIERS,
    ESRS_TIERS,
)
from src.compliance.models import CompletenessScope
from src.models.disclosure import (
    EmissionRecord,
    EnergyConsumption,
    MaterialityAssessment,
    WorkforceDiversity,
)


class TestEsrsCompleteness:
    def test_half_complete_scenario(self) -> None:
        result = assess_esrs_completeness(
            environmental=True, social=True, governance=False, materiality=False,
        )
        assert result.percentage == 50
        assert result.missing == [
            "Governance data (ESRS G)",
            "Double materiality assessment",
        ]
        assert result.tier == "Partially Complete"
        assert result.scope == CompletenessScope.ESRS

    def test_all_present_is_complete(self) -> None:
        result = assess_esrs_completeness(
            environmental=True, social=True, governance=True, materiality=True,
        )
        assert result.percentage == 100
        assert result.missing == []
        assert result.tier == "Complete"

    @pytest.mark.parametrize(
        ("present", "tier"),
        [(0, "Insufficient Data"), (1, "Limited Data"), (2, "Partially Complete"),
         (3, "Mostly Complete"), (4, "Complete")],
    )
    def test_tier_per_present_count(self, present: int, tier: str) -> None:
        flags = [i < present for i in range(4)]
        result = assess_esrs_completeness(
            environmental=flags[0], social=flags[1], governance=flags[2], materiality=flags[3],
        )
        assert result.present_count == present
        assert result.tier == tier

    def test_missing_keeps_declaration_order(self) -> None:
        result = assess_completeness({"materiality": True, "environmental": False})
        assert result.missing == [
            "Environmental data (ESRS E)",
            "Social data (ESRS S)",
            "Governance data (ESRS G)",
        ]

    def test_unknown_keys_ignored(self) -> None:
        result = assess_completeness({"environmental": True, "bogus": True})
        assert result.present_count == 1
        assert result.total_count == 4

    def test_idempotent(self) -> None:
        facts = {"environmental": True, "social": False, "governance": True, "materiality": False}
        first = assess_completeness(facts)
        second = assess_completeness(facts)
        assert first.percentage == second.percentage
        assert first.tier == second.tier
        assert first == second

    def test_empty_categories_rejected(self) -> None:
        with pytest.raises(ValueError):
            assess_completeness({}, categories=())


class TestExactPercentage:
    def test_thirds_are_exact(self) -> None:
        categories = EMISSION_CATEGORIES[:3]
        result = assess_completeness(
            {"scope1": True}, categories, EMISSION_TIERS,
        )
        assert result.percentage_exact == Fraction(100, 3)
        # Repeated reads recompute from counts and never drift.
        assert {result.percentage for _ in range(5)} == {float(Fraction(100, 3))}

    def test_tier_boundary_is_inclusive(self) -> None:
        assert tier_for(Fraction(75), ESRS_TIERS) == "Mostly Complete"
        assert tier_for(Fraction(7499, 100), ESRS_TIERS) == "Partially Complete"

    def test_serialised_percentage(self) -> None:
        result = assess_esrs_completeness(
            environmental=True, social=True, governance=True, materiality=False,
        )
        assert result.model_dump()["percentage"] == 75.0


class TestEmissionCompleteness:
    def test_category_labels(self) -> None:
        assert [c.label for c in EMISSION_CATEGORIES] == [
            "Scope 1 emissions data",
            "Scope 2 emissions data",
            "Scope 3 emissions data",
            "Emissions verification",
            "Data quality rating",
        ]

    def test_no_records_is_incomplete(self) -> None:
        result = assess_emission_completeness([], reporting_year=2024)
        assert result.percentage == 0
        assert result.tier == "Incomplete"
        assert len(result.missing) == 5
        assert result.reporting_year == 2024

    def test_facts_accumulate_across_records(self) -> None:
        records = [
            EmissionRecord(reporting_year=2024, scope1_emissions=Decimal("10")),
            EmissionRecord(
                reporting_year=2024,
                scope2_market_based=Decimal("5"),
                verification_status="Third-party verified",
            ),
        ]
        facts = emission_completeness_facts(records)
        assert facts == {
            "scope1": True,
            "scope2": True,
            "scope3": False,
            "verification": True,
            "data_quality": False,
        }

    def test_unverified_does_not_count(self) -> None:
        facts = emission_completeness_facts(
            [EmissionRecord(reporting_year=2024, verification_status="Unverified")]
        )
        assert facts["verification"] is False

    def test_whitespace_only_text_does_not_count(self) -> None:
        facts = emission_completeness_facts(
            [EmissionRecord(reporting_year=2024, verification_status="  ", data_quality=" ")]
        )
        assert facts["verification"] is False
        assert facts["data_quality"] is False

    def test_full_disclosure_is_excellent(self) -> None:
        record = EmissionRecord(
            reporting_year=2024,
            scope1_emissions=Decimal("1"),
            scope2_location_based=Decimal("1"),
            scope3_emissions=Decimal("1"),
            data_quality="Medium",
            verification_status="Internal verification",
        )
        result = assess_emission_completeness([record])
        assert result.percentage == 100
        assert result.tier == "Excellent"

    def test_four_of_five_is_good(self) -> None:
        record = EmissionRecord(
            reporting_year=2024,
            scope1_emissions=Decimal("1"),
            scope2_location_based=Decimal("1"),
            scope3_emissions=Decimal("1"),
            data_quality="Medium",
        )
        result = assess_emission_completeness([record])
        assert result.percentage == 80
        assert result.tier == "Good"
        assert result.missing == ["Emissions verification"]


class TestEsrsFacts:
    def test_energy_alone_counts_as_environmental(self) -> None:
        facts = esrs_completeness_facts(
            energy=[EnergyConsumption(reporting_year=2024, energy_source="Grid")],
        )
        assert facts == {
            "environmental": True,
            "social": False,
            "governance": False,
            "materiality": False,
        }

    def test_all_sources(self) -> None:
        facts = esrs_completeness_facts(
            emissions=[EmissionRecord(reporting_year=2024)],
            workforce=[WorkforceDiversity(reporting_year=2024)],
            materiality=[
                MaterialityAssessment(
                    reporting_year=2024, impact_materiality=2, financial_materiality=2,
                )
            ],
            has_governance_data=True,
        )
        assert all(facts.values())
