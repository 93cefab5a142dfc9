"""Tests for the disclosure, assessment and report HTTP endpoints.

Uses the DB-backed ``client`` fixture from conftest.py, which pins the
current year to 2025 for the reporting-window rule.
Quantities come back as JSON strings and are compared as Decimal.
"""

from decimal import Decimal

from httpx import AsyncClient


def _emission_payload(year: int = 2024, scope1: str = "100") -> dict:
    return {
        "reporting_year": year,
        "scope1_emissions": scope1,
        "scope2_location_based": "50",
        "scope2_market_based": "30",
        "scope3_emissions": "20",
        "data_quality": "Medium",
    }


# ===================================================================
# Disclosure records
# ===================================================================


class TestCreateEmission:
    async def test_create_returns_201_with_record(self, client: AsyncClient) -> None:
        response = await client.post("/v1/disclosures/emissions", json=_emission_payload())
        assert response.status_code == 201
        data = response.json()
        assert data["created"] is True
        assert data["warnings"] == []
        assert data["record"]["id"] is not None
        assert Decimal(data["record"]["total_emissions"]) == Decimal("150")

    async def test_client_id_is_ignored_on_create(self, client: AsyncClient) -> None:
        payload = {**_emission_payload(), "id": 12345}
        response = await client.post("/v1/disclosures/emissions", json=payload)
        assert response.status_code == 201
        assert response.json()["record"]["id"] != 12345

    async def test_errors_return_422_with_findings(self, client: AsyncClient) -> None:
        response = await client.post(
            "/v1/disclosures/emissions", json=_emission_payload(scope1="-5"),
        )
        assert response.status_code == 422
        data = response.json()
        assert data["code"] == "VALIDATION_ERROR"
        assert [e["rule"] for e in data["errors"]] == ["emissions_non_negative"]
        assert data["errors"][0]["severity"] == "ERROR"

        listing = await client.get("/v1/disclosures/emissions")
        assert listing.json() == []

    async def test_year_outside_window_is_rejected(self, client: AsyncClient) -> None:
        response = await client.post(
            "/v1/disclosures/emissions", json=_emission_payload(year=2027),
        )
        assert response.status_code == 422
        assert [e["rule"] for e in response.json()["errors"]] == ["reporting_year_window"]

    async def test_warnings_are_returned(self, client: AsyncClient) -> None:
        payload = {**_emission_payload(), "data_quality": "High"}
        response = await client.post("/v1/disclosures/emissions", json=payload)
        assert response.status_code == 201
        assert [w["rule"] for w in response.json()["warnings"]] == ["high_quality_unverified"]


class TestReadUpdateDelete:
    async def test_get_and_list_by_year(self, client: AsyncClient) -> None:
        created = await client.post("/v1/disclosures/emissions", json=_emission_payload(2023))
        record_id = created.json()["record"]["id"]
        await client.post("/v1/disclosures/emissions", json=_emission_payload(2024))

        response = await client.get(f"/v1/disclosures/emissions/{record_id}")
        assert response.status_code == 200
        assert response.json()["reporting_year"] == 2023

        listing = await client.get("/v1/disclosures/emissions", params={"year": 2024})
        assert [r["reporting_year"] for r in listing.json()] == [2024]

    async def test_get_unknown_returns_404(self, client: AsyncClient) -> None:
        response = await client.get("/v1/disclosures/emissions/9999")
        assert response.status_code == 404

    async def test_put_replaces_record(self, client: AsyncClient) -> None:
        created = await client.post("/v1/disclosures/emissions", json=_emission_payload())
        record_id = created.json()["record"]["id"]

        response = await client.put(
            f"/v1/disclosures/emissions/{record_id}", json=_emission_payload(scope1="10"),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["created"] is False
        assert data["record"]["id"] == record_id
        assert Decimal(data["record"]["total_emissions"]) == Decimal("60")

    async def test_put_unknown_returns_404(self, client: AsyncClient) -> None:
        response = await client.put("/v1/disclosures/emissions/9999", json=_emission_payload())
        assert response.status_code == 404
        assert response.json()["detail"] == "EmissionRecord with ID 9999 not found."

    async def test_delete(self, client: AsyncClient) -> None:
        created = await client.post("/v1/disclosures/emissions", json=_emission_payload())
        record_id = created.json()["record"]["id"]

        response = await client.delete(f"/v1/disclosures/emissions/{record_id}")
        assert response.status_code == 204
        again = await client.delete(f"/v1/disclosures/emissions/{record_id}")
        assert again.status_code == 404


class TestValidateEndpoint:
    async def test_dry_run_stores_nothing(self, client: AsyncClient) -> None:
        payload = {
            "reporting_year": 2024,
            "employee_category": "All",
            "total_employees": 10,
            "female_employees": 3,
            "male_employees": 3,
        }
        response = await client.post("/v1/disclosures/workforce/validate", json=payload)
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert [f["rule"] for f in data["findings"]] == ["gender_breakdown_total"]

        listing = await client.get("/v1/disclosures/workforce")
        assert listing.json() == []

    async def test_valid_materiality(self, client: AsyncClient) -> None:
        payload = {
            "reporting_year": 2024,
            "sustainability_topic": "Climate change",
            "impact_materiality": 4,
            "financial_materiality": 2,
        }
        response = await client.post("/v1/disclosures/materiality/validate", json=payload)
        assert response.json() == {"valid": True, "findings": []}


# ===================================================================
# Assessments and reports
# ===================================================================


class TestAssessmentEndpoints:
    async def test_esrs_completeness(self, client: AsyncClient) -> None:
        await client.post("/v1/disclosures/emissions", json=_emission_payload())
        await client.post(
            "/v1/disclosures/workforce",
            json={
                "reporting_year": 2024,
                "employee_category": "All",
                "total_employees": 2,
                "female_employees": 1,
                "male_employees": 1,
            },
        )
        response = await client.get("/v1/assessments/2024/completeness")
        assert response.status_code == 200
        data = response.json()
        assert data["percentage"] == 50.0
        assert data["tier"] == "Partially Complete"
        assert data["missing"] == [
            "Governance data (ESRS G)",
            "Double materiality assessment",
        ]

    async def test_emissions_completeness(self, client: AsyncClient) -> None:
        await client.post("/v1/disclosures/emissions", json=_emission_payload())
        response = await client.get("/v1/assessments/2024/emissions-completeness")
        data = response.json()
        assert data["percentage"] == 80.0
        assert data["tier"] == "Good"
        assert data["missing"] == ["Emissions verification"]


class TestReportEndpoints:
    async def _seed(self, client: AsyncClient) -> None:
        for year, scope1 in ((2023, "60"), (2023, "40"), (2024, "80")):
            await client.post(
                "/v1/disclosures/emissions",
                json={"reporting_year": year, "scope1_emissions": scope1},
            )

    async def test_trends(self, client: AsyncClient) -> None:
        await self._seed(client)
        response = await client.get("/v1/reports/emissions/trends")
        trends = response.json()["trends"]
        assert {int(k): Decimal(v) for k, v in trends.items()} == {
            2023: Decimal("100"),
            2024: Decimal("80"),
        }

    async def test_target(self, client: AsyncClient) -> None:
        await self._seed(client)
        response = await client.get(
            "/v1/reports/emissions/target",
            params={"baseline_year": 2023, "current_year": 2024, "target_reduction_pct": "15"},
        )
        data = response.json()
        assert data["met"] is True
        assert Decimal(data["actual_reduction_pct"]) == Decimal("20")

    async def test_intensity_with_zero_base_is_null(self, client: AsyncClient) -> None:
        await self._seed(client)
        response = await client.get(
            "/v1/reports/emissions/2024/intensity", params={"intensity_base": "0"},
        )
        assert response.status_code == 200
        assert response.json()["intensity"] is None

    async def test_verification_statistics(self, client: AsyncClient) -> None:
        await self._seed(client)
        response = await client.get("/v1/reports/emissions/verification")
        assert response.json()["statistics"] == {"Unverified": 3}

    async def test_material_topics(self, client: AsyncClient) -> None:
        for topic, impact in (("Water", 1), ("Climate change", 5)):
            await client.post(
                "/v1/disclosures/materiality",
                json={
                    "reporting_year": 2024,
                    "sustainability_topic": topic,
                    "impact_materiality": impact,
                    "financial_materiality": 1,
                },
            )
        response = await client.get("/v1/reports/2024/material-topics")
        assert [t["sustainability_topic"] for t in response.json()] == ["Climate change"]
