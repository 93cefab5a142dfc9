"""Disclosure record tables — emissions, energy, workforce, materiality.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

from src.db.types import QuantityColumn, RatioColumn, UTCDateTime

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_TABLES = (
    "emission_records",
    "energy_consumption",
    "workforce_diversity",
    "materiality_assessments",
)


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("modified_at", UTCDateTime(), nullable=False),
        sa.Column("created_by", sa.String(255), nullable=False, server_default=""),
    ]


def upgrade() -> None:
    op.create_table(
        "emission_records",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("reporting_year", sa.Integer, nullable=False),
        sa.Column("scope1_emissions", QuantityColumn, nullable=False, server_default="0"),
        sa.Column("scope2_location_based", QuantityColumn, nullable=False, server_default="0"),
        sa.Column("scope2_market_based", QuantityColumn, nullable=False, server_default="0"),
        sa.Column("scope3_emissions", QuantityColumn, nullable=False, server_default="0"),
        sa.Column("data_quality", sa.String(50), nullable=False, server_default=""),
        sa.Column(
            "verification_status", sa.String(100), nullable=False,
            server_default="Unverified",
        ),
        sa.Column("notes", sa.Text, nullable=False, server_default=""),
        *_audit_columns(),
    )

    op.create_table(
        "energy_consumption",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("reporting_year", sa.Integer, nullable=False),
        sa.Column("energy_source", sa.String(255), nullable=False),
        sa.Column("consumption_mwh", QuantityColumn, nullable=False, server_default="0"),
        sa.Column("is_renewable", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("grid_electricity", QuantityColumn, nullable=False, server_default="0"),
        sa.Column("self_generated_renewable", QuantityColumn, nullable=False, server_default="0"),
        sa.Column(
            "purchased_renewable_certificates", QuantityColumn, nullable=False,
            server_default="0",
        ),
        sa.Column("energy_intensity", QuantityColumn, nullable=True),
        sa.Column("methodology", sa.Text, nullable=False, server_default=""),
        sa.Column("notes", sa.Text, nullable=False, server_default=""),
        *_audit_columns(),
    )

    op.create_table(
        "workforce_diversity",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("reporting_year", sa.Integer, nullable=False),
        sa.Column("employee_category", sa.String(255), nullable=False),
        *[
            sa.Column(name, sa.Integer, nullable=False, server_default="0")
            for name in (
                "total_employees",
                "female_employees",
                "male_employees",
                "non_binary_employees",
                "employees_under_30",
                "employees_30_to_50",
                "employees_over_50",
                "employees_with_disabilities",
                "ethnic_minority_employees",
            )
        ],
        sa.Column("average_training_hours", RatioColumn, nullable=False, server_default="0"),
        sa.Column("turnover_rate", RatioColumn, nullable=False, server_default="0"),
        sa.Column("gender_pay_gap", RatioColumn, nullable=True),
        sa.Column("notes", sa.Text, nullable=False, server_default=""),
        *_audit_columns(),
    )

    op.create_table(
        "materiality_assessments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("reporting_year", sa.Integer, nullable=False),
        sa.Column("sustainability_topic", sa.String(255), nullable=False),
        sa.Column("esrs_standard", sa.String(50), nullable=False, server_default=""),
        sa.Column("impact_materiality", sa.Integer, nullable=False),
        sa.Column("financial_materiality", sa.Integer, nullable=False),
        sa.Column("time_horizon", sa.String(100), nullable=False, server_default=""),
        *[
            sa.Column(name, sa.Text, nullable=False, server_default="")
            for name in (
                "stakeholder_groups",
                "assessment_methodology",
                "identified_risks",
                "identified_opportunities",
                "supporting_evidence",
                "management_response",
            )
        ],
        sa.Column("review_status", sa.String(50), nullable=False, server_default="Draft"),
        *_audit_columns(),
    )

    for table in _TABLES:
        op.create_index(op.f(f"ix_{table}_reporting_year"), table, ["reporting_year"])


def downgrade() -> None:
    for table in reversed(_TABLES):
        op.drop_index(op.f(f"ix_{table}_reporting_year"), table_name=table)
        op.drop_table(table)
