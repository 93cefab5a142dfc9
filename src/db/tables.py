"""SQLAlchemy ORM table models for the disclosure record store.

One table per record kind, each with an auto-incrementing integer key.
Quantities use Numeric (fixed precision, never float; exact text on SQLite,
see ``src.db.types``). Audit timestamps always come back in UTC. Enumerated text
(data quality, verification status, review status) is plain String; the
allowed values are checked by the rule validators, not the database.
Derived values (total emissions, percentages, materiality flags) are never
stored.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.db.session import Base
from src.db.types import QuantityColumn, RatioColumn, UTCDateTime


class AuditMixin:
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    modified_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    created_by: Mapped[str] = mapped_column(String(255), default="", nullable=False)


# ---------------------------------------------------------------------------
# ESRS E1
# ---------------------------------------------------------------------------


class EmissionRecordRow(AuditMixin, Base):
    __tablename__ = "emission_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reporting_year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    scope1_emissions: Mapped[Decimal] = mapped_column(QuantityColumn, nullable=False, default=0)
    scope2_location_based: Mapped[Decimal] = mapped_column(QuantityColumn, nullable=False, default=0)
    scope2_market_based: Mapped[Decimal] = mapped_column(QuantityColumn, nullable=False, default=0)
    scope3_emissions: Mapped[Decimal] = mapped_column(QuantityColumn, nullable=False, default=0)
    data_quality: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    verification_status: Mapped[str] = mapped_column(
        String(100), default="Unverified", nullable=False,
    )
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)


class EnergyConsumptionRow(AuditMixin, Base):
    __tablename__ = "energy_consumption"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reporting_year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    energy_source: Mapped[str] = mapped_column(String(255), nullable=False)
    consumption_mwh: Mapped[Decimal] = mapped_column(QuantityColumn, nullable=False, default=0)
    is_renewable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    grid_electricity: Mapped[Decimal] = mapped_column(QuantityColumn, nullable=False, default=0)
    self_generated_renewable: Mapped[Decimal] = mapped_column(QuantityColumn, nullable=False, default=0)
    purchased_renewable_certificates: Mapped[Decimal] = mapped_column(
        QuantityColumn, nullable=False, default=0,
    )
    energy_intensity: Mapped[Decimal | None] = mapped_column(QuantityColumn, nullable=True)
    methodology: Mapped[str] = mapped_column(Text, default="", nullable=False)
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)


# ---------------------------------------------------------------------------
# ESRS S1
# ---------------------------------------------------------------------------


class WorkforceDiversityRow(AuditMixin, Base):
    __tablename__ = "workforce_diversity"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reporting_year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    employee_category: Mapped[str] = mapped_column(String(255), nullable=False)
    total_employees: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    female_employees: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    male_employees: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    non_binary_employees: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    employees_under_30: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    employees_30_to_50: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    employees_over_50: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    employees_with_disabilities: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    ethnic_minority_employees: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    average_training_hours: Mapped[Decimal] = mapped_column(RatioColumn, nullable=False, default=0)
    turnover_rate: Mapped[Decimal] = mapped_column(RatioColumn, nullable=False, default=0)
    gender_pay_gap: Mapped[Decimal | None] = mapped_column(RatioColumn, nullable=True)
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)


# ---------------------------------------------------------------------------
# ESRS 1: double materiality
# ---------------------------------------------------------------------------


class MaterialityAssessmentRow(AuditMixin, Base):
    __tablename__ = "materiality_assessments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reporting_year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    sustainability_topic: Mapped[str] = mapped_column(String(255), nullable=False)
    esrs_standard: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    impact_materiality: Mapped[int] = mapped_column(Integer, nullable=False)
    financial_materiality: Mapped[int] = mapped_column(Integer, nullable=False)
    time_horizon: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    stakeholder_groups: Mapped[str] = mapped_column(Text, default="", nullable=False)
    assessment_methodology: Mapped[str] = mapped_column(Text, default="", nullable=False)
    identified_risks: Mapped[str] = mapped_column(Text, default="", nullable=False)
    identified_opportunities: Mapped[str] = mapped_column(Text, default="", nullable=False)
    supporting_evidence: Mapped[str] = mapped_column(Text, default="", nullable=False)
    management_response: Mapped[str] = mapped_column(Text, default="", nullable=False)
    review_status: Mapped[str] = mapped_column(String(50), default="Draft", nullable=False)
