"""Shared types, open enumerations, and base models used across disclosure models."""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import StrEnum
from typing import Annotated, TypeVar

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    """Return the current UTC timestamp (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


# --- Reusable annotated types ---

RecordId = Annotated[int, Field(description="Store-assigned integer identifier.")]
UTCTimestamp = Annotated[
    datetime, Field(description="UTC timezone-aware timestamp.")
]
Quantity = Annotated[
    Decimal, Field(description="Fixed-precision quantity (tCO2e, MWh, hours, %).")
]

# Stored precision (total digits, decimal places). Validators reject values
# that do not fit, so the store never rounds.
QUANTITY_DIGITS, QUANTITY_SCALE = 18, 6
RATIO_DIGITS, RATIO_SCALE = 10, 2


# --- Open enumerations ---
# Known values are StrEnums. Anything else is kept verbatim as OtherValue so
# validators can flag it without losing the submitted text.


class DataQuality(StrEnum):
    """Data quality tiers for emission figures."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    ESTIMATED = "Estimated"


class VerificationStatus(StrEnum):
    """Assurance level of an emission record."""

    UNVERIFIED = "Unverified"
    INTERNAL = "Internal verification"
    THIRD_PARTY = "Third-party verified"


class ReviewStatus(StrEnum):
    """Lifecycle status for a materiality assessment."""

    DRAFT = "Draft"
    UNDER_REVIEW = "Under Review"
    APPROVED = "Approved"


@dataclass(frozen=True)
class OtherValue:
    """A value outside the known set of an open enumeration."""

    text: str


E = TypeVar("E", bound=StrEnum)


def parse_open_enum(enum_cls: type[E], value: str | None) -> E | OtherValue | None:
    """Resolve ``value`` against ``enum_cls``.

    Returns None for empty input, the enum member for a known value, and
    OtherValue for anything else. Matching is exact.
    """
    if value is None or value == "":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return OtherValue(value)


# --- Base model ---


class DisclosureBase(BaseModel):
    """Base model with common configuration for all disclosure Pydantic models."""

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
        "protected_namespaces": (),
    }
