"""Column types for the disclosure tables.

SQLite has no decimal or timezone-aware datetime storage: its NUMERIC
affinity goes through float and its DATETIME drops the offset. The types
here keep both exact on SQLite and fall back to the native types elsewhere.
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String
from sqlalchemy.types import TypeDecorator

from src.models.common import QUANTITY_DIGITS, QUANTITY_SCALE, RATIO_DIGITS, RATIO_SCALE


class DecimalText(TypeDecorator):
    """Decimal stored as its plain (non-exponent) text form."""

    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return format(Decimal(value), "f")

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime, always returned in UTC.

    Naive values are taken to be UTC on the way in and on the way out.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: datetime | None, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def fixed_decimal(precision: int, scale: int):
    """Numeric(precision, scale), stored as exact text on SQLite."""
    return Numeric(precision, scale, asdecimal=True).with_variant(DecimalText(), "sqlite")


# tCO2e / MWh quantities
QuantityColumn = fixed_decimal(QUANTITY_DIGITS, QUANTITY_SCALE)
# Percentages and hours
RatioColumn = fixed_decimal(RATIO_DIGITS, RATIO_SCALE)
