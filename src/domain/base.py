"""Base classes shared by domain entities"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from sqlmodel import SQLModel

MONEY_QUANTUM = Decimal("0.01")

# Largest value a Numeric(10, 2) money column holds
MAX_MONEY = Decimal("99999999.99")


class BaseModel(SQLModel):
    """Base for all persisted entities"""
    pass


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


def to_money(value) -> Decimal:
    """Quantize a numeric value to two fractional digits (half-up)"""
    return Decimal(str(value)).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def has_money_precision(value: Decimal) -> bool:
    """True if value carries no more than two fractional digits"""
    return value == value.quantize(MONEY_QUANTUM)
