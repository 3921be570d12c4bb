"""Pricing Rule Domain Entity

Cost per page for a (paper size, print type) pair. Read-only for the
settlement path; maintained by administrators.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import BigInteger, Integer, Numeric, UniqueConstraint, DateTime
from src.domain.base import BaseModel, utc_now
from src.domain.printing_request import PaperSize, PrintType


class PricingRule(BaseModel, table=True):
    """
    Pricing Rule - Cost per page lookup row

    Domain Rules:
    - At most one rule per (paper_size, print_type)
    - cost_per_page has two fractional digits
    """

    __tablename__ = "printing_costs"
    __table_args__ = (
        UniqueConstraint('paper_size', 'print_type', name='uq_printing_costs_size_type'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True),
        description="Unique rule identifier (auto-increment)"
    )

    paper_size: PaperSize = Field(
        description="Paper size (A4, A3, Letter)"
    )

    print_type: PrintType = Field(
        description="Color mode (Black & White, Color)"
    )

    cost_per_page: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Cost per printed page (precision: 10,2)"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last price change timestamp"
    )


DEFAULT_PRICING_RULES = [
    (PaperSize.A4, PrintType.BLACK_WHITE, Decimal("0.10")),
    (PaperSize.A4, PrintType.COLOR, Decimal("0.50")),
    (PaperSize.A3, PrintType.BLACK_WHITE, Decimal("0.20")),
    (PaperSize.A3, PrintType.COLOR, Decimal("1.00")),
    (PaperSize.LETTER, PrintType.BLACK_WHITE, Decimal("0.10")),
    (PaperSize.LETTER, PrintType.COLOR, Decimal("0.50")),
]


def default_pricing_rules() -> list[PricingRule]:
    """Price list shipped with the print shop"""
    return [
        PricingRule(paper_size=size, print_type=kind, cost_per_page=cost)
        for size, kind, cost in DEFAULT_PRICING_RULES
    ]
