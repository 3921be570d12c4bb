"""Wallet Domain Entity

Prepaid balance owned by a student. Balance is always >= 0 and only
changes together with a WalletTransaction.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, BigInteger, ForeignKey, Integer, Numeric, String, DateTime
from src.domain.base import BaseModel, utc_now


class Wallet(BaseModel, table=True):
    """
    Wallet - Student prepaid balance

    Domain Rules:
    - One wallet per student (student_id is unique)
    - Balance must be non-negative
    - Balance updates only through settlement, top-up and refund
    - version increments on every balance change (compare-and-swap guard)
    """

    __tablename__ = "wallets"
    __table_args__ = (
        CheckConstraint('balance >= 0', name='wallet_balance_non_negative'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True),
        description="Unique wallet identifier (auto-increment)"
    )

    student_id: str = Field(
        sa_column=Column(
            String(20),
            ForeignKey("students.student_id"),
            nullable=False,
            unique=True,
            index=True,
        ),
        description="Owning student (unique - one wallet per student)"
    )

    balance: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(10, 2), nullable=False, default=0),
        description="Current balance (must be >= 0, precision: 10,2)"
    )

    version: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Optimistic concurrency counter"
    )

    last_topup_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
        description="Timestamp of the most recent top-up"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Wallet creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last balance update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "student_id": "2023001",
                "balance": "50.00",
                "version": 3,
                "last_topup_at": "2024-01-01T00:00:00Z",
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z"
            }
        }
