"""Wallet Transaction Domain Entity

Immutable append-only ledger of every wallet balance change.
Each transaction records the balance change with complete context.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Integer, Numeric, String, DateTime
from src.domain.base import BaseModel, utc_now


class TransactionType(str, Enum):
    """Wallet transaction kinds"""
    TOPUP = "Topup"                   # Cash added by the student
    PRINT_PAYMENT = "Print Payment"   # Debit for an accepted print job
    REFUND = "Refund"                 # Credit back to the wallet

    @property
    def is_credit(self) -> bool:
        return self is not TransactionType.PRINT_PAYMENT


class TransactionStatus(str, Enum):
    """Outcome of a ledger entry"""
    SUCCESS = "Success"
    FAILED = "Failed"
    PENDING = "Pending"


class WalletTransaction(BaseModel, table=True):
    """
    Wallet Transaction - Immutable audit trail of balance mutations

    Domain Rules:
    - Transactions are immutable (append-only, no update/delete)
    - reference_no is globally unique and never reused
    - amount is a positive magnitude; the sign comes from transaction_type
    - student_id is denormalized from the wallet for audit queries
    - PRINT_PAYMENT rows point at the printing request they paid for
    """

    __tablename__ = "wallet_transactions"
    __table_args__ = (
        CheckConstraint('amount > 0', name='wallet_transaction_amount_positive'),
        Index('ix_wallet_transactions_wallet_id', 'wallet_id'),
        Index('ix_wallet_transactions_transaction_date', 'transaction_date'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True),
        description="Unique transaction identifier (auto-increment, commit order per wallet)"
    )

    wallet_id: int = Field(
        sa_column=Column(
            BigInteger().with_variant(Integer, "sqlite"),
            ForeignKey("wallets.id"),
            nullable=False,
        ),
        description="Foreign key to Wallet"
    )

    student_id: str = Field(
        sa_column=Column(String(20), ForeignKey("students.student_id"), nullable=False, index=True),
        description="Owning student (denormalized for audit)"
    )

    transaction_type: TransactionType = Field(
        description="Kind of transaction (Topup, Print Payment, Refund)"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Amount moved (positive magnitude, precision: 10,2)"
    )

    balance_before: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Wallet balance before the transaction"
    )

    balance_after: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Wallet balance after the transaction"
    )

    reference_no: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Unique reference number for audit and reconciliation"
    )

    status: TransactionStatus = Field(
        default=TransactionStatus.SUCCESS,
        description="Outcome status"
    )

    printing_request_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            BigInteger().with_variant(Integer, "sqlite"),
            ForeignKey("printing_requests.id"),
            nullable=True,
            unique=True,
        ),
        description="Printing request paid by this transaction (Print Payment only)"
    )

    transaction_date: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Transaction timestamp (immutable)"
    )

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign of its effect on the wallet balance"""
        if TransactionType(self.transaction_type).is_credit:
            return self.amount
        return -self.amount

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "wallet_id": 1,
                "student_id": "2023001",
                "transaction_type": "Print Payment",
                "amount": "3.00",
                "balance_before": "50.00",
                "balance_after": "47.00",
                "reference_no": "PRN20240101120000A1B2C3D4E5F6",
                "status": "Success",
                "printing_request_id": 1,
                "transaction_date": "2024-01-01T00:00:00Z"
            }
        }
