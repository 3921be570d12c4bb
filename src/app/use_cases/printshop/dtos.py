"""Data Transfer Objects for Print-Shop Use Cases

Pydantic models for command inputs and response outputs.
Money values are Decimals with two fractional digits.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


def enum_value(value):
    """Plain value of an Enum member (entities may hold either form)"""
    return value.value if hasattr(value, "value") else value


class CreateAccountCommandDTO(BaseModel):
    """
    Command DTO for opening a student account

    Used as input to CreateAccount use case.
    """

    student_id: str = Field(
        ...,
        description="Student identifier (unique)"
    )

    full_name: str = Field(
        ...,
        description="Student full name"
    )

    email: str = Field(
        ...,
        description="Student email (unique)"
    )

    password_hash: str = Field(
        ...,
        description="Credential hash produced by the auth service"
    )

    department: str = Field(
        ...,
        description="Academic department"
    )


class StudentAccountResponseDTO(BaseModel):
    """
    Response DTO for a created account

    Returned by CreateAccount.
    """

    student_id: str
    full_name: str
    email: str
    department: str
    wallet_id: int
    balance: Decimal
    created_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "student_id": "2023001",
                "full_name": "John Doe",
                "email": "john.doe@sdckl.edu",
                "department": "Computer Science",
                "wallet_id": 1,
                "balance": "0.00",
                "created_at": "2024-01-01T00:00:00Z"
            }
        }


class SubmitPrintRequestCommandDTO(BaseModel):
    """
    Command DTO for submitting a print job

    Used as input to SubmitPrintRequest use case. Ranges and enumerations
    are checked by the use case, not here, so bad input comes back as an
    INVALID_REQUEST result.
    """

    student_id: str = Field(
        ...,
        description="Student submitting the job"
    )

    file_name: str = Field(
        ...,
        description="Uploaded file name"
    )

    file_type: str = Field(
        ...,
        description="Uploaded file type (e.g., pdf)"
    )

    num_copies: int = Field(
        default=1,
        description="Number of copies (>= 1)"
    )

    num_pages: int = Field(
        ...,
        description="Pages per copy (>= 1)"
    )

    paper_size: str = Field(
        default="A4",
        description="Paper size (A4, A3, Letter)"
    )

    print_type: str = Field(
        default="Black & White",
        description="Color mode (Black & White, Color)"
    )

    double_sided: bool = Field(
        default=False,
        description="Duplex printing"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "student_id": "2023001",
                "file_name": "thesis.pdf",
                "file_type": "pdf",
                "num_copies": 2,
                "num_pages": 3,
                "paper_size": "A4",
                "print_type": "Color",
                "double_sided": False
            }
        }


class PrintingRequestDTO(BaseModel):
    """A printing request row, optionally joined with the student's name"""

    id: int
    student_id: str
    full_name: Optional[str] = None
    file_name: str
    file_type: str
    num_copies: int
    num_pages: int
    paper_size: str
    print_type: str
    double_sided: bool
    status: str
    total_cost: Decimal
    request_date: datetime
    completion_date: Optional[datetime] = None

    @classmethod
    def from_entity(cls, request, full_name: Optional[str] = None) -> "PrintingRequestDTO":
        return cls(
            id=request.id,
            student_id=request.student_id,
            full_name=full_name,
            file_name=request.file_name,
            file_type=request.file_type,
            num_copies=request.num_copies,
            num_pages=request.num_pages,
            paper_size=enum_value(request.paper_size),
            print_type=enum_value(request.print_type),
            double_sided=request.double_sided,
            status=enum_value(request.status),
            total_cost=request.total_cost,
            request_date=request.request_date,
            completion_date=request.completion_date,
        )


class PrintSettlementResponseDTO(BaseModel):
    """
    Response DTO for an accepted print job

    Returned by SubmitPrintRequest: the created request plus the payment
    ledger entry that debited the wallet.
    """

    request: PrintingRequestDTO = Field(
        ...,
        description="Created printing request (status Pending)"
    )

    transaction_id: Optional[int] = Field(
        default=None,
        description="Print Payment transaction ID (None for a free job)"
    )

    reference_no: Optional[str] = Field(
        default=None,
        description="Payment reference number (None for a free job)"
    )

    balance_before: Decimal = Field(
        ...,
        description="Wallet balance before the debit"
    )

    balance_after: Decimal = Field(
        ...,
        description="Wallet balance after the debit"
    )


class TopUpCommandDTO(BaseModel):
    """
    Command DTO for topping up a wallet

    Used as input to TopUpWallet use case.
    """

    student_id: str = Field(
        ...,
        description="Student whose wallet is credited"
    )

    amount: Decimal = Field(
        ...,
        description="Amount to add (must be > 0, two decimals)"
    )


class RefundCommandDTO(BaseModel):
    """
    Command DTO for refunding to a wallet

    Used as input to RefundWallet use case.
    """

    wallet_id: int = Field(
        ...,
        description="Wallet to credit"
    )

    amount: Decimal = Field(
        ...,
        description="Amount to refund (must be > 0, two decimals)"
    )

    reference: Optional[str] = Field(
        default=None,
        max_length=50,
        description="Reference number for the refund entry (generated when omitted)"
    )


class WalletTransactionResponseDTO(BaseModel):
    """
    Response DTO for wallet credit operations

    Returned by TopUpWallet and RefundWallet.
    """

    transaction_id: int
    wallet_id: int
    student_id: str
    transaction_type: str
    amount: Decimal
    balance_before: Decimal
    balance_after: Decimal
    reference_no: str
    status: str
    transaction_date: datetime

    @classmethod
    def from_entity(cls, transaction) -> "WalletTransactionResponseDTO":
        return cls(
            transaction_id=transaction.id,
            wallet_id=transaction.wallet_id,
            student_id=transaction.student_id,
            transaction_type=enum_value(transaction.transaction_type),
            amount=transaction.amount,
            balance_before=transaction.balance_before,
            balance_after=transaction.balance_after,
            reference_no=transaction.reference_no,
            status=enum_value(transaction.status),
            transaction_date=transaction.transaction_date,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "transaction_id": 12,
                "wallet_id": 1,
                "student_id": "2023001",
                "transaction_type": "Topup",
                "amount": "20.00",
                "balance_before": "30.00",
                "balance_after": "50.00",
                "reference_no": "TOP20240101120000A1B2C3D4E5F6",
                "status": "Success",
                "transaction_date": "2024-01-01T12:00:00Z"
            }
        }


class BalanceResponseDTO(BaseModel):
    """
    Response DTO for get balance operation

    Wallet balance joined with student identity.
    """

    student_id: str
    full_name: str
    department: str
    wallet_id: int
    balance: Decimal
    last_topup_at: Optional[datetime] = None
    last_updated: datetime


class TransactionDTO(BaseModel):
    """A ledger row joined with the student's name"""

    id: int
    student_id: str
    full_name: str
    transaction_type: str
    amount: Decimal
    signed_amount: Decimal
    balance_before: Decimal
    balance_after: Decimal
    reference_no: str
    status: str
    printing_request_id: Optional[int] = None
    transaction_date: datetime


class ListTransactionsResponseDTO(BaseModel):
    """Paginated transaction history"""

    student_id: str
    transactions: List[TransactionDTO]
    total: int
    limit: int
    offset: int


class ListPrintingHistoryResponseDTO(BaseModel):
    """Paginated printing history"""

    student_id: str
    requests: List[PrintingRequestDTO]
    total: int
    limit: int
    offset: int


class EstimateCommandDTO(BaseModel):
    """Command DTO for pricing a job without submitting it"""

    paper_size: str = "A4"
    print_type: str = "Black & White"
    num_pages: int
    num_copies: int = 1


class EstimateResponseDTO(BaseModel):
    """Price quote for a print job"""

    paper_size: str
    print_type: str
    num_pages: int
    num_copies: int
    cost_per_page: Decimal
    total_cost: Decimal


class LedgerDiscrepancyDTO(BaseModel):
    """A wallet whose balance disagrees with its ledger"""

    wallet_id: int
    student_id: str
    ledger_balance: Decimal = Field(
        ...,
        description="Balance stored on the wallet"
    )
    calculated_balance: Decimal = Field(
        ...,
        description="Signed sum of the wallet's successful transactions"
    )
    discrepancy: Decimal = Field(
        ...,
        description="ledger_balance - calculated_balance"
    )


class ReconciliationResultDTO(BaseModel):
    """Outcome of one reconciliation run"""

    total_wallets_checked: int
    discrepancies_found: int
    discrepancies: List[LedgerDiscrepancyDTO]
    reconciliation_time: datetime
    execution_time_ms: int
