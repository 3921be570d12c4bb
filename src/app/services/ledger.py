"""Ledger

Appends wallet transactions with freshly generated reference numbers.
This is the only writer of wallet_transactions; there is no update or
delete path.
"""

from decimal import Decimal
from typing import Optional
from src.app.repositories.wallet_transaction_repository import WalletTransactionRepository
from src.domain.reference import generate_reference
from src.domain.wallet_transaction import TransactionStatus, TransactionType, WalletTransaction


class Ledger:
    def __init__(self, transaction_repo: WalletTransactionRepository):
        self.transaction_repo = transaction_repo

    async def append(
        self,
        wallet_id: int,
        student_id: str,
        kind: TransactionType,
        amount: Decimal,
        balance_before: Decimal,
        balance_after: Decimal,
        reference: Optional[str] = None,
        printing_request_id: Optional[int] = None,
    ) -> WalletTransaction:
        """
        Append a successful ledger entry

        Args:
            wallet_id: Wallet the entry belongs to
            student_id: Owning student (denormalized)
            kind: Transaction type
            amount: Positive amount moved
            balance_before: Wallet balance before the change
            balance_after: Wallet balance after the change
            reference: Caller-supplied reference; generated when omitted
            printing_request_id: Paid printing request (Print Payment only)

        Returns:
            Created WalletTransaction
        """
        transaction = WalletTransaction(
            wallet_id=wallet_id,
            student_id=student_id,
            transaction_type=kind,
            amount=amount,
            balance_before=balance_before,
            balance_after=balance_after,
            reference_no=reference or generate_reference(kind),
            status=TransactionStatus.SUCCESS,
            printing_request_id=printing_request_id,
        )
        return await self.transaction_repo.create(transaction)
