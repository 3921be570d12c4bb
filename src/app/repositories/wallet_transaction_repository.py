"""Wallet Transaction Repository Interface

Defines the contract for ledger persistence operations.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional, Tuple
from src.domain.wallet_transaction import WalletTransaction


class WalletTransactionRepository(ABC):
    """
    Repository interface for WalletTransaction persistence

    Transactions are immutable and append-only: there is no update or
    delete method. Uniqueness of reference_no is enforced by the database.
    """

    @abstractmethod
    async def create(self, transaction: WalletTransaction) -> WalletTransaction:
        """
        Append a new wallet transaction

        Args:
            transaction: WalletTransaction entity to persist

        Returns:
            Created WalletTransaction with generated ID

        Raises:
            IntegrityError: If reference_no already exists
        """
        pass

    @abstractmethod
    async def get_by_reference(self, reference_no: str) -> Optional[WalletTransaction]:
        """
        Retrieve transaction by reference number

        Args:
            reference_no: Unique reference number

        Returns:
            WalletTransaction if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_student_id(
        self, student_id: str, limit: int = 20, offset: int = 0
    ) -> Tuple[List[WalletTransaction], int]:
        """
        Retrieve a page of a student's transactions, newest first

        Args:
            student_id: Student identifier
            limit: Maximum number of transactions to return
            offset: Number of transactions to skip

        Returns:
            Tuple of (transactions, total count)
        """
        pass

    @abstractmethod
    async def get_signed_sum_by_wallet(self, wallet_id: int) -> Decimal:
        """
        Sum of successful transaction amounts for a wallet, credits positive
        and print payments negative

        Args:
            wallet_id: Wallet ID

        Returns:
            Signed sum (0 if the wallet has no transactions)
        """
        pass
