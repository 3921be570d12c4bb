"""Wallet Repository Interface

Defines the contract for wallet persistence, including the guarded
balance mutation used by settlement, top-up and refund.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from src.domain.wallet import Wallet


class WalletRepository(ABC):
    """
    Repository interface for Wallet persistence

    Reads accept for_update to take a row lock (SELECT FOR UPDATE).
    apply_delta is the only way a balance changes.
    """

    @abstractmethod
    async def get_by_student_id(self, student_id: str, for_update: bool = False) -> Optional[Wallet]:
        """
        Retrieve wallet by owning student

        Args:
            student_id: Student identifier
            for_update: If True, lock the row with SELECT FOR UPDATE (pessimistic lock)

        Returns:
            Wallet if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_id(self, wallet_id: int, for_update: bool = False) -> Optional[Wallet]:
        """
        Retrieve wallet by ID

        Args:
            wallet_id: Wallet ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Wallet if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, wallet: Wallet) -> Wallet:
        """
        Create a new wallet

        Args:
            wallet: Wallet entity to persist

        Returns:
            Created Wallet with generated ID
        """
        pass

    @abstractmethod
    async def apply_delta(
        self,
        wallet_id: int,
        delta: Decimal,
        expected_version: Optional[int] = None,
        topped_up_at: Optional[datetime] = None,
    ) -> Decimal:
        """
        Adjust wallet balance by delta (positive = credit, negative = debit)

        Args:
            wallet_id: Wallet ID
            delta: Signed amount to add to the balance
            expected_version: Version read by the caller; the write only applies
                if the row still carries it
            topped_up_at: If given, also stored as last_topup_at

        Returns:
            New balance

        Raises:
            WalletNotFound: If the wallet does not exist
            InsufficientFunds: If the new balance would be negative
            BalanceLimitExceeded: If the new balance would exceed MAX_MONEY
            WalletVersionConflict: If the row changed since expected_version
        """
        pass

    @abstractmethod
    async def get_all(self) -> List[Wallet]:
        """
        Retrieve all wallets (used by reconciliation)

        Returns:
            List of wallets ordered by ID
        """
        pass
