"""SQLAlchemy implementation of WalletRepository

Provides persistence for Wallet entities with pessimistic locking support
and a version compare-and-swap on every balance change, so concurrent
debits against one wallet are serialized on any backend.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.wallet_repository import WalletRepository
from src.domain.base import MAX_MONEY, to_money, utc_now
from src.domain.exceptions import BalanceLimitExceeded, InsufficientFunds, WalletNotFound, WalletVersionConflict
from src.domain.wallet import Wallet


class SqlAlchemyWalletRepository(WalletRepository):
    """
    SQLAlchemy implementation of WalletRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE (PostgreSQL)
    - Optimistic version check on write (all backends)
    - Reads always refresh identity-map instances (populate_existing)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_student_id(self, student_id: str, for_update: bool = False) -> Optional[Wallet]:
        """
        Retrieve wallet by owning student with optional row-level locking

        Args:
            student_id: Student identifier
            for_update: If True, locks the row with SELECT FOR UPDATE (prevents concurrent modifications)

        Returns:
            Wallet if found, None otherwise
        """
        stmt = select(Wallet).where(Wallet.student_id == student_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(
            stmt.execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, wallet_id: int, for_update: bool = False) -> Optional[Wallet]:
        """
        Retrieve wallet by ID with optional row-level locking

        Args:
            wallet_id: Wallet ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Wallet if found, None otherwise
        """
        stmt = select(Wallet).where(Wallet.id == wallet_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(
            stmt.execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create(self, wallet: Wallet) -> Wallet:
        self.session.add(wallet)
        await self.session.flush()
        await self.session.refresh(wallet)
        return wallet

    async def apply_delta(
        self,
        wallet_id: int,
        delta: Decimal,
        expected_version: Optional[int] = None,
        topped_up_at: Optional[datetime] = None,
    ) -> Decimal:
        """
        Adjust wallet balance by delta with a version compare-and-swap

        The UPDATE only matches the row if its version is unchanged since the
        read, so a concurrent writer makes this raise WalletVersionConflict
        instead of silently overwriting the other balance.

        Note:
            Should be called within a transaction, ideally with the wallet
            already locked
        """
        wallet = await self.get_by_id(wallet_id)
        if wallet is None:
            raise WalletNotFound(wallet_id)

        version = wallet.version if expected_version is None else expected_version
        if wallet.version != version:
            raise WalletVersionConflict(wallet_id, version, wallet.version)

        new_balance = to_money(wallet.balance + delta)
        if new_balance < 0:
            raise InsufficientFunds(wallet_id, wallet.balance, -delta)
        if new_balance > MAX_MONEY:
            raise BalanceLimitExceeded(wallet_id, wallet.balance, delta, MAX_MONEY)

        values = {
            "balance": new_balance,
            "version": version + 1,
            "updated_at": utc_now(),
        }
        if topped_up_at is not None:
            values["last_topup_at"] = topped_up_at

        stmt = (
            update(Wallet)
            .where(Wallet.id == wallet_id, Wallet.version == version)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)

        if result.rowcount != 1:
            raise WalletVersionConflict(wallet_id, version)

        await self.session.refresh(wallet)
        return new_balance

    async def get_all(self) -> List[Wallet]:
        stmt = select(Wallet).order_by(Wallet.id)
        result = await self.session.execute(
            stmt.execution_options(populate_existing=True)
        )
        return list(result.scalars().all())
