"""SQLAlchemy implementation of WalletTransactionRepository

Append-only persistence for the wallet ledger. reference_no uniqueness is
enforced by a unique constraint.
"""

from decimal import Decimal
from typing import List, Optional, Tuple
from sqlalchemy import case, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.wallet_transaction_repository import WalletTransactionRepository
from src.domain.base import to_money
from src.domain.wallet_transaction import TransactionStatus, TransactionType, WalletTransaction


class SqlAlchemyWalletTransactionRepository(WalletTransactionRepository):
    """
    SQLAlchemy implementation of WalletTransactionRepository

    Features:
    - Immutable append-only transactions
    - Reference uniqueness via unique constraint on reference_no
    - Signed sums computed in SQL for reconciliation
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, transaction: WalletTransaction) -> WalletTransaction:
        """
        Append a new wallet transaction

        Raises:
            IntegrityError: If reference_no already exists
        """
        self.session.add(transaction)
        await self.session.flush()
        await self.session.refresh(transaction)
        return transaction

    async def get_by_reference(self, reference_no: str) -> Optional[WalletTransaction]:
        stmt = select(WalletTransaction).where(WalletTransaction.reference_no == reference_no)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_student_id(
        self, student_id: str, limit: int = 20, offset: int = 0
    ) -> Tuple[List[WalletTransaction], int]:
        """
        Retrieve a page of a student's transactions

        Ordered by id DESC, which per wallet is reverse commit order.
        """
        count_stmt = (
            select(func.count())
            .select_from(WalletTransaction)
            .where(WalletTransaction.student_id == student_id)
        )
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            select(WalletTransaction)
            .where(WalletTransaction.student_id == student_id)
            .order_by(WalletTransaction.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def get_signed_sum_by_wallet(self, wallet_id: int) -> Decimal:
        signed_amount = case(
            (
                WalletTransaction.transaction_type == TransactionType.PRINT_PAYMENT,
                -WalletTransaction.amount,
            ),
            else_=WalletTransaction.amount,
        )
        stmt = select(func.coalesce(func.sum(signed_amount), 0)).where(
            WalletTransaction.wallet_id == wallet_id,
            WalletTransaction.status == TransactionStatus.SUCCESS,
        )
        total = (await self.session.execute(stmt)).scalar_one()
        return to_money(total)
