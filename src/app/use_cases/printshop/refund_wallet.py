"""RefundWallet Use Case

Records a Refund ledger entry and credits the wallet by the same amount.
The credit is derived from the entry, inside the same unit of work, so a
refund entry never exists without its balance change or vice versa.
"""

import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.ledger import Ledger
from src.app.services.retry_policy import RetryPolicy
from src.app.repositories.wallet_repository import WalletRepository
from src.app.repositories.wallet_transaction_repository import WalletTransactionRepository
from src.domain.base import MAX_MONEY, to_money
from src.domain.exceptions import BalanceLimitExceeded
from src.domain.wallet_transaction import TransactionType
from .dtos import RefundCommandDTO, WalletTransactionResponseDTO
from .error_codes import ErrorCode
from .validation import balance_limit_error, validate_amount

logger = logging.getLogger(__name__)


class RefundWallet:
    """
    Use Case: Refund money to a wallet

    Business Rules:
    1. The wallet must exist
    2. amount > 0 with at most two decimals
    3. A caller-supplied reference may be used only once
    4. Refund entry and balance increment are committed together
    5. No maximum per payment: refunds may exceed any earlier payment, but the
       resulting balance must fit the money column (INVALID_AMOUNT)

    Flow:
    1. Validate amount
    2. Get wallet with lock (SELECT FOR UPDATE)
    3. Reject a reference that is already in the ledger
    4. Append Refund ledger entry
    5. Credit wallet by the entry amount (version compare-and-swap)
    6. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        wallet_repo: WalletRepository,
        transaction_repo: WalletTransactionRepository,
        ledger: Ledger,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self.uow = uow
        self.wallet_repo = wallet_repo
        self.transaction_repo = transaction_repo
        self.ledger = ledger
        self.retry_policy = retry_policy or RetryPolicy()

    async def execute(self, command: RefundCommandDTO) -> Result[WalletTransactionResponseDTO]:
        error = validate_amount(command.amount)
        if error:
            return Return.err(error)

        return await self.retry_policy.run(
            self.uow,
            lambda: self._refund(command),
            failure_code=ErrorCode.REFUND_FAILED,
            failure_message="Failed to refund wallet",
        )

    async def _refund(self, command: RefundCommandDTO) -> Result[WalletTransactionResponseDTO]:
        wallet = await self.wallet_repo.get_by_id(command.wallet_id, for_update=True)

        if not wallet:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=ErrorCode.WALLET_NOT_FOUND,
                    message=f"Wallet {command.wallet_id} not found",
                )
            )

        if command.reference and await self.transaction_repo.get_by_reference(command.reference):
            await self.uow.rollback()
            return self._duplicate_reference(command.reference)

        balance_before = wallet.balance
        balance_after = to_money(balance_before + command.amount)
        if balance_after > MAX_MONEY:
            # The entry stores balance_after too, so reject before writing it
            await self.uow.rollback()
            return Return.err(
                balance_limit_error(
                    BalanceLimitExceeded(command.wallet_id, balance_before, command.amount, MAX_MONEY)
                )
            )

        try:
            transaction = await self.ledger.append(
                wallet_id=wallet.id,
                student_id=wallet.student_id,
                kind=TransactionType.REFUND,
                amount=command.amount,
                balance_before=balance_before,
                balance_after=balance_after,
                reference=command.reference,
            )
        except IntegrityError:
            if not command.reference:
                raise
            # Same reference inserted concurrently by another refund
            await self.uow.rollback()
            return self._duplicate_reference(command.reference)

        # The successful Refund entry drives the credit
        await self.wallet_repo.apply_delta(
            wallet.id, transaction.amount, expected_version=wallet.version
        )

        await self.uow.commit()

        logger.info(
            f"Refunded wallet {wallet.id} (student {wallet.student_id}): "
            f"+{command.amount}, balance {balance_before} -> {balance_after}, ref={transaction.reference_no}"
        )

        return Return.ok(WalletTransactionResponseDTO.from_entity(transaction))

    @staticmethod
    def _duplicate_reference(reference: Optional[str]) -> Result[WalletTransactionResponseDTO]:
        return Return.err(
            Error(
                code=ErrorCode.DUPLICATE_REFERENCE,
                message=f"Reference {reference} has already been used",
            )
        )
