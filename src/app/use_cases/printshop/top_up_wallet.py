"""TopUpWallet Use Case

Credits a student's wallet and records the Topup ledger entry atomically.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.ledger import Ledger
from src.app.services.retry_policy import RetryPolicy
from src.app.repositories.wallet_repository import WalletRepository
from src.domain.base import utc_now
from src.domain.exceptions import BalanceLimitExceeded
from src.domain.wallet_transaction import TransactionType
from .dtos import TopUpCommandDTO, WalletTransactionResponseDTO
from .error_codes import ErrorCode
from .validation import balance_limit_error, validate_amount

logger = logging.getLogger(__name__)


class TopUpWallet:
    """
    Use Case: Add cash to a student's wallet

    Business Rules:
    1. amount > 0 with at most two decimals
    2. Balance increment and Topup entry are committed together
    3. last_topup_at is set to the time of the credit
    4. The resulting balance must fit the money column (INVALID_AMOUNT)
    5. Same locking and retry policy as settlement

    Flow:
    1. Validate amount
    2. Get wallet with lock (SELECT FOR UPDATE)
    3. Credit wallet (version compare-and-swap)
    4. Append Topup ledger entry
    5. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        wallet_repo: WalletRepository,
        ledger: Ledger,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self.uow = uow
        self.wallet_repo = wallet_repo
        self.ledger = ledger
        self.retry_policy = retry_policy or RetryPolicy()

    async def execute(self, command: TopUpCommandDTO) -> Result[WalletTransactionResponseDTO]:
        error = validate_amount(command.amount)
        if error:
            return Return.err(error)

        return await self.retry_policy.run(
            self.uow,
            lambda: self._top_up(command),
            failure_code=ErrorCode.TOP_UP_FAILED,
            failure_message="Failed to top up wallet",
        )

    async def _top_up(self, command: TopUpCommandDTO) -> Result[WalletTransactionResponseDTO]:
        wallet = await self.wallet_repo.get_by_student_id(command.student_id, for_update=True)

        if not wallet:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=ErrorCode.WALLET_NOT_FOUND,
                    message=f"Wallet not found for student {command.student_id}",
                    reason="Student may not exist or wallet not initialized",
                )
            )

        balance_before = wallet.balance
        try:
            balance_after = await self.wallet_repo.apply_delta(
                wallet.id,
                command.amount,
                expected_version=wallet.version,
                topped_up_at=utc_now(),
            )
        except BalanceLimitExceeded as e:
            await self.uow.rollback()
            return Return.err(balance_limit_error(e))

        transaction = await self.ledger.append(
            wallet_id=wallet.id,
            student_id=command.student_id,
            kind=TransactionType.TOPUP,
            amount=command.amount,
            balance_before=balance_before,
            balance_after=balance_after,
        )

        await self.uow.commit()

        logger.info(
            f"Topped up wallet {wallet.id} for student {command.student_id}: "
            f"+{command.amount}, balance {balance_before} -> {balance_after}, ref={transaction.reference_no}"
        )

        return Return.ok(WalletTransactionResponseDTO.from_entity(transaction))
