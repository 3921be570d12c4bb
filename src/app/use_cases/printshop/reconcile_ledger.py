"""ReconcileLedger Use Case

Compares every wallet balance against the signed sum of its successful
ledger entries and reports the wallets that disagree.
"""

import logging
import time
from src.domain.base import utc_now
from libs.result import Result, Return, Error
from src.app.repositories.wallet_repository import WalletRepository
from src.app.repositories.wallet_transaction_repository import WalletTransactionRepository
from .dtos import LedgerDiscrepancyDTO, ReconciliationResultDTO
from .error_codes import ErrorCode

logger = logging.getLogger(__name__)


class ReconcileLedger:
    """
    Use Case: Reconcile wallet balances against the transaction ledger

    Business Rules:
    1. balance == sum(Topup) + sum(Refund) - sum(Print Payment), Success only
    2. Every wallet is checked
    3. Read-only: discrepancies are reported, never corrected

    Flow:
    1. Get all wallets
    2. For each wallet:
       a. Get signed sum of its successful transactions
       b. Compare with the stored balance
       c. If mismatch, record discrepancy
    3. Return reconciliation result with all discrepancies
    """

    def __init__(
        self,
        wallet_repo: WalletRepository,
        transaction_repo: WalletTransactionRepository,
    ):
        self.wallet_repo = wallet_repo
        self.transaction_repo = transaction_repo

    async def execute(self) -> Result[ReconciliationResultDTO]:
        start_time = time.time()
        reconciliation_time = utc_now()

        try:
            logger.info("Starting wallet ledger reconciliation")

            # Step 1: Get all wallets
            wallets = await self.wallet_repo.get_all()
            total_wallets = len(wallets)

            # Step 2: Check each wallet
            discrepancies: list[LedgerDiscrepancyDTO] = []

            for wallet in wallets:
                calculated = await self.transaction_repo.get_signed_sum_by_wallet(wallet.id)

                if wallet.balance != calculated:
                    difference = wallet.balance - calculated
                    discrepancies.append(
                        LedgerDiscrepancyDTO(
                            wallet_id=wallet.id,
                            student_id=wallet.student_id,
                            ledger_balance=wallet.balance,
                            calculated_balance=calculated,
                            discrepancy=difference,
                        )
                    )
                    logger.warning(
                        f"Discrepancy found for student {wallet.student_id} "
                        f"(wallet_id={wallet.id}): balance={wallet.balance}, "
                        f"transaction_sum={calculated}, discrepancy={difference}"
                    )

            # Step 3: Build response
            execution_time_ms = int((time.time() - start_time) * 1000)

            if discrepancies:
                logger.warning(
                    f"Reconciliation complete. Found {len(discrepancies)} discrepancies "
                    f"out of {total_wallets} wallets in {execution_time_ms}ms"
                )
            else:
                logger.info(
                    f"Reconciliation complete. All {total_wallets} wallets balanced "
                    f"in {execution_time_ms}ms"
                )

            return Return.ok(
                ReconciliationResultDTO(
                    total_wallets_checked=total_wallets,
                    discrepancies_found=len(discrepancies),
                    discrepancies=discrepancies,
                    reconciliation_time=reconciliation_time,
                    execution_time_ms=execution_time_ms,
                )
            )

        except Exception as e:
            logger.error(f"Ledger reconciliation failed: {e}")
            return Return.err(
                Error(
                    code=ErrorCode.RECONCILIATION_FAILED,
                    message="Failed to reconcile wallet ledger",
                    reason=str(e),
                )
            )
