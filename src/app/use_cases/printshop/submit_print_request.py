"""SubmitPrintRequest Use Case

Settles a print job: prices it, debits the student's wallet, records the
printing request and the payment ledger entry, all in one unit of work.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.ledger import Ledger
from src.app.services.pricing_table import PricingTable
from src.app.services.retry_policy import RetryPolicy
from src.app.repositories.wallet_repository import WalletRepository
from src.app.repositories.printing_request_repository import PrintingRequestRepository
from src.domain.exceptions import RuleNotFound
from src.domain.printing_request import PaperSize, PrintingRequest, PrintStatus, PrintType
from src.domain.wallet_transaction import TransactionType
from .dtos import PrintingRequestDTO, PrintSettlementResponseDTO, SubmitPrintRequestCommandDTO
from .error_codes import ErrorCode
from .validation import validate_file, validate_print_job

logger = logging.getLogger(__name__)


class SubmitPrintRequest:
    """
    Use Case: Settle a print job against the student's wallet

    Business Rules:
    1. copies >= 1, pages >= 1, known paper size and print type
    2. total_cost = cost_per_page * pages * copies (2 decimals)
    3. Sufficient balance: balance >= total_cost (equal is enough)
    4. Atomic updates: debit, printing request and ledger entry in one commit
    5. Pessimistic locking plus version check: concurrent debits on one
       wallet are serialized, a lost race is retried with fresh data

    Flow:
    1. Validate input
    2. Look up cost per page
    3. Compute total cost
    4. Get wallet with lock (SELECT FOR UPDATE)
    5. Validate sufficient balance
    6. Debit wallet (version compare-and-swap)
    7. Create printing request (Pending)
    8. Append Print Payment ledger entry
    9. Commit and return the request
    """

    def __init__(
        self,
        uow: UnitOfWork,
        wallet_repo: WalletRepository,
        printing_request_repo: PrintingRequestRepository,
        ledger: Ledger,
        pricing_table: PricingTable,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self.uow = uow
        self.wallet_repo = wallet_repo
        self.printing_request_repo = printing_request_repo
        self.ledger = ledger
        self.pricing_table = pricing_table
        self.retry_policy = retry_policy or RetryPolicy()

    async def execute(self, command: SubmitPrintRequestCommandDTO) -> Result[PrintSettlementResponseDTO]:
        """
        Execute print settlement

        Args:
            command: SubmitPrintRequestCommandDTO describing the job

        Returns:
            Result[PrintSettlementResponseDTO]: Created request and payment, or error
        """
        # Step 1: Validate input (no mutation on failure)
        error = validate_print_job(
            command.paper_size, command.print_type, command.num_pages, command.num_copies
        ) or validate_file(command.file_name, command.file_type)
        if error:
            return Return.err(error)

        # Step 2 & 3: Price the job
        try:
            total_cost = self.pricing_table.total_cost(
                command.paper_size, command.print_type, command.num_pages, command.num_copies
            )
        except RuleNotFound as e:
            return Return.err(
                Error(
                    code=ErrorCode.RULE_NOT_FOUND,
                    message=str(e),
                    reason=f"paper_size={e.paper_size}, print_type={e.print_type}",
                )
            )

        # Steps 4-9 run as one unit of work, retried on concurrent conflicts
        return await self.retry_policy.run(
            self.uow,
            lambda: self._settle(command, total_cost),
            failure_code=ErrorCode.SETTLEMENT_FAILED,
            failure_message="Failed to settle printing request",
        )

    async def _settle(self, command: SubmitPrintRequestCommandDTO, total_cost) -> Result[PrintSettlementResponseDTO]:
        # Step 4: Get wallet with pessimistic lock (SELECT FOR UPDATE)
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

        # Step 5: Validate sufficient balance
        # rollback() expires the wallet, so read what we need first
        balance_before = wallet.balance
        if balance_before < total_cost:
            await self.uow.rollback()
            logger.info(
                f"Rejected print job for student {command.student_id}: "
                f"balance={balance_before}, required={total_cost}"
            )
            return Return.err(
                Error(
                    code=ErrorCode.INSUFFICIENT_FUNDS,
                    message=f"Insufficient wallet balance. Required: {total_cost}, Available: {balance_before}",
                    reason=f"balance={balance_before}, required={total_cost}",
                )
            )

        # Step 6: Debit wallet, only if nobody changed it since the read
        balance_after = balance_before
        if total_cost > 0:
            balance_after = await self.wallet_repo.apply_delta(
                wallet.id, -total_cost, expected_version=wallet.version
            )

        # Step 7: Create printing request
        printing_request = await self.printing_request_repo.create(
            PrintingRequest(
                student_id=command.student_id,
                file_name=command.file_name,
                file_type=command.file_type,
                num_copies=command.num_copies,
                num_pages=command.num_pages,
                paper_size=PaperSize(command.paper_size),
                print_type=PrintType(command.print_type),
                double_sided=command.double_sided,
                status=PrintStatus.PENDING,
                total_cost=total_cost,
            )
        )

        # Step 8: Append payment ledger entry (free jobs move no money)
        payment = None
        if total_cost > 0:
            payment = await self.ledger.append(
                wallet_id=wallet.id,
                student_id=command.student_id,
                kind=TransactionType.PRINT_PAYMENT,
                amount=total_cost,
                balance_before=balance_before,
                balance_after=balance_after,
                printing_request_id=printing_request.id,
            )

        # Step 9: Commit everything together
        await self.uow.commit()

        logger.info(
            f"Settled printing request {printing_request.id} for student {command.student_id}: "
            f"cost={total_cost}, balance {balance_before} -> {balance_after}, "
            f"ref={payment.reference_no if payment else None}"
        )

        return Return.ok(
            PrintSettlementResponseDTO(
                request=PrintingRequestDTO.from_entity(printing_request),
                transaction_id=payment.id if payment else None,
                reference_no=payment.reference_no if payment else None,
                balance_before=balance_before,
                balance_after=balance_after,
            )
        )
