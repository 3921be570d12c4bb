"""
List Transactions Use Case

Retrieves a student's wallet transaction history with pagination.
"""
from libs.result import Result, Return, Error
from src.app.repositories.student_repository import StudentRepository
from src.app.repositories.wallet_transaction_repository import WalletTransactionRepository
from .dtos import ListTransactionsResponseDTO, TransactionDTO, enum_value
from .error_codes import ErrorCode


class ListTransactionHistory:
    """
    Use case: View wallet transactions

    Retrieves paginated transaction history for a student, joined with the
    student's name. Transactions are ordered by id DESC (most recent first).
    """

    def __init__(self, transaction_repo: WalletTransactionRepository, student_repo: StudentRepository):
        self.transaction_repo = transaction_repo
        self.student_repo = student_repo

    async def execute(
        self, student_id: str, limit: int = 20, offset: int = 0
    ) -> Result[ListTransactionsResponseDTO]:
        """
        List transactions for a student with pagination.

        Args:
            student_id: Student identifier
            limit: Maximum number of transactions to return (default 20)
            offset: Number of transactions to skip (default 0)

        Returns:
            Result[ListTransactionsResponseDTO]: Paginated transaction list
        """
        student = await self.student_repo.get_by_id(student_id)
        if not student:
            return Return.err(
                Error(
                    code=ErrorCode.STUDENT_NOT_FOUND,
                    message=f"Student {student_id} not found",
                )
            )

        transactions, total = await self.transaction_repo.get_by_student_id(
            student_id=student_id,
            limit=limit,
            offset=offset,
        )

        transaction_dtos = [
            TransactionDTO(
                id=txn.id,
                student_id=txn.student_id,
                full_name=student.full_name,
                transaction_type=enum_value(txn.transaction_type),
                amount=txn.amount,
                signed_amount=txn.signed_amount,
                balance_before=txn.balance_before,
                balance_after=txn.balance_after,
                reference_no=txn.reference_no,
                status=enum_value(txn.status),
                printing_request_id=txn.printing_request_id,
                transaction_date=txn.transaction_date,
            )
            for txn in transactions
        ]

        return Return.ok(
            ListTransactionsResponseDTO(
                student_id=student_id,
                transactions=transaction_dtos,
                total=total,
                limit=limit,
                offset=offset,
            )
        )
