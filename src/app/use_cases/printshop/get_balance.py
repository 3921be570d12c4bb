"""Get Balance Use Case

Retrieves a student's wallet balance joined with the student's identity.
"""

from libs.result import Result, Return, Error
from src.app.repositories.student_repository import StudentRepository
from src.app.repositories.wallet_repository import WalletRepository
from .dtos import BalanceResponseDTO
from .error_codes import ErrorCode


class GetBalance:
    """
    Get Balance Use Case

    Read-only operation that returns the current balance, wallet id and
    last top-up time for a student.
    """

    def __init__(self, wallet_repo: WalletRepository, student_repo: StudentRepository):
        """
        Initialize GetBalance use case

        Args:
            wallet_repo: Repository for accessing wallets
            student_repo: Repository for accessing student identity
        """
        self.wallet_repo = wallet_repo
        self.student_repo = student_repo

    async def execute(self, student_id: str) -> Result[BalanceResponseDTO]:
        """
        Execute get balance operation

        Args:
            student_id: The student identifier

        Returns:
            Result[BalanceResponseDTO]: Success with balance data or error

        Errors:
            WALLET_NOT_FOUND: Student has no wallet
        """
        wallet = await self.wallet_repo.get_by_student_id(student_id)
        student = await self.student_repo.get_by_id(student_id) if wallet else None

        if not wallet or not student:
            return Return.err(
                Error(
                    code=ErrorCode.WALLET_NOT_FOUND,
                    message=f"No wallet found for student {student_id}",
                )
            )

        return Return.ok(
            BalanceResponseDTO(
                student_id=student.student_id,
                full_name=student.full_name,
                department=student.department,
                wallet_id=wallet.id,
                balance=wallet.balance,
                last_topup_at=wallet.last_topup_at,
                last_updated=wallet.updated_at,
            )
        )
