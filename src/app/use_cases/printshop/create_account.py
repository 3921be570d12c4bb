"""CreateAccount Use Case

Opens a student account together with its wallet, as one unit of work.
"""

import logging
from decimal import Decimal
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.student_repository import StudentRepository
from src.app.repositories.wallet_repository import WalletRepository
from src.domain.student import Student
from src.domain.wallet import Wallet
from .dtos import CreateAccountCommandDTO, StudentAccountResponseDTO
from .error_codes import ErrorCode

logger = logging.getLogger(__name__)


class CreateAccount:
    """
    Use Case: Create student account with an empty wallet

    Business Rules:
    1. student_id and email are unique
    2. Every student gets exactly one wallet, starting at 0.00
    3. Student and wallet are committed together or not at all

    Flow:
    1. Reject duplicate student_id / email
    2. Insert student
    3. Insert wallet (balance 0)
    4. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        student_repo: StudentRepository,
        wallet_repo: WalletRepository,
    ):
        self.uow = uow
        self.student_repo = student_repo
        self.wallet_repo = wallet_repo

    async def execute(self, command: CreateAccountCommandDTO) -> Result[StudentAccountResponseDTO]:
        try:
            # Step 1: Reject duplicates before writing anything
            if await self.student_repo.get_by_id(command.student_id):
                return self._duplicate(f"student_id={command.student_id}")
            if await self.student_repo.get_by_email(command.email):
                return self._duplicate(f"email={command.email}")

            # Step 2: Insert student
            student = await self.student_repo.create(
                Student(
                    student_id=command.student_id,
                    full_name=command.full_name,
                    email=command.email,
                    password_hash=command.password_hash,
                    department=command.department,
                )
            )

            # Step 3: Insert wallet
            wallet = await self.wallet_repo.create(
                Wallet(student_id=student.student_id, balance=Decimal("0.00"))
            )

            # Step 4: Commit both rows
            await self.uow.commit()

            logger.info(f"Created account for student {student.student_id} (wallet_id={wallet.id})")

            return Return.ok(
                StudentAccountResponseDTO(
                    student_id=student.student_id,
                    full_name=student.full_name,
                    email=student.email,
                    department=student.department,
                    wallet_id=wallet.id,
                    balance=wallet.balance,
                    created_at=student.created_at,
                )
            )

        except IntegrityError as e:
            # A concurrent insert won the race for the same student_id or email
            await self.uow.rollback()
            return self._duplicate(str(e.orig))

        except Exception as e:
            await self.uow.rollback()
            logger.exception(f"Failed to create account for student {command.student_id}")
            return Return.err(
                Error(
                    code=ErrorCode.CREATE_ACCOUNT_FAILED,
                    message="Failed to create student account",
                    reason=str(e),
                )
            )

    @staticmethod
    def _duplicate(reason: str) -> Result[StudentAccountResponseDTO]:
        return Return.err(
            Error(
                code=ErrorCode.DUPLICATE_STUDENT,
                message="A student with this ID or email already exists",
                reason=reason,
            )
        )
