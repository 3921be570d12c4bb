"""Student API Routes

Account creation and per-student read projections.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.schemas.printshop_request import CreateStudentRequestSchema
from src.app.use_cases.printshop import (
    CreateAccount,
    GetBalance,
    ListPrintingHistory,
    ListTransactionHistory,
    CreateAccountCommandDTO,
    StudentAccountResponseDTO,
    BalanceResponseDTO,
    ListPrintingHistoryResponseDTO,
    ListTransactionsResponseDTO,
)
from src.adapter.repositories import (
    SqlAlchemyStudentRepository,
    SqlAlchemyWalletRepository,
    SqlAlchemyPrintingRequestRepository,
    SqlAlchemyWalletTransactionRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/students", tags=["Students"])


def _page(limit: int) -> int:
    return min(limit, ApplicationConfig.PAGINATION_MAX_LIMIT)


@router.post(
    "",
    response_model=StudentAccountResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "Student ID or email already registered",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "DUPLICATE_STUDENT",
                            "message": "A student with this ID or email already exists"
                        }
                    }
                }
            }
        }
    }
)
async def create_student(
    request: CreateStudentRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Register a student and open an empty wallet.

    **Returns:**
    - 201: Account created, wallet balance 0.00
    - 409: Student ID or email already registered
    """
    use_case = CreateAccount(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyStudentRepository(session),
        SqlAlchemyWalletRepository(session),
    )
    result = await use_case.execute(CreateAccountCommandDTO(**request.model_dump()))

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get(
    "/{student_id}/wallet",
    response_model=BalanceResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_wallet(
    student_id: str,
    session: AsyncSession = Depends(get_session)
):
    """
    Current wallet balance with student name, department and last top-up.

    **Returns:**
    - 200: Balance retrieved
    - 404: No wallet for this student
    """
    use_case = GetBalance(SqlAlchemyWalletRepository(session), SqlAlchemyStudentRepository(session))
    result = await use_case.execute(student_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get(
    "/{student_id}/printing-history",
    response_model=ListPrintingHistoryResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_printing_history(
    student_id: str,
    limit: int = Query(default=20, ge=1),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session)
):
    """Printing requests, newest first"""
    use_case = ListPrintingHistory(
        SqlAlchemyPrintingRequestRepository(session), SqlAlchemyStudentRepository(session)
    )
    result = await use_case.execute(student_id, limit=_page(limit), offset=offset)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get(
    "/{student_id}/transactions",
    response_model=ListTransactionsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_transactions(
    student_id: str,
    limit: int = Query(default=20, ge=1),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session)
):
    """Wallet transactions with balance snapshots, newest first"""
    use_case = ListTransactionHistory(
        SqlAlchemyWalletTransactionRepository(session), SqlAlchemyStudentRepository(session)
    )
    result = await use_case.execute(student_id, limit=_page(limit), offset=offset)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value
