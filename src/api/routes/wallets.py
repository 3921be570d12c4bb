"""Wallet API Routes

Cash top-ups and refunds.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.printshop_request import RefundRequestSchema, TopUpRequestSchema
from src.app.services.ledger import Ledger
from src.app.services.retry_policy import RetryPolicy
from src.app.use_cases.printshop import (
    RefundWallet,
    TopUpWallet,
    RefundCommandDTO,
    TopUpCommandDTO,
    WalletTransactionResponseDTO,
)
from src.adapter.repositories import SqlAlchemyWalletRepository, SqlAlchemyWalletTransactionRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_retry_policy, get_session
from src.api.error import ClientError

router = APIRouter(prefix="/wallets", tags=["Wallets"])


@router.post(
    "/top-up",
    response_model=WalletTransactionResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {
            "description": "Invalid amount",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_AMOUNT",
                            "message": "Amount must be greater than 0"
                        }
                    }
                }
            }
        }
    }
)
async def top_up(
    request: TopUpRequestSchema,
    session: AsyncSession = Depends(get_session),
    retry_policy: RetryPolicy = Depends(get_retry_policy),
):
    """
    Add cash to a student's wallet.

    **Returns:**
    - 200: Topup entry with balance before and after
    - 400: Invalid amount
    - 404: No wallet for this student
    - 409: Wallet busy, retry
    """
    transaction_repo = SqlAlchemyWalletTransactionRepository(session)
    use_case = TopUpWallet(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyWalletRepository(session),
        Ledger(transaction_repo),
        retry_policy,
    )
    result = await use_case.execute(
        TopUpCommandDTO(student_id=request.student_id, amount=request.amount)
    )

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.post(
    "/{wallet_id}/refund",
    response_model=WalletTransactionResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def refund(
    wallet_id: int,
    request: RefundRequestSchema,
    session: AsyncSession = Depends(get_session),
    retry_policy: RetryPolicy = Depends(get_retry_policy),
):
    """
    Credit a wallet and record a Refund entry.

    **Returns:**
    - 200: Refund entry with balance before and after
    - 400: Invalid amount
    - 404: Wallet not found
    - 409: Reference already used, or wallet busy
    """
    transaction_repo = SqlAlchemyWalletTransactionRepository(session)
    use_case = RefundWallet(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyWalletRepository(session),
        transaction_repo,
        Ledger(transaction_repo),
        retry_policy,
    )
    result = await use_case.execute(
        RefundCommandDTO(wallet_id=wallet_id, amount=request.amount, reference=request.reference)
    )

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value
