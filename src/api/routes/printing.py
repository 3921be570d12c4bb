"""Printing API Routes

Print job settlement and cost estimates.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.printshop_request import EstimateRequestSchema, PrintRequestSchema
from src.app.services.ledger import Ledger
from src.app.services.pricing_table import PricingTable
from src.app.services.retry_policy import RetryPolicy
from src.app.use_cases.printshop import (
    EstimatePrintCost,
    SubmitPrintRequest,
    EstimateCommandDTO,
    EstimateResponseDTO,
    PrintSettlementResponseDTO,
    SubmitPrintRequestCommandDTO,
)
from src.adapter.repositories import (
    SqlAlchemyWalletRepository,
    SqlAlchemyPrintingRequestRepository,
    SqlAlchemyWalletTransactionRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_pricing_table, get_retry_policy, get_session
from src.api.error import ClientError

router = APIRouter(prefix="/printing", tags=["Printing"])


@router.post(
    "/requests",
    response_model=PrintSettlementResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        402: {
            "description": "Insufficient wallet balance",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INSUFFICIENT_FUNDS",
                            "message": "Insufficient wallet balance. Required: 3.00, Available: 1.50"
                        }
                    }
                }
            }
        },
        400: {
            "description": "Invalid print request",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_REQUEST",
                            "message": "num_pages must be >= 1"
                        }
                    }
                }
            }
        }
    }
)
async def submit_print_request(
    request: PrintRequestSchema,
    session: AsyncSession = Depends(get_session),
    pricing_table: PricingTable = Depends(get_pricing_table),
    retry_policy: RetryPolicy = Depends(get_retry_policy),
):
    """
    Submit a print job and pay for it from the student's wallet.

    The wallet is debited, the request is recorded as Pending and a
    Print Payment entry is appended, all in one transaction.

    **Returns:**
    - 201: Request accepted and paid
    - 400: Invalid print request
    - 402: Insufficient wallet balance
    - 404: No wallet, or no price for the paper size / print type
    - 409: Wallet busy, retry
    """
    use_case = SubmitPrintRequest(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyWalletRepository(session),
        SqlAlchemyPrintingRequestRepository(session),
        Ledger(SqlAlchemyWalletTransactionRepository(session)),
        pricing_table,
        retry_policy,
    )
    result = await use_case.execute(SubmitPrintRequestCommandDTO(**request.model_dump()))

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.post(
    "/estimate",
    response_model=EstimateResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def estimate_print_cost(
    request: EstimateRequestSchema,
    pricing_table: PricingTable = Depends(get_pricing_table),
):
    """Price a print job without submitting it"""
    result = await EstimatePrintCost(pricing_table).execute(
        EstimateCommandDTO(**request.model_dump())
    )

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value
