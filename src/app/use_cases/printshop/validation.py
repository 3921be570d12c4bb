"""Input checks shared by print-shop use cases

Each check returns None when the input is acceptable, or the Error to
return to the caller. Nothing here touches storage.
"""

from decimal import Decimal
from typing import Optional
from libs.result import Error
from src.domain.base import MAX_MONEY, has_money_precision
from src.domain.exceptions import BalanceLimitExceeded
from src.domain.printing_request import PaperSize, PrintType
from .error_codes import ErrorCode

MAX_FILE_TYPE_LENGTH = 10
MAX_FILE_NAME_LENGTH = 255


def validate_print_job(
    paper_size: str, print_type: str, num_pages: int, num_copies: int
) -> Optional[Error]:
    problems = []

    if num_copies is None or num_copies < 1:
        problems.append(f"num_copies must be >= 1 (got {num_copies})")
    if num_pages is None or num_pages < 1:
        problems.append(f"num_pages must be >= 1 (got {num_pages})")
    if paper_size not in PaperSize._value2member_map_:
        allowed = ", ".join(size.value for size in PaperSize)
        problems.append(f"paper_size must be one of {allowed} (got {paper_size!r})")
    if print_type not in PrintType._value2member_map_:
        allowed = ", ".join(kind.value for kind in PrintType)
        problems.append(f"print_type must be one of {allowed} (got {print_type!r})")

    if problems:
        return Error(
            code=ErrorCode.INVALID_REQUEST,
            message="Invalid printing request",
            reason="; ".join(problems),
        )
    return None


def validate_file(file_name: str, file_type: str) -> Optional[Error]:
    if not file_name or not file_name.strip() or len(file_name) > MAX_FILE_NAME_LENGTH:
        return Error(
            code=ErrorCode.INVALID_REQUEST,
            message="Invalid printing request",
            reason=f"file_name must be 1-{MAX_FILE_NAME_LENGTH} characters",
        )
    if not file_type or len(file_type) > MAX_FILE_TYPE_LENGTH:
        return Error(
            code=ErrorCode.INVALID_REQUEST,
            message="Invalid printing request",
            reason=f"file_type must be 1-{MAX_FILE_TYPE_LENGTH} characters",
        )
    return None


def validate_amount(amount: Decimal) -> Optional[Error]:
    """Credit amounts must be positive, at most MAX_MONEY, with at most two fractional digits"""
    if amount is None or not amount.is_finite() or amount <= 0:
        return Error(
            code=ErrorCode.INVALID_AMOUNT,
            message="Amount must be greater than 0",
            reason=f"amount={amount}",
        )
    if amount > MAX_MONEY:
        return Error(
            code=ErrorCode.INVALID_AMOUNT,
            message=f"Amount must not exceed {MAX_MONEY}",
            reason=f"amount={amount}",
        )
    if not has_money_precision(amount):
        return Error(
            code=ErrorCode.INVALID_AMOUNT,
            message="Amount must have at most two decimal places",
            reason=f"amount={amount}",
        )
    return None


def balance_limit_error(exc: BalanceLimitExceeded) -> Error:
    return Error(
        code=ErrorCode.INVALID_AMOUNT,
        message=f"Resulting balance would exceed {exc.limit}",
        reason=f"balance={exc.balance}, amount={exc.amount}",
    )
