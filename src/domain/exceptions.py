"""Domain exceptions raised below the use-case layer

Repositories and the pricing table raise these; use cases translate them
into Result errors (see src/app/use_cases/printshop/error_codes.py).
"""

from decimal import Decimal
from typing import Optional


class WalletError(Exception):
    """Base class for wallet domain errors"""

    is_retryable: bool = False


class WalletNotFound(WalletError, LookupError):
    """No wallet row exists for the given identifier"""

    def __init__(self, wallet_id: int):
        super().__init__(f"Wallet {wallet_id} not found")
        self.wallet_id = wallet_id


class InsufficientFunds(WalletError):
    """A debit would leave the wallet balance negative"""

    def __init__(self, wallet_id: int, balance: Decimal, required: Decimal):
        super().__init__(
            f"Insufficient wallet balance. Required: {required}, Available: {balance}"
        )
        self.wallet_id = wallet_id
        self.balance = balance
        self.required = required


class WalletVersionConflict(WalletError):
    """
    The wallet row changed between read and write.

    The whole unit of work must be rolled back and retried with fresh data.
    """

    is_retryable = True

    def __init__(self, wallet_id: int, expected_version: int, current_version: Optional[int] = None):
        super().__init__(
            f"Wallet {wallet_id} has been modified "
            f"(expected_version={expected_version}, current_version={current_version})"
        )
        self.wallet_id = wallet_id
        self.expected_version = expected_version
        self.current_version = current_version


class RuleNotFound(LookupError):
    """No pricing rule exists for the (paper size, print type) pair"""

    def __init__(self, paper_size: str, print_type: str):
        super().__init__(f"No printing cost configured for {paper_size} / {print_type}")
        self.paper_size = paper_size
        self.print_type = print_type


class BalanceLimitExceeded(WalletError):
    """A credit would push the wallet balance past what the money columns hold"""

    def __init__(self, wallet_id: int, balance: Decimal, amount: Decimal, limit: Decimal):
        super().__init__(
            f"Wallet balance cannot exceed {limit}. Current: {balance}, Credit: {amount}"
        )
        self.wallet_id = wallet_id
        self.balance = balance
        self.amount = amount
        self.limit = limit
