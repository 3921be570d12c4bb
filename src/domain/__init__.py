from .base import BaseModel, MAX_MONEY, to_money, utc_now
from .student import Student
from .wallet import Wallet
from .printing_request import PrintingRequest, PaperSize, PrintType, PrintStatus
from .wallet_transaction import WalletTransaction, TransactionType, TransactionStatus
from .pricing_rule import PricingRule, default_pricing_rules
from .exceptions import (
    WalletNotFound,
    InsufficientFunds,
    WalletVersionConflict,
    BalanceLimitExceeded,
    RuleNotFound,
)

__all__ = [
    "BaseModel",
    "MAX_MONEY",
    "to_money",
    "utc_now",
    "Student",
    "Wallet",
    "PrintingRequest",
    "PaperSize",
    "PrintType",
    "PrintStatus",
    "WalletTransaction",
    "TransactionType",
    "TransactionStatus",
    "PricingRule",
    "default_pricing_rules",
    "WalletNotFound",
    "InsufficientFunds",
    "WalletVersionConflict",
    "BalanceLimitExceeded",
    "RuleNotFound",
]
