from .student_repository import StudentRepository
from .wallet_repository import WalletRepository
from .printing_request_repository import PrintingRequestRepository
from .wallet_transaction_repository import WalletTransactionRepository
from .pricing_rule_repository import PricingRuleRepository

__all__ = [
    "StudentRepository",
    "WalletRepository",
    "PrintingRequestRepository",
    "WalletTransactionRepository",
    "PricingRuleRepository",
]
