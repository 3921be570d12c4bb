from .student_repository import SqlAlchemyStudentRepository
from .wallet_repository import SqlAlchemyWalletRepository
from .printing_request_repository import SqlAlchemyPrintingRequestRepository
from .wallet_transaction_repository import SqlAlchemyWalletTransactionRepository
from .pricing_rule_repository import SqlAlchemyPricingRuleRepository

__all__ = [
    "SqlAlchemyStudentRepository",
    "SqlAlchemyWalletRepository",
    "SqlAlchemyPrintingRequestRepository",
    "SqlAlchemyWalletTransactionRepository",
    "SqlAlchemyPricingRuleRepository",
]
