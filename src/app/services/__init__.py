from .unit_of_work import UnitOfWork
from .pricing_table import PricingTable
from .ledger import Ledger
from .retry_policy import RetryPolicy

__all__ = [
    "UnitOfWork",
    "PricingTable",
    "Ledger",
    "RetryPolicy",
]
