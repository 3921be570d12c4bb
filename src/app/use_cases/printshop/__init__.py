"""Print-shop wallet use cases"""
from .create_account import CreateAccount
from .submit_print_request import SubmitPrintRequest
from .top_up_wallet import TopUpWallet
from .refund_wallet import RefundWallet
from .get_balance import GetBalance
from .list_printing_history import ListPrintingHistory
from .list_transactions import ListTransactionHistory
from .estimate_print_cost import EstimatePrintCost
from .reconcile_ledger import ReconcileLedger
from .error_codes import ErrorCode
from .dtos import (
    CreateAccountCommandDTO,
    StudentAccountResponseDTO,
    SubmitPrintRequestCommandDTO,
    PrintingRequestDTO,
    PrintSettlementResponseDTO,
    TopUpCommandDTO,
    RefundCommandDTO,
    WalletTransactionResponseDTO,
    BalanceResponseDTO,
    TransactionDTO,
    ListTransactionsResponseDTO,
    ListPrintingHistoryResponseDTO,
    EstimateCommandDTO,
    EstimateResponseDTO,
    LedgerDiscrepancyDTO,
    ReconciliationResultDTO,
)

__all__ = [
    "CreateAccount",
    "SubmitPrintRequest",
    "TopUpWallet",
    "RefundWallet",
    "GetBalance",
    "ListPrintingHistory",
    "ListTransactionHistory",
    "EstimatePrintCost",
    "ReconcileLedger",
    "ErrorCode",
    "CreateAccountCommandDTO",
    "StudentAccountResponseDTO",
    "SubmitPrintRequestCommandDTO",
    "PrintingRequestDTO",
    "PrintSettlementResponseDTO",
    "TopUpCommandDTO",
    "RefundCommandDTO",
    "WalletTransactionResponseDTO",
    "BalanceResponseDTO",
    "TransactionDTO",
    "ListTransactionsResponseDTO",
    "ListPrintingHistoryResponseDTO",
    "EstimateCommandDTO",
    "EstimateResponseDTO",
    "LedgerDiscrepancyDTO",
    "ReconciliationResultDTO",
]
