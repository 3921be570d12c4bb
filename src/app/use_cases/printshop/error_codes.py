"""Error codes returned by print-shop use cases"""


class ErrorCode:
    # Rejected before any mutation
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_AMOUNT = "INVALID_AMOUNT"

    # Lookup failures
    DUPLICATE_STUDENT = "DUPLICATE_STUDENT"
    DUPLICATE_REFERENCE = "DUPLICATE_REFERENCE"
    STUDENT_NOT_FOUND = "STUDENT_NOT_FOUND"
    RULE_NOT_FOUND = "RULE_NOT_FOUND"
    WALLET_NOT_FOUND = "WALLET_NOT_FOUND"

    # Business rule rejection
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"

    # Transient contention, safe to retry
    CONFLICT_RETRYABLE = "CONFLICT_RETRYABLE"

    # Unexpected failures (unit of work rolled back)
    CREATE_ACCOUNT_FAILED = "CREATE_ACCOUNT_FAILED"
    SETTLEMENT_FAILED = "SETTLEMENT_FAILED"
    TOP_UP_FAILED = "TOP_UP_FAILED"
    REFUND_FAILED = "REFUND_FAILED"
    RECONCILIATION_FAILED = "RECONCILIATION_FAILED"
