"""Ledger reference numbers

References keep the readable ``<PREFIX><UTC timestamp>`` shape and append
a random token, so two entries written in the same second never collide.
"""

import uuid
from datetime import datetime
from typing import Optional
from src.domain.base import utc_now
from src.domain.wallet_transaction import TransactionType

REFERENCE_PREFIXES = {
    TransactionType.TOPUP: "TOP",
    TransactionType.PRINT_PAYMENT: "PRN",
    TransactionType.REFUND: "REF",
}


def generate_reference(kind: TransactionType, now: Optional[datetime] = None) -> str:
    """
    Build a unique reference number for a ledger entry

    Example: PRN20240101120000A1B2C3D4E5F6 (29 chars, column holds 50)
    """
    now = now or utc_now()
    token = uuid.uuid4().hex[:12].upper()
    return f"{REFERENCE_PREFIXES[kind]}{now:%Y%m%d%H%M%S}{token}"
