"""
Ledger primitives: balance changes paired with immutable ledger entries.
"""

from .primitives import (
    LedgerMovement,
    apply_deposit,
    apply_disbursement_credit,
    apply_withdraw,
    credit_entry,
)

__all__ = [
    "LedgerMovement",
    "apply_deposit",
    "apply_disbursement_credit",
    "apply_withdraw",
    "credit_entry",
]
