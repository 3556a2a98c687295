"""Ledger entry entity representing one money movement."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4


class LedgerEntryType(str, Enum):
    """Kind of money movement."""

    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    CREDIT_DISBURSEMENT = "CREDIT_DISBURSEMENT"
    CREDIT_REPAYMENT = "CREDIT_REPAYMENT"


class LedgerEntryStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


REFERENCE_PREFIXES = {
    LedgerEntryType.DEPOSIT: "DEP",
    LedgerEntryType.WITHDRAWAL: "WTH",
    LedgerEntryType.CREDIT_DISBURSEMENT: "DSB",
    LedgerEntryType.CREDIT_REPAYMENT: "REP",
}


def generate_reference(entry_type: LedgerEntryType) -> str:
    """Type-prefixed reference, unique across the whole ledger."""
    return f"{REFERENCE_PREFIXES[entry_type]}-{uuid4().hex.upper()}"


@dataclass(frozen=True)
class LedgerEntry:
    """
    Immutable record of a single money movement.

    Attributes:
        user_id: Owner of the movement
        type: Deposit, withdrawal, disbursement or repayment
        amount: Positive amount moved
        status: Completed entries are never modified again
        reference: Unique, type-prefixed lookup key
        balance_before: Account balance before the movement (account-linked only)
        balance_after: Account balance after the movement (account-linked only)
        account_id: Savings account touched, if any
        credit_id: Credit the movement belongs to, if any
    """

    user_id: str
    type: LedgerEntryType
    amount: Decimal
    description: str = ""
    status: LedgerEntryStatus = LedgerEntryStatus.COMPLETED
    reference: str = ""
    balance_before: Optional[Decimal] = None
    balance_after: Optional[Decimal] = None
    account_id: Optional[UUID] = None
    credit_id: Optional[UUID] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        if not self.reference:
            object.__setattr__(self, "reference", generate_reference(self.type))

    @property
    def is_completed(self) -> bool:
        return self.status == LedgerEntryStatus.COMPLETED

    def to_dict(self) -> dict:
        return {
            "transaction_id": str(self.id),
            "user_id": self.user_id,
            "type": self.type.value,
            "amount": str(self.amount),
            "status": self.status.value,
            "reference": self.reference,
            "description": self.description,
            "balance_before": str(self.balance_before) if self.balance_before is not None else None,
            "balance_after": str(self.balance_after) if self.balance_after is not None else None,
            "account_id": str(self.account_id) if self.account_id else None,
            "credit_id": str(self.credit_id) if self.credit_id else None,
            "created_at": self.created_at.isoformat() + "Z",
        }
