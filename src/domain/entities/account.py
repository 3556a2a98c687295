"""Savings account entity."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from src.domain.money import ZERO


def generate_account_number() -> str:
    """Unique human-facing account number, e.g. SAV-3F2A9C01D4E7."""
    return f"SAV-{uuid4().hex[:12].upper()}"


@dataclass
class Account:
    """
    A customer's savings account.

    The balance is only ever changed by the ledger primitives; accounts are
    never deleted, only deactivated.
    """

    user_id: str
    account_number: str = field(default_factory=generate_account_number)
    balance: Decimal = ZERO
    currency: str = "USD"
    interest_rate: Decimal = Decimal("2.50")
    is_active: bool = True
    id: UUID = field(default_factory=uuid4)
    version: int = 1
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "account_id": str(self.id),
            "user_id": self.user_id,
            "account_number": self.account_number,
            "balance": str(self.balance),
            "currency": self.currency,
            "interest_rate": str(self.interest_rate),
            "is_active": self.is_active,
        }
