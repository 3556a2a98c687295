"""User entity and the credit-history snapshot used for scoring."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from src.domain.money import ZERO


class UserRole(str, Enum):
    CUSTOMER = "CUSTOMER"
    ADMIN = "ADMIN"


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    PENDING_VERIFICATION = "PENDING_VERIFICATION"


@dataclass
class User:
    """A registered customer or administrator."""

    email: str
    first_name: str
    last_name: str
    role: UserRole = UserRole.CUSTOMER
    status: UserStatus = UserStatus.ACTIVE
    kyc_verified: bool = False
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> dict:
        return {
            "user_id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "role": self.role.value,
            "status": self.status.value,
            "kyc_verified": self.kyc_verified,
        }


@dataclass(frozen=True)
class CreditHistory:
    """
    Aggregate history of a user, as seen by the credit scorer.

    Attributes:
        savings_total: Sum of balances across the user's savings accounts
        completed_credit_count: Number of credits fully repaid
        transaction_count: Number of ledger entries owned by the user
        kyc_verified: Whether identity verification passed
    """

    savings_total: Decimal = ZERO
    completed_credit_count: int = 0
    transaction_count: int = 0
    kyc_verified: bool = False
