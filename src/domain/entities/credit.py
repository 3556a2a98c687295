"""Credit entity and its lifecycle state machine."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4

from src.domain.exceptions import (
    CreditNotActiveException,
    InvalidStateTransitionException,
    RepaymentExceedsBalanceException,
)
from src.domain.money import ZERO


class CreditStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    DISBURSED = "DISBURSED"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    DEFAULTED = "DEFAULTED"


# Legal lifecycle moves. Auto-approval creates a credit directly in APPROVED.
TRANSITIONS = {
    CreditStatus.PENDING: {CreditStatus.APPROVED, CreditStatus.REJECTED},
    CreditStatus.APPROVED: {CreditStatus.DISBURSED},
    CreditStatus.DISBURSED: {CreditStatus.ACTIVE, CreditStatus.COMPLETED, CreditStatus.DEFAULTED},
    CreditStatus.ACTIVE: {CreditStatus.COMPLETED, CreditStatus.DEFAULTED},
    CreditStatus.REJECTED: set(),
    CreditStatus.COMPLETED: set(),
    CreditStatus.DEFAULTED: set(),
}

REPAYABLE_STATUSES = {CreditStatus.ACTIVE, CreditStatus.DISBURSED}


@dataclass
class Repayment:
    """A repayment made against a credit, funded by exactly one ledger entry."""

    credit_id: UUID
    ledger_entry_id: UUID
    amount: Decimal
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "repayment_id": str(self.id),
            "credit_id": str(self.credit_id),
            "transaction_id": str(self.ledger_entry_id),
            "amount": str(self.amount),
            "created_at": self.created_at.isoformat() + "Z",
        }


@dataclass
class Credit:
    """
    A single credit line (loan) and its repayment state.

    Invariants kept by the transition methods below:
    - amount_paid + outstanding_balance == total_repayable
    - outstanding_balance never goes below zero
    - amount_paid only grows, outstanding_balance only shrinks
    """

    user_id: str
    principal: Decimal
    interest_rate: Decimal
    tenure: int
    monthly_payment: Decimal
    total_repayable: Decimal
    credit_score: int
    status: CreditStatus = CreditStatus.PENDING
    amount_paid: Decimal = ZERO
    outstanding_balance: Optional[Decimal] = None
    purpose: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    disbursed_at: Optional[datetime] = None
    next_payment_date: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    repayments: List[Repayment] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    version: int = 1
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        if self.outstanding_balance is None:
            self.outstanding_balance = self.total_repayable - self.amount_paid

    @property
    def is_repayable(self) -> bool:
        return self.status in REPAYABLE_STATUSES

    def _move_to(self, target: CreditStatus) -> None:
        if target not in TRANSITIONS[self.status]:
            raise InvalidStateTransitionException(
                str(self.id), self.status.value, target.value
            )
        self.status = target

    def auto_approve(self, now: datetime, payment_interval: timedelta) -> None:
        """Approve at request time; the credit never passes through PENDING."""
        self.status = CreditStatus.APPROVED
        self.approved_at = now
        self.next_payment_date = now + payment_interval

    def approve(self, admin_id: str, now: datetime, payment_interval: timedelta) -> None:
        self._move_to(CreditStatus.APPROVED)
        self.approved_by = admin_id
        self.approved_at = now
        self.next_payment_date = now + payment_interval

    def reject(self, reason: str) -> None:
        self._move_to(CreditStatus.REJECTED)
        self.rejection_reason = reason

    def disburse(self, now: datetime, payment_interval: timedelta) -> None:
        self._move_to(CreditStatus.DISBURSED)
        self.disbursed_at = now
        self.next_payment_date = now + payment_interval

    def activate(self) -> None:
        self._move_to(CreditStatus.ACTIVE)

    def mark_defaulted(self) -> None:
        self._move_to(CreditStatus.DEFAULTED)

    def check_repayment(self, amount: Decimal) -> None:
        """Raise if `amount` cannot be repaid right now. Does not mutate."""
        if not self.is_repayable:
            raise CreditNotActiveException(str(self.id), self.status.value)
        if amount <= ZERO or amount > self.outstanding_balance:
            raise RepaymentExceedsBalanceException(self.outstanding_balance, amount)

    def apply_repayment(
        self,
        amount: Decimal,
        now: datetime,
        payment_interval: timedelta,
    ) -> None:
        self.check_repayment(amount)

        self.amount_paid += amount
        self.outstanding_balance -= amount

        if self.outstanding_balance == ZERO:
            self._move_to(CreditStatus.COMPLETED)
            self.next_payment_date = None
        else:
            self.next_payment_date = now + payment_interval

    def to_dict(self) -> dict:
        return {
            "credit_id": str(self.id),
            "user_id": self.user_id,
            "principal": str(self.principal),
            "interest_rate": str(self.interest_rate),
            "tenure": self.tenure,
            "monthly_payment": str(self.monthly_payment),
            "total_repayable": str(self.total_repayable),
            "amount_paid": str(self.amount_paid),
            "outstanding_balance": str(self.outstanding_balance),
            "credit_score": self.credit_score,
            "status": self.status.value,
        }
