"""Data transfer objects for credit lifecycle operations."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Credit, LedgerEntry
from src.domain.money import has_cent_precision, to_decimal
from src.service.credit import CreditSettings, ScheduledInstallment, credit_settings

from .savings import validate_amount


@dataclass(frozen=True)
class CreditRequest:
    """Input data for requesting a credit line."""
    user_id: str
    amount: Decimal
    tenure: int
    purpose: Optional[str] = None

    def validate(self, settings: CreditSettings = credit_settings) -> List[str]:
        errors = []

        if not self.user_id or not self.user_id.strip():
            errors.append("user_id is required")

        try:
            amount = to_decimal(self.amount)
        except (ValueError, InvalidOperation):
            amount = None
        if amount is None or not amount.is_finite():
            errors.append("amount must be a decimal number")
        else:
            if not (settings.min_amount <= amount <= settings.max_amount):
                errors.append(
                    f"amount must be between {settings.min_amount} and {settings.max_amount}"
                )
            if not has_cent_precision(amount):
                errors.append("amount must have at most 2 decimal places")

        if isinstance(self.tenure, bool) or not isinstance(self.tenure, int):
            errors.append("tenure must be a whole number of months")
        elif not (settings.min_tenure_months <= self.tenure <= settings.max_tenure_months):
            errors.append(
                f"tenure must be between {settings.min_tenure_months} "
                f"and {settings.max_tenure_months} months"
            )

        if self.purpose is not None and len(self.purpose) > 500:
            errors.append("purpose must be at most 500 characters")

        return errors


@dataclass(frozen=True)
class RepaymentRequest:
    """Input data for repaying part or all of a credit."""
    user_id: str
    credit_id: UUID
    amount: Decimal

    def validate(self) -> List[str]:
        errors = []

        if not self.user_id or not self.user_id.strip():
            errors.append("user_id is required")

        errors.extend(validate_amount(self.amount))

        return errors


@dataclass(frozen=True)
class ApproveRequest:
    admin_id: str

    def validate(self) -> List[str]:
        if not self.admin_id or not self.admin_id.strip():
            return ["admin_id is required"]
        return []


@dataclass(frozen=True)
class RejectRequest:
    """Input data for rejecting a pending credit."""
    admin_id: str
    reason: str

    def validate(self) -> List[str]:
        errors = []

        if not self.admin_id or not self.admin_id.strip():
            errors.append("admin_id is required")

        if not self.reason or not self.reason.strip():
            errors.append("reason is required")
        elif len(self.reason) > 500:
            errors.append("reason must be at most 500 characters")

        return errors


@dataclass(frozen=True)
class RepaymentResult:
    """A completed repayment: the ledger entry and the credit after it."""

    entry: LedgerEntry
    credit: Credit


@dataclass(frozen=True)
class CreditSchedule:
    """A credit together with its projected installments."""

    credit: Credit
    installments: List[ScheduledInstallment] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((i.amount for i in self.installments), Decimal("0.00"))


@dataclass(frozen=True)
class CreditPage:
    """One page of an admin credit listing."""

    credits: List[Credit]
    total: int
    skip: int
    take: int


@dataclass(frozen=True)
class CreditStats:
    """Credit counts per lifecycle status."""

    total: int
    pending: int
    approved: int
    rejected: int
    disbursed: int
    active: int
    completed: int
    defaulted: int
