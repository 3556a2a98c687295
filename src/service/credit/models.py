"""
Data models for credit pricing and schedule projection.

These are plain value objects produced by the pure functions in this package
and consumed by the credit service and the HTTP layer.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class CreditTerms:
    """
    The priced terms of a credit request.

    Attributes:
        principal: Requested amount
        interest_rate: Annual interest rate in percent (e.g. 12.0)
        tenure: Duration in months
        monthly_payment: Fixed installment, rounded to cents
        total_repayable: monthly_payment * tenure
    """
    principal: Decimal
    interest_rate: Decimal
    tenure: int
    monthly_payment: Decimal
    total_repayable: Decimal

    def to_dict(self) -> dict:
        return {
            "principal": str(self.principal),
            "interest_rate": str(self.interest_rate),
            "tenure": self.tenure,
            "monthly_payment": str(self.monthly_payment),
            "total_repayable": str(self.total_repayable),
        }


@dataclass(frozen=True)
class ScheduledInstallment:
    """
    One projected installment.

    Projection only: status is always "PENDING" because per-installment
    payment state is not stored.
    """
    installment_number: int
    due_date: datetime
    amount: Decimal
    status: str = "PENDING"

    def to_dict(self) -> dict:
        return {
            "installment_number": self.installment_number,
            "due_date": self.due_date.isoformat() + "Z",
            "amount": str(self.amount),
            "status": self.status,
        }
