"""Credit lifecycle domain exceptions."""

from decimal import Decimal

from .base import DomainException
from .common import NotFoundException


class CreditNotFoundException(NotFoundException):
    def __init__(self, credit_id: str):
        super().__init__("Credit", credit_id)
        self.credit_id = credit_id


class DuplicatePendingCreditException(DomainException):
    """Raised when a user already has a credit request awaiting review."""

    def __init__(self, user_id: str):
        super().__init__(
            message="You already have a pending credit request. Please wait for approval.",
            code="DUPLICATE_PENDING_CREDIT",
        )
        self.user_id = user_id


class InvalidStateTransitionException(DomainException):
    """Raised when a lifecycle transition is not legal from the current state."""

    def __init__(self, credit_id: str, current: str, target: str):
        super().__init__(
            message=f"Credit {credit_id} cannot move from {current} to {target}",
            code="INVALID_STATE_TRANSITION",
        )
        self.credit_id = credit_id
        self.current = current
        self.target = target


class CreditNotActiveException(DomainException):
    """Raised when repaying a credit that is not disbursed or active."""

    def __init__(self, credit_id: str, status: str):
        super().__init__(
            message=f"Credit is not active for repayment (status {status})",
            code="CREDIT_NOT_ACTIVE",
        )
        self.credit_id = credit_id
        self.status = status


class RepaymentExceedsBalanceException(DomainException):
    """Raised when a repayment is larger than what is still owed."""

    def __init__(self, outstanding_balance: Decimal, amount: Decimal):
        super().__init__(
            message=f"Repayment amount {amount} exceeds outstanding balance of {outstanding_balance}",
            code="REPAYMENT_EXCEEDS_BALANCE",
        )
        self.outstanding_balance = outstanding_balance
        self.amount = amount
