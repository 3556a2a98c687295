"""Savings account and ledger domain exceptions."""

from decimal import Decimal

from .base import DomainException
from .common import NotFoundException


class AccountNotFoundException(NotFoundException):
    def __init__(self, account_id: str):
        super().__init__("Account", account_id)
        self.account_id = account_id


class AccountInactiveException(DomainException):
    """Raised when money is moved on a deactivated account."""

    def __init__(self, account_id: str):
        super().__init__(
            message=f"Savings account is not active: {account_id}",
            code="ACCOUNT_INACTIVE",
        )
        self.account_id = account_id


class InsufficientFundsException(DomainException):
    """Raised when a withdrawal exceeds the available balance."""

    def __init__(self, balance: Decimal, amount: Decimal):
        super().__init__(
            message=f"Insufficient balance: requested {amount}, available {balance}",
            code="INSUFFICIENT_FUNDS",
        )
        self.balance = balance
        self.amount = amount


class LedgerImmutableException(DomainException):
    """Raised when code tries to change or delete a completed ledger entry."""

    def __init__(self, reference: str):
        super().__init__(
            message=f"Completed ledger entry {reference} cannot be modified",
            code="LEDGER_IMMUTABLE",
        )
        self.reference = reference
