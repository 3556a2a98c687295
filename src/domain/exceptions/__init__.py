"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .common import (
    ConflictException,
    DuplicateUserException,
    InvalidRequestException,
    NotFoundException,
    NotificationNotFoundException,
    TransactionNotFoundException,
    UserNotFoundException,
)
from .ledger import (
    AccountInactiveException,
    AccountNotFoundException,
    InsufficientFundsException,
    LedgerImmutableException,
)
from .credit import (
    CreditNotActiveException,
    CreditNotFoundException,
    DuplicatePendingCreditException,
    InvalidStateTransitionException,
    RepaymentExceedsBalanceException,
)

__all__ = [
    "DomainException",
    "ConflictException",
    "DuplicateUserException",
    "InvalidRequestException",
    "NotFoundException",
    "NotificationNotFoundException",
    "TransactionNotFoundException",
    "UserNotFoundException",
    "AccountInactiveException",
    "AccountNotFoundException",
    "InsufficientFundsException",
    "LedgerImmutableException",
    "CreditNotActiveException",
    "CreditNotFoundException",
    "DuplicatePendingCreditException",
    "InvalidStateTransitionException",
    "RepaymentExceedsBalanceException",
]
