"""Domain Entities - Core business objects."""

from .account import Account, generate_account_number
from .ledger_entry import (
    LedgerEntry,
    LedgerEntryStatus,
    LedgerEntryType,
    generate_reference,
)
from .credit import Credit, CreditStatus, Repayment
from .notification import Notification, NotificationStatus, NotificationType
from .user import CreditHistory, User, UserRole, UserStatus

__all__ = [
    "Account",
    "generate_account_number",
    "LedgerEntry",
    "LedgerEntryStatus",
    "LedgerEntryType",
    "generate_reference",
    "Credit",
    "CreditStatus",
    "Repayment",
    "Notification",
    "NotificationStatus",
    "NotificationType",
    "CreditHistory",
    "User",
    "UserRole",
    "UserStatus",
]
