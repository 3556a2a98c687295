"""Database infrastructure."""

from .connection import DatabaseSessionManager, db_manager, normalize_database_url
from .models import (
    AccountModel,
    Base,
    CreditModel,
    LedgerEntryModel,
    NotificationModel,
    RepaymentModel,
    UserModel,
)
from . import immutability  # noqa: F401  registers ledger listeners

__all__ = [
    "DatabaseSessionManager",
    "db_manager",
    "normalize_database_url",
    "Base",
    "UserModel",
    "AccountModel",
    "LedgerEntryModel",
    "CreditModel",
    "RepaymentModel",
    "NotificationModel",
]
