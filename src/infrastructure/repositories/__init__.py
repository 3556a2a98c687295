"""Repository implementations."""

from .account_repository import PostgresAccountRepository
from .analytics_reader import PostgresAnalyticsReader
from .credit_repository import PostgresCreditRepository
from .ledger_repository import PostgresLedgerRepository
from .notification_repository import PostgresNotificationRepository
from .unit_of_work import SqlAlchemyUnitOfWork, is_conflict_error
from .user_repository import PostgresUserDirectory

__all__ = [
    "PostgresAccountRepository",
    "PostgresAnalyticsReader",
    "PostgresCreditRepository",
    "PostgresLedgerRepository",
    "PostgresNotificationRepository",
    "PostgresUserDirectory",
    "SqlAlchemyUnitOfWork",
    "is_conflict_error",
]
