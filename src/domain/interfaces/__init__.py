"""
Domain Interfaces (Ports)
"""

from .repositories import (
    AccountRepository,
    AnalyticsReader,
    CreditRepository,
    LedgerRepository,
    NotificationRepository,
    UserDirectory,
)
from .unit_of_work import UnitOfWork, UnitOfWorkFactory
from .clients import NotificationSink

__all__ = [
    "AccountRepository",
    "AnalyticsReader",
    "CreditRepository",
    "LedgerRepository",
    "NotificationRepository",
    "UserDirectory",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "NotificationSink",
]
