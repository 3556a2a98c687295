"""Application services - use case orchestration."""

from .analytics_service import AnalyticsService
from .credit_service import CreditService
from .customer_service import CustomerService
from .notification_service import NotificationService
from .savings_service import SavingsService
from .transaction_service import TransactionService
from .transactional import run_in_transaction

__all__ = [
    "AnalyticsService",
    "CreditService",
    "CustomerService",
    "NotificationService",
    "SavingsService",
    "TransactionService",
    "run_in_transaction",
]
