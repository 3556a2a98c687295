"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends

from src.domain.interfaces import NotificationSink, UnitOfWorkFactory
from src.infrastructure.clients import InAppNotificationSink
from src.infrastructure.database import db_manager
from src.infrastructure.repositories import SqlAlchemyUnitOfWork
from src.application.services import (
    AnalyticsService,
    CreditService,
    CustomerService,
    NotificationService,
    SavingsService,
    TransactionService,
)
from src.service.credit import credit_settings


# Unit of work dependencies
def get_uow_factory() -> UnitOfWorkFactory:
    """Get a factory producing one SqlAlchemyUnitOfWork per transaction."""
    session_factory = db_manager.session_factory
    return lambda: SqlAlchemyUnitOfWork(session_factory)


# Outbound client dependencies
def get_notification_sink(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
) -> NotificationSink:
    """Get a NotificationSink instance."""
    return InAppNotificationSink(uow_factory)


# Service dependencies
def get_customer_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
) -> CustomerService:
    return CustomerService(uow_factory)


def get_savings_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
) -> SavingsService:
    return SavingsService(uow_factory)


def get_credit_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
    notifier: Annotated[NotificationSink, Depends(get_notification_sink)],
) -> CreditService:
    """Get a CreditService instance with all dependencies."""
    return CreditService(
        uow_factory=uow_factory,
        notifier=notifier,
        settings=credit_settings,
    )


def get_transaction_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
) -> TransactionService:
    return TransactionService(uow_factory)


def get_notification_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
) -> NotificationService:
    return NotificationService(uow_factory)


def get_analytics_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
) -> AnalyticsService:
    return AnalyticsService(uow_factory)
