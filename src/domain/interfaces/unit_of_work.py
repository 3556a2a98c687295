"""Unit of work interface: one atomic transaction over all repositories."""

from abc import ABC, abstractmethod
from typing import Callable

from .repositories import (
    AccountRepository,
    AnalyticsReader,
    CreditRepository,
    LedgerRepository,
    NotificationRepository,
    UserDirectory,
)


class UnitOfWork(ABC):
    """
    A single store transaction.

    Used as an async context manager: everything written through the
    repositories commits together when the block exits normally and rolls
    back when it raises. Store-level write conflicts surface as
    ConflictException.

    Usage:
        async with uow_factory() as uow:
            account = await uow.accounts.get(account_id, for_update=True)
            ...
    """

    users: UserDirectory
    accounts: AccountRepository
    ledger: LedgerRepository
    credits: CreditRepository
    notifications: NotificationRepository
    analytics: AnalyticsReader

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            await self.commit()
        else:
            await self.rollback()

    @abstractmethod
    async def commit(self) -> None:
        """
        Commit the transaction.

        Raises:
            ConflictException: If a concurrent transaction won the race
        """
        ...

    @abstractmethod
    async def rollback(self) -> None:
        ...


UnitOfWorkFactory = Callable[[], UnitOfWork]
