"""SQLAlchemy implementation of the UnitOfWork."""

import structlog
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from src.domain.exceptions import ConflictException
from src.domain.interfaces import UnitOfWork

from .account_repository import PostgresAccountRepository
from .analytics_reader import PostgresAnalyticsReader
from .credit_repository import PostgresCreditRepository
from .ledger_repository import PostgresLedgerRepository
from .notification_repository import PostgresNotificationRepository
from .user_repository import PostgresUserDirectory

logger = structlog.get_logger(__name__)

# SQLSTATE codes for serialization failure and deadlock
RETRYABLE_SQLSTATES = {"40001", "40P01"}


def is_conflict_error(exc: Exception) -> bool:
    """True for store errors caused by a concurrent writer."""
    if isinstance(exc, (StaleDataError, IntegrityError)):
        return True
    if isinstance(exc, DBAPIError):
        sqlstate = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
        return sqlstate in RETRYABLE_SQLSTATES
    return False


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    One AsyncSession, one transaction.

    A fresh session is opened on __aenter__ and closed on __aexit__, so an
    instance must not be reused for a second attempt: ask the factory for a
    new one instead.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of work used outside 'async with'")
        return self._session

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self._session = self._session_factory()
        self.users = PostgresUserDirectory(self._session)
        self.accounts = PostgresAccountRepository(self._session)
        self.ledger = PostgresLedgerRepository(self._session)
        self.credits = PostgresCreditRepository(self._session)
        self.notifications = PostgresNotificationRepository(self._session)
        self.analytics = PostgresAnalyticsReader(self._session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
                if exc is not None and is_conflict_error(exc):
                    raise ConflictException() from exc
        finally:
            await self.session.close()
            self._session = None

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except (StaleDataError, DBAPIError) as e:
            await self.session.rollback()
            if is_conflict_error(e):
                logger.info("transaction_conflict", error_type=type(e).__name__)
                raise ConflictException() from e
            raise

    async def rollback(self) -> None:
        await self.session.rollback()
