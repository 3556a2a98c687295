"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from src.domain.entities import (
    Account,
    Credit,
    CreditHistory,
    CreditStatus,
    LedgerEntry,
    LedgerEntryStatus,
    LedgerEntryType,
    Notification,
    NotificationType,
    Repayment,
    User,
    UserStatus,
)


class UserDirectory(ABC):
    """
    Lookup of users and of the history the credit scorer needs.

    Implementations may use PostgreSQL, in-memory storage, etc.
    """

    @abstractmethod
    async def add(self, user: User) -> User:
        ...

    @abstractmethod
    async def get(self, user_id: str) -> Optional[User]:
        """
        Retrieve a user by ID.

        Args:
            user_id: The user's identifier

        Returns:
            The user if found, None otherwise
        """
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    async def update(self, user: User) -> User:
        """Write profile and status changes back."""
        ...

    @abstractmethod
    async def list_customers(
        self,
        skip: int = 0,
        take: int = 10,
        search: Optional[str] = None,
    ) -> Tuple[List[User], int]:
        """
        One page of customers, newest first, plus the total match count.

        Args:
            skip: Rows to skip
            take: Page size
            search: Case-insensitive substring of email, first or last name
        """
        ...

    @abstractmethod
    async def credit_history(self, user_id: str) -> CreditHistory:
        """
        Aggregate a user's savings, credit and ledger history.

        Args:
            user_id: The user's identifier

        Returns:
            CreditHistory with savings total, completed credit count,
            ledger entry count and KYC flag (all zero for unknown users)
        """
        ...


class AccountRepository(ABC):
    """Abstract repository for savings Account persistence."""

    @abstractmethod
    async def add(self, account: Account) -> Account:
        ...

    @abstractmethod
    async def get(self, account_id: UUID, for_update: bool = False) -> Optional[Account]:
        """
        Retrieve an account by ID.

        Args:
            account_id: The account's unique identifier
            for_update: Lock the row until the surrounding transaction ends

        Returns:
            The account if found, None otherwise
        """
        ...

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """
        Write balance/activation changes back.

        Raises:
            ConflictException: If the row changed since it was read
        """
        ...

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[Account]:
        """Accounts of a user, newest first."""
        ...


class LedgerRepository(ABC):
    """
    Append-only repository for ledger entries.

    There is no update or delete: completed entries are
    corrected by new offsetting entries.
    """

    @abstractmethod
    async def add(self, entry: LedgerEntry) -> LedgerEntry:
        ...

    @abstractmethod
    async def get(self, entry_id: UUID) -> Optional[LedgerEntry]:
        ...

    @abstractmethod
    async def get_by_reference(self, reference: str) -> Optional[LedgerEntry]:
        ...

    @abstractmethod
    async def list_for_user(
        self,
        user_id: str,
        entry_type: Optional[LedgerEntryType] = None,
        status: Optional[LedgerEntryStatus] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = 100,
    ) -> List[LedgerEntry]:
        """
        Retrieve a user's ledger entries, newest first.

        Args:
            user_id: The user's identifier
            entry_type: Only entries of this type
            status: Only entries with this status
            start: Only entries created at or after this time
            end: Only entries created at or before this time
            limit: Maximum number of entries to return
        """
        ...

    @abstractmethod
    async def list_for_account(self, account_id: UUID, limit: int = 50) -> List[LedgerEntry]:
        """Entries touching one savings account, newest first."""
        ...


class CreditRepository(ABC):
    """Abstract repository for Credit and Repayment persistence."""

    @abstractmethod
    async def add(self, credit: Credit) -> Credit:
        ...

    @abstractmethod
    async def get(
        self,
        credit_id: UUID,
        for_update: bool = False,
        repayment_limit: Optional[int] = None,
    ) -> Optional[Credit]:
        """
        Retrieve a credit by ID.

        Args:
            credit_id: The credit's unique identifier
            for_update: Lock the row until the surrounding transaction ends
            repayment_limit: Load at most this many recent repayments
                (None loads all of them)

        Returns:
            The credit if found, None otherwise
        """
        ...

    @abstractmethod
    async def update(self, credit: Credit) -> Credit:
        """
        Write lifecycle and balance changes back.

        Raises:
            ConflictException: If the row changed since it was read
        """
        ...

    @abstractmethod
    async def add_repayment(self, repayment: Repayment) -> Repayment:
        ...

    @abstractmethod
    async def has_pending(self, user_id: str) -> bool:
        """True if the user has a credit in PENDING."""
        ...

    @abstractmethod
    async def list_by_user(self, user_id: str, repayment_limit: int = 5) -> List[Credit]:
        """Credits of a user, newest first, with their latest repayments."""
        ...

    @abstractmethod
    async def list_all(
        self,
        status: Optional[CreditStatus] = None,
        skip: int = 0,
        take: int = 10,
    ) -> Tuple[List[Credit], int]:
        """
        Page through all credits, newest first.

        Returns:
            The page of credits and the total number matching the filter
        """
        ...

    @abstractmethod
    async def count_by_status(self) -> Dict[CreditStatus, int]:
        """Number of credits in every status (missing statuses count 0)."""
        ...


class NotificationRepository(ABC):
    """Abstract repository for inbox Notification persistence."""

    @abstractmethod
    async def add(self, notification: Notification) -> Notification:
        ...

    @abstractmethod
    async def get(self, notification_id: UUID) -> Optional[Notification]:
        ...

    @abstractmethod
    async def update(self, notification: Notification) -> Notification:
        ...

    @abstractmethod
    async def delete(self, notification_id: UUID) -> None:
        ...

    @abstractmethod
    async def list_for_user(
        self,
        user_id: str,
        notification_type: Optional[NotificationType] = None,
        unread_only: bool = False,
        limit: int = 50,
    ) -> List[Notification]:
        ...

    @abstractmethod
    async def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification read; returns how many changed."""
        ...

    @abstractmethod
    async def count_unread(self, user_id: str) -> int:
        ...


class AnalyticsReader(ABC):
    """
    Read-only aggregate queries for the admin dashboard.

    Nothing here takes locks or writes.
    """

    @abstractmethod
    async def count_customers(self, status: Optional[UserStatus] = None) -> int:
        ...

    @abstractmethod
    async def customer_signups_since(self, since: datetime) -> List[Tuple[str, int]]:
        """(YYYY-MM-DD, new customers) per day, oldest first."""
        ...

    @abstractmethod
    async def savings_summary(self) -> Tuple[int, Decimal, Decimal]:
        """Returns (account count, total balance, average balance)."""
        ...

    @abstractmethod
    async def count_ledger_entries(self) -> int:
        ...

    @abstractmethod
    async def ledger_entries_since(
        self,
        since: datetime,
        user_id: Optional[str] = None,
        status: Optional[LedgerEntryStatus] = None,
    ) -> List[LedgerEntry]:
        """Entries created at or after `since`, oldest first."""
        ...

    @abstractmethod
    async def ledger_totals_since(self, since: datetime) -> Dict[str, Tuple[int, Decimal]]:
        """Entry count and amount sum per entry type, all statuses."""
        ...

    @abstractmethod
    async def ledger_daily_since(self, since: datetime) -> List[Tuple[str, int, Decimal]]:
        """(YYYY-MM-DD, entry count, amount sum) per day, oldest first."""
        ...
