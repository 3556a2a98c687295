"""Transaction service - a user's ledger history and per-user rollups."""

from datetime import datetime, timedelta
from typing import List
from uuid import UUID

from dateutil.relativedelta import relativedelta

from src.domain.entities import LedgerEntry, LedgerEntryStatus
from src.domain.exceptions import InvalidRequestException, TransactionNotFoundException
from src.domain.interfaces import UnitOfWorkFactory
from src.application.dto import (
    PERIOD_DAYS,
    MonthlyActivity,
    TransactionFilter,
    TransactionStats,
    validate_period,
)


class TransactionService:
    """Read-only queries over a user's ledger entries."""

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def list_transactions(
        self,
        user_id: str,
        filters: TransactionFilter = TransactionFilter(),
    ) -> List[LedgerEntry]:
        errors = filters.validate()
        if errors:
            raise InvalidRequestException("; ".join(errors))

        async with self._uow_factory() as uow:
            return await uow.ledger.list_for_user(
                user_id,
                entry_type=filters.entry_type,
                status=filters.status,
                start=filters.start,
                end=filters.end,
                limit=filters.limit,
            )

    async def get_transaction(self, user_id: str, transaction_id: UUID) -> LedgerEntry:
        async with self._uow_factory() as uow:
            entry = await uow.ledger.get(transaction_id)
        if entry is None or entry.user_id != user_id:
            raise TransactionNotFoundException(str(transaction_id))
        return entry

    async def get_stats(
        self,
        user_id: str,
        period: str = "month",
        now: datetime | None = None,
    ) -> TransactionStats:
        """
        Count and total the user's COMPLETED entries per type.

        Args:
            user_id: The user's identifier
            period: "week" (7 days), "month" (30 days) or "year" (365 days)
            now: End of the window (defaults to the current time)
        """
        errors = validate_period(period)
        if errors:
            raise InvalidRequestException("; ".join(errors))

        end = now or datetime.utcnow()
        start = end - timedelta(days=PERIOD_DAYS[period])

        async with self._uow_factory() as uow:
            entries = await uow.analytics.ledger_entries_since(
                start, user_id=user_id, status=LedgerEntryStatus.COMPLETED
            )

        stats = TransactionStats(period=period, start_date=start, end_date=end)
        for entry in entries:
            if entry.created_at > end:
                continue
            stats.total_transactions += 1
            stats.by_type[entry.type.value].add(entry.amount)
        return stats

    async def get_monthly_analytics(
        self,
        user_id: str,
        months: int = 6,
        now: datetime | None = None,
    ) -> List[MonthlyActivity]:
        """COMPLETED-entry totals grouped by calendar month, oldest month first."""
        if not (1 <= months <= 24):
            raise InvalidRequestException("months must be between 1 and 24")

        start = (now or datetime.utcnow()) - relativedelta(months=months)
        async with self._uow_factory() as uow:
            entries = await uow.analytics.ledger_entries_since(
                start, user_id=user_id, status=LedgerEntryStatus.COMPLETED
            )

        by_month = {}
        for entry in entries:
            key = entry.created_at.strftime("%Y-%m")
            activity = by_month.setdefault(key, MonthlyActivity(month=key))
            activity.transaction_count += 1
            activity.by_type[entry.type.value] += entry.amount
        return [by_month[key] for key in sorted(by_month)]
