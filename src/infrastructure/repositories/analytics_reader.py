"""Read-only aggregate queries backing the admin analytics endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import LedgerEntry, LedgerEntryStatus, UserRole, UserStatus
from src.domain.interfaces import AnalyticsReader
from src.domain.money import ZERO, round_money
from src.infrastructure.database.models import AccountModel, LedgerEntryModel, UserModel

from .ledger_repository import ledger_entry_to_entity


def _day(value) -> str:
    # date() comes back as a date on PostgreSQL and as text on SQLite
    return str(value)[:10]


class PostgresAnalyticsReader(AnalyticsReader):
    """PostgreSQL implementation of the analytics reader."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def count_customers(self, status: Optional[UserStatus] = None) -> int:
        stmt = select(func.count(UserModel.id)).where(UserModel.role == UserRole.CUSTOMER.value)
        if status is not None:
            stmt = stmt.where(UserModel.status == status.value)
        return await self._session.scalar(stmt) or 0

    async def customer_signups_since(self, since: datetime) -> List[Tuple[str, int]]:
        day = func.date(UserModel.created_at)
        stmt = (
            select(day, func.count(UserModel.id))
            .where(
                UserModel.role == UserRole.CUSTOMER.value,
                UserModel.created_at >= since,
            )
            .group_by(day)
            .order_by(day)
        )
        result = await self._session.execute(stmt)
        return [(_day(row[0]), row[1]) for row in result.all()]

    async def savings_summary(self) -> Tuple[int, Decimal, Decimal]:
        row = (
            await self._session.execute(
                select(
                    func.count(AccountModel.id),
                    func.coalesce(func.sum(AccountModel.balance), 0),
                )
            )
        ).one()
        count, total = row[0] or 0, round_money(row[1] or 0)
        average = round_money(total / count) if count else ZERO
        return count, total, average

    async def count_ledger_entries(self) -> int:
        return await self._session.scalar(select(func.count(LedgerEntryModel.id))) or 0

    async def ledger_entries_since(
        self,
        since: datetime,
        user_id: Optional[str] = None,
        status: Optional[LedgerEntryStatus] = None,
    ) -> List[LedgerEntry]:
        stmt = select(LedgerEntryModel).where(LedgerEntryModel.created_at >= since)
        if user_id is not None:
            stmt = stmt.where(LedgerEntryModel.user_id == user_id)
        if status is not None:
            stmt = stmt.where(LedgerEntryModel.status == status.value)
        stmt = stmt.order_by(LedgerEntryModel.created_at.asc())

        result = await self._session.execute(stmt)
        return [ledger_entry_to_entity(model) for model in result.scalars().all()]

    async def ledger_totals_since(self, since: datetime) -> Dict[str, Tuple[int, Decimal]]:
        stmt = (
            select(
                LedgerEntryModel.type,
                func.count(LedgerEntryModel.id),
                func.coalesce(func.sum(LedgerEntryModel.amount), 0),
            )
            .where(LedgerEntryModel.created_at >= since)
            .group_by(LedgerEntryModel.type)
        )
        result = await self._session.execute(stmt)
        return {row[0]: (row[1], round_money(row[2] or 0)) for row in result.all()}

    async def ledger_daily_since(self, since: datetime) -> List[Tuple[str, int, Decimal]]:
        day = func.date(LedgerEntryModel.created_at)
        stmt = (
            select(
                day,
                func.count(LedgerEntryModel.id),
                func.coalesce(func.sum(LedgerEntryModel.amount), 0),
            )
            .where(LedgerEntryModel.created_at >= since)
            .group_by(day)
            .order_by(day)
        )
        result = await self._session.execute(stmt)
        return [(_day(row[0]), row[1], round_money(row[2] or 0)) for row in result.all()]
