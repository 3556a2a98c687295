"""PostgreSQL implementation of the append-only LedgerRepository."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import LedgerEntry, LedgerEntryStatus, LedgerEntryType
from src.domain.interfaces import LedgerRepository
from src.infrastructure.database.models import LedgerEntryModel


def ledger_entry_to_entity(model: LedgerEntryModel) -> LedgerEntry:
    """Convert database model to domain entity."""
    return LedgerEntry(
        id=model.id,
        user_id=model.user_id,
        type=LedgerEntryType(model.type),
        amount=model.amount,
        description=model.description,
        status=LedgerEntryStatus(model.status),
        reference=model.reference,
        balance_before=model.balance_before,
        balance_after=model.balance_after,
        account_id=model.account_id,
        credit_id=model.credit_id,
        created_at=model.created_at,
    )


class PostgresLedgerRepository(LedgerRepository):
    """
    PostgreSQL implementation of the ledger.

    Entries are only ever inserted. Updates and deletes of completed rows
    are rejected by the ORM listeners in database.immutability.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, entry: LedgerEntry) -> LedgerEntry:
        model = LedgerEntryModel(
            id=entry.id,
            user_id=entry.user_id,
            account_id=entry.account_id,
            credit_id=entry.credit_id,
            type=entry.type.value,
            amount=entry.amount,
            balance_before=entry.balance_before,
            balance_after=entry.balance_after,
            status=entry.status.value,
            reference=entry.reference,
            description=entry.description,
            created_at=entry.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return entry

    async def get(self, entry_id: UUID) -> Optional[LedgerEntry]:
        model = await self._session.get(LedgerEntryModel, entry_id)
        return ledger_entry_to_entity(model) if model else None

    async def get_by_reference(self, reference: str) -> Optional[LedgerEntry]:
        stmt = select(LedgerEntryModel).where(LedgerEntryModel.reference == reference)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return ledger_entry_to_entity(model) if model else None

    async def list_for_user(
        self,
        user_id: str,
        entry_type: Optional[LedgerEntryType] = None,
        status: Optional[LedgerEntryStatus] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = 100,
    ) -> List[LedgerEntry]:
        stmt = select(LedgerEntryModel).where(LedgerEntryModel.user_id == user_id)
        if entry_type is not None:
            stmt = stmt.where(LedgerEntryModel.type == entry_type.value)
        if status is not None:
            stmt = stmt.where(LedgerEntryModel.status == status.value)
        if start is not None:
            stmt = stmt.where(LedgerEntryModel.created_at >= start)
        if end is not None:
            stmt = stmt.where(LedgerEntryModel.created_at <= end)
        stmt = stmt.order_by(LedgerEntryModel.created_at.desc()).limit(limit)

        result = await self._session.execute(stmt)
        return [ledger_entry_to_entity(model) for model in result.scalars().all()]

    async def list_for_account(self, account_id: UUID, limit: int = 50) -> List[LedgerEntry]:
        stmt = (
            select(LedgerEntryModel)
            .where(LedgerEntryModel.account_id == account_id)
            .order_by(LedgerEntryModel.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [ledger_entry_to_entity(model) for model in result.scalars().all()]
