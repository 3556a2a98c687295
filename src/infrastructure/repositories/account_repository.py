"""PostgreSQL repository implementation for savings accounts."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from src.domain.entities import Account
from src.domain.exceptions import ConflictException
from src.domain.interfaces import AccountRepository
from src.infrastructure.database.models import AccountModel


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL-backed savings account repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, account: Account) -> Account:
        model = AccountModel(
            id=account.id,
            user_id=account.user_id,
            account_number=account.account_number,
            balance=account.balance,
            currency=account.currency,
            interest_rate=account.interest_rate,
            is_active=account.is_active,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        account.version = model.version
        return account

    async def get(self, account_id: UUID, for_update: bool = False) -> Optional[Account]:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def update(self, account: Account) -> Account:
        model = await self._session.get(AccountModel, account.id)
        if model is None or model.version != account.version:
            raise ConflictException()

        model.balance = account.balance
        model.is_active = account.is_active
        try:
            await self._session.flush()
        except StaleDataError as e:
            raise ConflictException() from e

        account.version = model.version
        account.updated_at = model.updated_at
        return account

    async def list_by_user(self, user_id: str) -> List[Account]:
        stmt = (
            select(AccountModel)
            .where(AccountModel.user_id == user_id)
            .order_by(AccountModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    def _to_entity(self, model: AccountModel) -> Account:
        return Account(
            id=model.id,
            user_id=model.user_id,
            account_number=model.account_number,
            balance=model.balance,
            currency=model.currency,
            interest_rate=model.interest_rate,
            is_active=model.is_active,
            version=model.version,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
