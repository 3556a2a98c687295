"""PostgreSQL implementation of UserDirectory."""

from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import CreditHistory, CreditStatus, User, UserRole, UserStatus
from src.domain.exceptions import UserNotFoundException
from src.domain.interfaces import UserDirectory
from src.domain.money import round_money
from src.infrastructure.database.models import (
    AccountModel,
    CreditModel,
    LedgerEntryModel,
    UserModel,
)


class PostgresUserDirectory(UserDirectory):
    """
    PostgreSQL implementation of the user directory.

    Also answers the aggregate history queries used by credit scoring.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, user: User) -> User:
        model = UserModel(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role.value,
            status=user.status.value,
            kyc_verified=user.kyc_verified,
            created_at=user.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return user

    async def get(self, user_id: str) -> Optional[User]:
        model = await self._session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.lower())
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def update(self, user: User) -> User:
        model = await self._session.get(UserModel, user.id)
        if model is None:
            raise UserNotFoundException(user.id)
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.status = user.status.value
        model.kyc_verified = user.kyc_verified
        await self._session.flush()
        return user

    async def list_customers(
        self,
        skip: int = 0,
        take: int = 10,
        search: Optional[str] = None,
    ) -> Tuple[List[User], int]:
        conditions = [UserModel.role == UserRole.CUSTOMER.value]
        if search:
            conditions.append(
                or_(
                    UserModel.email.icontains(search, autoescape=True),
                    UserModel.first_name.icontains(search, autoescape=True),
                    UserModel.last_name.icontains(search, autoescape=True),
                )
            )

        total = await self._session.scalar(select(func.count(UserModel.id)).where(*conditions))
        stmt = (
            select(UserModel)
            .where(*conditions)
            .order_by(UserModel.created_at.desc(), UserModel.id)
            .offset(skip)
            .limit(take)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()], total or 0

    async def credit_history(self, user_id: str) -> CreditHistory:
        savings_total = await self._session.scalar(
            select(func.coalesce(func.sum(AccountModel.balance), 0)).where(
                AccountModel.user_id == user_id
            )
        )
        completed = await self._session.scalar(
            select(func.count(CreditModel.id)).where(
                CreditModel.user_id == user_id,
                CreditModel.status == CreditStatus.COMPLETED.value,
            )
        )
        transactions = await self._session.scalar(
            select(func.count(LedgerEntryModel.id)).where(LedgerEntryModel.user_id == user_id)
        )
        kyc_verified = await self._session.scalar(
            select(UserModel.kyc_verified).where(UserModel.id == user_id)
        )

        return CreditHistory(
            savings_total=round_money(savings_total or 0),
            completed_credit_count=completed or 0,
            transaction_count=transactions or 0,
            kyc_verified=bool(kyc_verified),
        )

    def _to_entity(self, model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            role=UserRole(model.role),
            status=UserStatus(model.status),
            kyc_verified=model.kyc_verified,
            created_at=model.created_at,
        )
