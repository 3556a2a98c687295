"""PostgreSQL repository implementation for credits and repayments."""

from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from src.domain.entities import Credit, CreditStatus, Repayment
from src.domain.exceptions import ConflictException
from src.domain.interfaces import CreditRepository
from src.infrastructure.database.models import CreditModel, RepaymentModel


class PostgresCreditRepository(CreditRepository):
    """
    PostgreSQL-backed credit repository.

    Lifecycle fields are written with optimistic version checks: the update
    only succeeds if nobody else committed a change to the row since it was
    read. The one-PENDING-credit-per-user rule is also enforced by a partial
    unique index, so a lost race surfaces as an IntegrityError on commit.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, credit: Credit) -> Credit:
        model = CreditModel(
            id=credit.id,
            user_id=credit.user_id,
            principal=credit.principal,
            interest_rate=credit.interest_rate,
            tenure=credit.tenure,
            monthly_payment=credit.monthly_payment,
            total_repayable=credit.total_repayable,
            amount_paid=credit.amount_paid,
            outstanding_balance=credit.outstanding_balance,
            credit_score=credit.credit_score,
            status=credit.status.value,
            purpose=credit.purpose,
            approved_by=credit.approved_by,
            approved_at=credit.approved_at,
            disbursed_at=credit.disbursed_at,
            next_payment_date=credit.next_payment_date,
            rejection_reason=credit.rejection_reason,
            created_at=credit.created_at,
            updated_at=credit.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        credit.version = model.version
        return credit

    async def get(
        self,
        credit_id: UUID,
        for_update: bool = False,
        repayment_limit: Optional[int] = None,
    ) -> Optional[Credit]:
        stmt = select(CreditModel).where(CreditModel.id == credit_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        repayments = await self._load_repayments(model.id, repayment_limit)
        return self._to_entity(model, repayments)

    async def update(self, credit: Credit) -> Credit:
        model = await self._session.get(CreditModel, credit.id)
        if model is None or model.version != credit.version:
            raise ConflictException()

        model.status = credit.status.value
        model.amount_paid = credit.amount_paid
        model.outstanding_balance = credit.outstanding_balance
        model.approved_by = credit.approved_by
        model.approved_at = credit.approved_at
        model.disbursed_at = credit.disbursed_at
        model.next_payment_date = credit.next_payment_date
        model.rejection_reason = credit.rejection_reason
        try:
            await self._session.flush()
        except StaleDataError as e:
            raise ConflictException() from e

        credit.version = model.version
        credit.updated_at = model.updated_at
        return credit

    async def add_repayment(self, repayment: Repayment) -> Repayment:
        model = RepaymentModel(
            id=repayment.id,
            credit_id=repayment.credit_id,
            ledger_entry_id=repayment.ledger_entry_id,
            amount=repayment.amount,
            created_at=repayment.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return repayment

    async def has_pending(self, user_id: str) -> bool:
        count = await self._session.scalar(
            select(func.count(CreditModel.id)).where(
                CreditModel.user_id == user_id,
                CreditModel.status == CreditStatus.PENDING.value,
            )
        )
        return bool(count)

    async def list_by_user(self, user_id: str, repayment_limit: int = 5) -> List[Credit]:
        stmt = (
            select(CreditModel)
            .where(CreditModel.user_id == user_id)
            .order_by(CreditModel.created_at.desc())
        )
        result = await self._session.execute(stmt)

        credits = []
        for model in result.scalars().all():
            repayments = await self._load_repayments(model.id, repayment_limit)
            credits.append(self._to_entity(model, repayments))
        return credits

    async def list_all(
        self,
        status: Optional[CreditStatus] = None,
        skip: int = 0,
        take: int = 10,
    ) -> Tuple[List[Credit], int]:
        stmt = select(CreditModel)
        count_stmt = select(func.count(CreditModel.id))
        if status is not None:
            stmt = stmt.where(CreditModel.status == status.value)
            count_stmt = count_stmt.where(CreditModel.status == status.value)

        stmt = stmt.order_by(CreditModel.created_at.desc()).offset(skip).limit(take)
        result = await self._session.execute(stmt)
        total = await self._session.scalar(count_stmt)

        return [self._to_entity(model, []) for model in result.scalars().all()], total or 0

    async def count_by_status(self) -> Dict[CreditStatus, int]:
        stmt = select(CreditModel.status, func.count(CreditModel.id)).group_by(CreditModel.status)
        result = await self._session.execute(stmt)

        counts = {status: 0 for status in CreditStatus}
        for status, count in result.all():
            counts[CreditStatus(status)] = count
        return counts

    async def _load_repayments(
        self,
        credit_id: UUID,
        limit: Optional[int],
    ) -> List[Repayment]:
        stmt = (
            select(RepaymentModel)
            .where(RepaymentModel.credit_id == credit_id)
            .order_by(RepaymentModel.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)

        return [
            Repayment(
                id=model.id,
                credit_id=model.credit_id,
                ledger_entry_id=model.ledger_entry_id,
                amount=model.amount,
                created_at=model.created_at,
            )
            for model in result.scalars().all()
        ]

    def _to_entity(self, model: CreditModel, repayments: List[Repayment]) -> Credit:
        return Credit(
            id=model.id,
            user_id=model.user_id,
            principal=model.principal,
            interest_rate=model.interest_rate,
            tenure=model.tenure,
            monthly_payment=model.monthly_payment,
            total_repayable=model.total_repayable,
            amount_paid=model.amount_paid,
            outstanding_balance=model.outstanding_balance,
            credit_score=model.credit_score,
            status=CreditStatus(model.status),
            purpose=model.purpose,
            approved_by=model.approved_by,
            approved_at=model.approved_at,
            disbursed_at=model.disbursed_at,
            next_payment_date=model.next_payment_date,
            rejection_reason=model.rejection_reason,
            repayments=repayments,
            version=model.version,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
