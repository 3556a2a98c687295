"""Credit service - orchestrates the credit lifecycle use cases."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

import structlog

from src.core.metrics import (
    record_credit_request,
    record_credit_transition,
    record_ledger_entry,
    record_repayment,
    track_operation_latency,
)
from src.domain.entities import (
    Credit,
    CreditStatus,
    LedgerEntry,
    LedgerEntryType,
    Repayment,
)
from src.domain.exceptions import (
    CreditNotFoundException,
    DuplicatePendingCreditException,
    InvalidRequestException,
    UserNotFoundException,
)
from src.domain.interfaces import NotificationSink, UnitOfWork, UnitOfWorkFactory
from src.application.dto import (
    ApproveRequest,
    CreditPage,
    CreditRequest,
    CreditSchedule,
    CreditStats,
    RejectRequest,
    RepaymentRequest,
    RepaymentResult,
)
from src.service.credit import (
    CreditSettings,
    compute_terms,
    credit_settings,
    project_schedule,
    score_history,
)
from src.service.ledger import apply_disbursement_credit, credit_entry

from .savings_service import load_owned_account
from .transactional import run_in_transaction

logger = structlog.get_logger(__name__)


class CreditService:
    """
    Application service for credit lifecycle use cases.

    Mutations run as a single unit of work each and notify the borrower only
    after the unit has committed.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        notifier: NotificationSink,
        settings: CreditSettings = credit_settings,
    ):
        self._uow_factory = uow_factory
        self._notifier = notifier
        self._settings = settings

    # =========================================================================
    # Customer operations
    # =========================================================================

    async def request_credit(self, request: CreditRequest) -> Credit:
        """
        Request a new credit line.

        Scores the user, prices the credit and either approves it at once
        (score at or above the auto-approve threshold) or leaves it PENDING
        for admin review.

        Args:
            request: The credit request with user_id, amount, tenure, purpose

        Returns:
            The created credit

        Raises:
            InvalidRequestException: If request validation fails
            UserNotFoundException: If the user doesn't exist
            DuplicatePendingCreditException: If a PENDING credit already exists
        """
        errors = request.validate(self._settings)
        if errors:
            raise InvalidRequestException("; ".join(errors))

        amount = Decimal(str(request.amount))
        log = logger.bind(user_id=request.user_id, amount=str(amount), tenure=request.tenure)
        log.info("credit_requested")

        async def work(uow: UnitOfWork) -> Credit:
            user = await uow.users.get(request.user_id)
            if user is None:
                raise UserNotFoundException(request.user_id)
            if await uow.credits.has_pending(request.user_id):
                raise DuplicatePendingCreditException(request.user_id)

            history = await uow.users.credit_history(request.user_id)
            score = score_history(history, self._settings)
            terms = compute_terms(amount, request.tenure, score, self._settings)

            credit = Credit(
                user_id=request.user_id,
                principal=terms.principal,
                interest_rate=terms.interest_rate,
                tenure=terms.tenure,
                monthly_payment=terms.monthly_payment,
                total_repayable=terms.total_repayable,
                credit_score=score,
                purpose=request.purpose,
            )
            if score >= self._settings.auto_approve_threshold:
                credit.auto_approve(datetime.utcnow(), self._settings.payment_interval)

            return await uow.credits.add(credit)

        with track_operation_latency("request_credit"):
            credit = await run_in_transaction(self._uow_factory, work, "request_credit")

        approved = credit.status == CreditStatus.APPROVED
        record_credit_request(approved, credit.credit_score)
        log.info(
            "credit_decided",
            credit_id=str(credit.id),
            status=credit.status.value,
            credit_score=credit.credit_score,
            interest_rate=str(credit.interest_rate),
            monthly_payment=str(credit.monthly_payment),
        )

        if approved:
            await self._notify(
                credit,
                "Credit Approved",
                f"Your credit request of {credit.principal} has been approved automatically.",
            )
        return credit

    async def repay(self, request: RepaymentRequest) -> RepaymentResult:
        """
        Repay part or all of a credit.

        Writes one CREDIT_REPAYMENT ledger entry and its Repayment, and moves
        amount from outstanding_balance to amount_paid, all in one unit.

        Raises:
            InvalidRequestException: If the amount is not a positive cent amount
            CreditNotFoundException: If the credit is not the user's
            CreditNotActiveException: If the credit is not ACTIVE or DISBURSED
            RepaymentExceedsBalanceException: If amount > outstanding_balance
        """
        errors = request.validate()
        if errors:
            raise InvalidRequestException("; ".join(errors))

        amount = Decimal(str(request.amount))
        log = logger.bind(
            user_id=request.user_id,
            credit_id=str(request.credit_id),
            amount=str(amount),
        )

        async def work(uow: UnitOfWork) -> RepaymentResult:
            credit = await self._load_owned(uow, request.user_id, request.credit_id, for_update=True)
            credit.apply_repayment(amount, datetime.utcnow(), self._settings.payment_interval)

            entry = credit_entry(
                user_id=credit.user_id,
                entry_type=LedgerEntryType.CREDIT_REPAYMENT,
                amount=amount,
                credit_id=credit.id,
                description=f"Credit repayment for credit {credit.id}",
            )
            await uow.ledger.add(entry)
            await uow.credits.add_repayment(
                Repayment(credit_id=credit.id, ledger_entry_id=entry.id, amount=amount)
            )
            await uow.credits.update(credit)
            return RepaymentResult(entry=entry, credit=credit)

        with track_operation_latency("repay"):
            result = await run_in_transaction(self._uow_factory, work, "repay")

        credit = result.credit
        completed = credit.status == CreditStatus.COMPLETED
        record_ledger_entry(LedgerEntryType.CREDIT_REPAYMENT.value, amount)
        record_repayment(completed)
        log.info(
            "repayment_applied",
            reference=result.entry.reference,
            outstanding_balance=str(credit.outstanding_balance),
            status=credit.status.value,
        )

        if completed:
            record_credit_transition(CreditStatus.COMPLETED.value)
            await self._notify(
                credit,
                "Credit Fully Repaid",
                "Congratulations! Your credit has been fully repaid.",
            )
        return result

    async def list_credits(self, user_id: str) -> List[Credit]:
        """Credits of a user, newest first, each with its five latest repayments."""
        async with self._uow_factory() as uow:
            return await uow.credits.list_by_user(user_id, repayment_limit=5)

    async def get_credit(self, user_id: str, credit_id: UUID) -> Credit:
        async with self._uow_factory() as uow:
            return await self._load_owned(uow, user_id, credit_id)

    async def get_schedule(
        self,
        user_id: str,
        credit_id: UUID,
        now: Optional[datetime] = None,
    ) -> CreditSchedule:
        """Project the installment plan of one of the user's credits."""
        credit = await self.get_credit(user_id, credit_id)
        return CreditSchedule(credit=credit, installments=project_schedule(credit, now))

    # =========================================================================
    # Admin operations
    # =========================================================================

    async def approve(self, credit_id: UUID, request: ApproveRequest) -> Credit:
        """
        Approve a PENDING credit.

        Raises:
            InvalidRequestException: If admin_id is missing
            CreditNotFoundException: If the credit doesn't exist
            InvalidStateTransitionException: If the credit is not PENDING
        """
        errors = request.validate()
        if errors:
            raise InvalidRequestException("; ".join(errors))

        def transition(credit: Credit) -> None:
            credit.approve(request.admin_id, datetime.utcnow(), self._settings.payment_interval)

        credit = await self._transition(credit_id, "approve", transition)
        logger.info("credit_approved", credit_id=str(credit_id), admin_id=request.admin_id)
        await self._notify(
            credit,
            "Credit Approved",
            f"Your credit request of {credit.principal} has been approved.",
        )
        return credit

    async def reject(self, credit_id: UUID, request: RejectRequest) -> Credit:
        """
        Reject a PENDING credit with a reason.

        Raises:
            InvalidRequestException: If admin_id or reason is missing
            CreditNotFoundException: If the credit doesn't exist
            InvalidStateTransitionException: If the credit is not PENDING
        """
        errors = request.validate()
        if errors:
            raise InvalidRequestException("; ".join(errors))

        credit = await self._transition(
            credit_id, "reject", lambda credit: credit.reject(request.reason.strip())
        )
        logger.info(
            "credit_rejected",
            credit_id=str(credit_id),
            admin_id=request.admin_id,
            reason=credit.rejection_reason,
        )
        await self._notify(
            credit,
            "Credit Request Rejected",
            f"Your credit request was rejected. Reason: {credit.rejection_reason}",
        )
        return credit

    async def disburse(self, credit_id: UUID, account_id: Optional[UUID] = None) -> Credit:
        """
        Release the principal of an APPROVED credit.

        Writes one CREDIT_DISBURSEMENT ledger entry. With an account_id, the
        funds are paid into that savings account (same owner, active) in the
        same unit of work.

        Raises:
            CreditNotFoundException: If the credit doesn't exist
            InvalidStateTransitionException: If the credit is not APPROVED
            AccountNotFoundException: If the account is not the borrower's
            AccountInactiveException: If the account is deactivated
        """

        async def work(uow: UnitOfWork) -> Credit:
            credit = await uow.credits.get(credit_id, for_update=True)
            if credit is None:
                raise CreditNotFoundException(str(credit_id))
            credit.disburse(datetime.utcnow(), self._settings.payment_interval)

            description = f"Credit disbursement for credit {credit.id}"
            if account_id is not None:
                account = await load_owned_account(uow, credit.user_id, account_id, for_update=True)
                entry = apply_disbursement_credit(
                    account, credit.principal, credit.id, description
                ).entry
                await uow.ledger.add(entry)
                await uow.accounts.update(account)
            else:
                entry = credit_entry(
                    user_id=credit.user_id,
                    entry_type=LedgerEntryType.CREDIT_DISBURSEMENT,
                    amount=credit.principal,
                    credit_id=credit.id,
                    description=description,
                )
                await uow.ledger.add(entry)

            return await uow.credits.update(credit)

        with track_operation_latency("disburse"):
            credit = await run_in_transaction(self._uow_factory, work, "disburse")

        record_credit_transition(CreditStatus.DISBURSED.value)
        record_ledger_entry(LedgerEntryType.CREDIT_DISBURSEMENT.value, credit.principal)
        logger.info(
            "credit_disbursed",
            credit_id=str(credit_id),
            account_id=str(account_id) if account_id else None,
            amount=str(credit.principal),
        )
        await self._notify(
            credit,
            "Credit Disbursed",
            f"{credit.principal} from your credit has been disbursed.",
        )
        return credit

    async def activate(self, credit_id: UUID) -> Credit:
        credit = await self._transition(credit_id, "activate", lambda credit: credit.activate())
        logger.info("credit_activated", credit_id=str(credit_id))
        return credit

    async def mark_defaulted(self, credit_id: UUID) -> Credit:
        credit = await self._transition(
            credit_id, "mark_defaulted", lambda credit: credit.mark_defaulted()
        )
        logger.warning(
            "credit_defaulted",
            credit_id=str(credit_id),
            outstanding_balance=str(credit.outstanding_balance),
        )
        return credit

    async def get_credit_admin(self, credit_id: UUID) -> Credit:
        async with self._uow_factory() as uow:
            credit = await uow.credits.get(credit_id)
        if credit is None:
            raise CreditNotFoundException(str(credit_id))
        return credit

    async def list_pending(self, skip: int = 0, take: int = 10) -> CreditPage:
        return await self.list_all(CreditStatus.PENDING, skip, take)

    async def list_all(
        self,
        status: Optional[CreditStatus] = None,
        skip: int = 0,
        take: int = 10,
    ) -> CreditPage:
        if skip < 0 or not (1 <= take <= 100):
            raise InvalidRequestException("skip must be >= 0 and take between 1 and 100")
        async with self._uow_factory() as uow:
            credits, total = await uow.credits.list_all(status=status, skip=skip, take=take)
        return CreditPage(credits=credits, total=total, skip=skip, take=take)

    async def stats(self) -> CreditStats:
        async with self._uow_factory() as uow:
            counts = await uow.credits.count_by_status()
        return CreditStats(
            total=sum(counts.values()),
            pending=counts[CreditStatus.PENDING],
            approved=counts[CreditStatus.APPROVED],
            rejected=counts[CreditStatus.REJECTED],
            disbursed=counts[CreditStatus.DISBURSED],
            active=counts[CreditStatus.ACTIVE],
            completed=counts[CreditStatus.COMPLETED],
            defaulted=counts[CreditStatus.DEFAULTED],
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _transition(self, credit_id: UUID, operation: str, apply) -> Credit:
        """Lock the credit, apply a state-machine move and persist it."""

        async def work(uow: UnitOfWork) -> Credit:
            credit = await uow.credits.get(credit_id, for_update=True)
            if credit is None:
                raise CreditNotFoundException(str(credit_id))
            apply(credit)
            return await uow.credits.update(credit)

        with track_operation_latency(operation):
            credit = await run_in_transaction(self._uow_factory, work, operation)
        record_credit_transition(credit.status.value)
        return credit

    async def _load_owned(
        self,
        uow: UnitOfWork,
        user_id: str,
        credit_id: UUID,
        for_update: bool = False,
    ) -> Credit:
        credit = await uow.credits.get(credit_id, for_update=for_update)
        if credit is None or credit.user_id != user_id:
            raise CreditNotFoundException(str(credit_id))
        return credit

    async def _notify(self, credit: Credit, title: str, message: str) -> None:
        """Fire-and-forget: the sink logs and swallows its own failures."""
        await self._notifier.send(
            user_id=credit.user_id,
            title=title,
            message=message,
            metadata={"credit_id": str(credit.id), "status": credit.status.value},
        )
