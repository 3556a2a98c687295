"""Savings service - deposits, withdrawals and account queries."""

from decimal import Decimal
from typing import List
from uuid import UUID

import structlog

from src.core.config import settings
from src.core.metrics import record_ledger_entry, track_operation_latency
from src.domain.entities import Account, LedgerEntry
from src.domain.exceptions import (
    AccountNotFoundException,
    InvalidRequestException,
    UserNotFoundException,
)
from src.domain.interfaces import UnitOfWork, UnitOfWorkFactory
from src.application.dto import MovementRequest, MovementResult, OpenAccountRequest
from src.service.ledger import apply_deposit, apply_withdraw

from .transactional import run_in_transaction

logger = structlog.get_logger(__name__)


async def load_owned_account(
    uow: UnitOfWork,
    user_id: str,
    account_id: UUID,
    for_update: bool = False,
) -> Account:
    """Fetch an account, treating someone else's account as missing."""
    account = await uow.accounts.get(account_id, for_update=for_update)
    if account is None or account.user_id != user_id:
        raise AccountNotFoundException(str(account_id))
    return account


class SavingsService:
    """
    Application service for savings accounts.

    Every money movement is one unit of work: lock the account row, apply
    the ledger primitive, write the entry and the new balance, commit.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def deposit(self, request: MovementRequest) -> MovementResult:
        """
        Deposit money into a savings account.

        Raises:
            InvalidRequestException: If request validation fails
            AccountNotFoundException: If the account is not the user's
            AccountInactiveException: If the account is deactivated
        """
        return await self._move(request, "deposit", apply_deposit)

    async def withdraw(self, request: MovementRequest) -> MovementResult:
        """
        Withdraw money from a savings account.

        Raises:
            InvalidRequestException: If request validation fails
            AccountNotFoundException: If the account is not the user's
            AccountInactiveException: If the account is deactivated
            InsufficientFundsException: If the amount exceeds the balance
        """
        return await self._move(request, "withdraw", apply_withdraw)

    async def _move(self, request: MovementRequest, operation: str, primitive) -> MovementResult:
        errors = request.validate()
        if errors:
            raise InvalidRequestException("; ".join(errors))

        amount = Decimal(str(request.amount))
        log = logger.bind(
            user_id=request.user_id,
            account_id=str(request.account_id),
            amount=str(amount),
        )

        async def work(uow: UnitOfWork) -> MovementResult:
            account = await load_owned_account(
                uow, request.user_id, request.account_id, for_update=True
            )
            movement = primitive(account, amount, request.description)
            await uow.ledger.add(movement.entry)
            await uow.accounts.update(account)
            return MovementResult(entry=movement.entry, account=account)

        with track_operation_latency(operation):
            result = await run_in_transaction(self._uow_factory, work, operation)

        record_ledger_entry(result.entry.type.value, result.entry.amount)
        log.info(
            f"{operation}_applied",
            reference=result.entry.reference,
            new_balance=str(result.new_balance),
        )
        return result

    async def list_accounts(self, user_id: str) -> List[Account]:
        async with self._uow_factory() as uow:
            return await uow.accounts.list_by_user(user_id)

    async def get_account(self, user_id: str, account_id: UUID) -> Account:
        async with self._uow_factory() as uow:
            return await load_owned_account(uow, user_id, account_id)

    async def get_balance(self, user_id: str, account_id: UUID) -> Account:
        """Same lookup as get_account; the caller only reads balance/currency."""
        return await self.get_account(user_id, account_id)

    async def account_history(
        self,
        user_id: str,
        account_id: UUID,
        limit: int = 50,
    ) -> List[LedgerEntry]:
        """Ledger entries of one account, newest first."""
        if not (1 <= limit <= 500):
            raise InvalidRequestException("limit must be between 1 and 500")
        async with self._uow_factory() as uow:
            await load_owned_account(uow, user_id, account_id)
            return await uow.ledger.list_for_account(account_id, limit=limit)

    async def open_account(self, request: OpenAccountRequest) -> Account:
        """Open an additional zero-balance savings account."""
        errors = request.validate()
        if errors:
            raise InvalidRequestException("; ".join(errors))

        async def work(uow: UnitOfWork) -> Account:
            if await uow.users.get(request.user_id) is None:
                raise UserNotFoundException(request.user_id)
            account = Account(
                user_id=request.user_id,
                currency=request.currency.upper(),
                interest_rate=(
                    request.interest_rate
                    if request.interest_rate is not None
                    else Decimal(settings.default_savings_rate)
                ),
            )
            return await uow.accounts.add(account)

        account = await run_in_transaction(self._uow_factory, work, "open_account")
        logger.info(
            "account_opened",
            user_id=request.user_id,
            account_id=str(account.id),
            account_number=account.account_number,
        )
        return account

    async def deactivate_account(self, user_id: str, account_id: UUID) -> Account:
        """Deactivate an account. Accounts are never deleted."""

        async def work(uow: UnitOfWork) -> Account:
            account = await load_owned_account(uow, user_id, account_id, for_update=True)
            if account.is_active:
                account.is_active = False
                await uow.accounts.update(account)
            return account

        account = await run_in_transaction(self._uow_factory, work, "deactivate_account")
        logger.info("account_deactivated", user_id=user_id, account_id=str(account_id))
        return account
