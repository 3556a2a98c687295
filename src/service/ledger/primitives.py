"""
Ledger Primitives.

Each primitive pairs one balance change on a savings account with the
immutable ledger entry that records it. They mutate the Account in memory
and return the entry; persisting both inside one transaction is the
caller's job. Nothing here touches the store or the clock beyond stamping
the entry.
"""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from src.domain.entities import Account, LedgerEntry, LedgerEntryStatus, LedgerEntryType
from src.domain.exceptions import (
    AccountInactiveException,
    InsufficientFundsException,
    InvalidRequestException,
)
from src.domain.money import fits_money_column, has_cent_precision, to_decimal


@dataclass(frozen=True)
class LedgerMovement:
    """
    Result of applying a primitive.

    Attributes:
        entry: The COMPLETED ledger entry to insert
        new_balance: Account balance after the movement
    """
    entry: LedgerEntry
    new_balance: Decimal


def _check_movement(account: Account, amount) -> Decimal:
    amount = to_decimal(amount)
    if amount <= 0:
        raise InvalidRequestException("amount must be positive")
    if not has_cent_precision(amount):
        raise InvalidRequestException("amount must have at most 2 decimal places")
    if not account.is_active:
        raise AccountInactiveException(str(account.id))
    return amount


def _credited_balance(account: Account, amount: Decimal) -> Decimal:
    new_balance = account.balance + amount
    if not fits_money_column(new_balance):
        raise InvalidRequestException("resulting balance exceeds the maximum account balance")
    return new_balance


def _move(
    account: Account,
    entry_type: LedgerEntryType,
    amount: Decimal,
    new_balance: Decimal,
    description: str,
    credit_id: UUID | None = None,
) -> LedgerMovement:
    entry = LedgerEntry(
        user_id=account.user_id,
        account_id=account.id,
        credit_id=credit_id,
        type=entry_type,
        amount=amount,
        status=LedgerEntryStatus.COMPLETED,
        balance_before=account.balance,
        balance_after=new_balance,
        description=description,
    )
    account.balance = new_balance
    return LedgerMovement(entry=entry, new_balance=new_balance)


def apply_deposit(account: Account, amount, description: str = "") -> LedgerMovement:
    """
    Credit a savings account.

    Raises:
        InvalidRequestException: If amount is not a positive cent amount
        AccountInactiveException: If the account is deactivated
    """
    amount = _check_movement(account, amount)
    return _move(
        account,
        LedgerEntryType.DEPOSIT,
        amount,
        _credited_balance(account, amount),
        description or "Deposit to savings",
    )


def apply_withdraw(account: Account, amount, description: str = "") -> LedgerMovement:
    """
    Debit a savings account. The balance never goes negative.

    Raises:
        InvalidRequestException: If amount is not a positive cent amount
        AccountInactiveException: If the account is deactivated
        InsufficientFundsException: If amount exceeds the balance
    """
    amount = _check_movement(account, amount)
    if amount > account.balance:
        raise InsufficientFundsException(account.balance, amount)
    return _move(
        account,
        LedgerEntryType.WITHDRAWAL,
        amount,
        account.balance - amount,
        description or "Withdrawal from savings",
    )


def apply_disbursement_credit(
    account: Account,
    amount,
    credit_id: UUID,
    description: str = "",
) -> LedgerMovement:
    """Pay disbursed credit funds into a savings account."""
    amount = _check_movement(account, amount)
    return _move(
        account,
        LedgerEntryType.CREDIT_DISBURSEMENT,
        amount,
        _credited_balance(account, amount),
        description or "Credit disbursement",
        credit_id=credit_id,
    )


def credit_entry(
    user_id: str,
    entry_type: LedgerEntryType,
    amount: Decimal,
    credit_id: UUID,
    description: str,
) -> LedgerEntry:
    """Ledger entry for a credit movement that touches no savings account."""
    return LedgerEntry(
        user_id=user_id,
        credit_id=credit_id,
        type=entry_type,
        amount=amount,
        status=LedgerEntryStatus.COMPLETED,
        description=description,
    )
