"""Unit tests for the ledger primitives."""

from decimal import Decimal
from uuid import uuid4

import pytest

from src.domain.entities import Account, LedgerEntry, LedgerEntryStatus, LedgerEntryType
from src.domain.exceptions import (
    AccountInactiveException,
    InsufficientFundsException,
    InvalidRequestException,
)
from src.service.ledger import (
    apply_deposit,
    apply_disbursement_credit,
    apply_withdraw,
    credit_entry,
)


def make_account(balance: str = "100.00", is_active: bool = True) -> Account:
    return Account(user_id="user_1", balance=Decimal(balance), is_active=is_active)


class TestDeposit:
    def test_deposit_increases_balance_and_records_entry(self):
        account = make_account("100.00")

        movement = apply_deposit(account, Decimal("250.50"), "Paycheck")

        assert account.balance == Decimal("350.50")
        assert movement.new_balance == Decimal("350.50")
        entry = movement.entry
        assert entry.type == LedgerEntryType.DEPOSIT
        assert entry.status == LedgerEntryStatus.COMPLETED
        assert entry.amount == Decimal("250.50")
        assert entry.balance_before == Decimal("100.00")
        assert entry.balance_after == Decimal("350.50")
        assert entry.account_id == account.id
        assert entry.user_id == "user_1"
        assert entry.description == "Paycheck"

    def test_deposit_reference_is_prefixed(self):
        movement = apply_deposit(make_account(), Decimal("1"))

        assert movement.entry.reference.startswith("DEP-")

    def test_default_description(self):
        movement = apply_deposit(make_account(), Decimal("1"))

        assert movement.entry.description == "Deposit to savings"

    @pytest.mark.parametrize("amount", ["0", "-5", "10.001"])
    def test_invalid_amount_rejected(self, amount):
        account = make_account()

        with pytest.raises(InvalidRequestException):
            apply_deposit(account, Decimal(amount))

        assert account.balance == Decimal("100.00")

    def test_inactive_account_rejected(self):
        account = make_account(is_active=False)

        with pytest.raises(AccountInactiveException):
            apply_deposit(account, Decimal("10"))

    def test_balance_beyond_column_range_rejected(self):
        account = make_account("9999999999999999.00")

        with pytest.raises(InvalidRequestException):
            apply_deposit(account, Decimal("1.00"))
        assert account.balance == Decimal("9999999999999999.00")


class TestWithdraw:
    def test_withdraw_decreases_balance(self):
        account = make_account("100.00")

        movement = apply_withdraw(account, Decimal("40.25"))

        assert account.balance == Decimal("59.75")
        assert movement.entry.type == LedgerEntryType.WITHDRAWAL
        assert movement.entry.reference.startswith("WTH-")
        assert movement.entry.balance_before == Decimal("100.00")
        assert movement.entry.balance_after == Decimal("59.75")

    def test_withdraw_entire_balance(self):
        account = make_account("100.00")

        apply_withdraw(account, Decimal("100.00"))

        assert account.balance == Decimal("0.00")

    def test_insufficient_funds_leaves_balance(self):
        account = make_account("100.00")

        with pytest.raises(InsufficientFundsException) as exc_info:
            apply_withdraw(account, Decimal("150"))

        assert exc_info.value.balance == Decimal("100.00")
        assert account.balance == Decimal("100.00")

    def test_inactive_account_rejected(self):
        account = make_account(is_active=False)

        with pytest.raises(AccountInactiveException):
            apply_withdraw(account, Decimal("10"))


class TestCreditMovements:
    def test_disbursement_into_account(self):
        account = make_account("0.00")
        credit_id = uuid4()

        movement = apply_disbursement_credit(account, Decimal("5000.00"), credit_id)

        assert account.balance == Decimal("5000.00")
        assert movement.entry.type == LedgerEntryType.CREDIT_DISBURSEMENT
        assert movement.entry.credit_id == credit_id
        assert movement.entry.reference.startswith("DSB-")

    def test_credit_entry_has_no_account_balances(self):
        credit_id = uuid4()

        entry = credit_entry(
            user_id="user_1",
            entry_type=LedgerEntryType.CREDIT_REPAYMENT,
            amount=Decimal("856.07"),
            credit_id=credit_id,
            description="Repayment",
        )

        assert entry.account_id is None
        assert entry.balance_before is None
        assert entry.balance_after is None
        assert entry.reference.startswith("REP-")
        assert entry.is_completed


class TestLedgerEntry:
    def test_entries_are_frozen(self):
        entry = apply_deposit(make_account(), Decimal("1")).entry

        with pytest.raises(AttributeError):
            entry.amount = Decimal("1000")

    def test_references_are_unique(self):
        account = make_account("0.00")

        references = {apply_deposit(account, Decimal("1")).entry.reference for _ in range(200)}

        assert len(references) == 200

    def test_explicit_reference_is_kept(self):
        entry = LedgerEntry(
            user_id="user_1",
            type=LedgerEntryType.DEPOSIT,
            amount=Decimal("1"),
            reference="DEP-FIXED",
        )

        assert entry.reference == "DEP-FIXED"
