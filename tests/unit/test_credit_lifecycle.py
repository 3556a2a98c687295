"""
Unit tests for the Credit state machine.

These tests verify:
1. Only legal lifecycle transitions succeed
2. Repayments keep amount_paid + outstanding_balance == total_repayable
3. Full repayment completes the credit
4. Over-repayment and repaying inactive credits are rejected without mutation
"""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from src.domain.entities import Credit, CreditStatus
from src.domain.exceptions import (
    CreditNotActiveException,
    InvalidStateTransitionException,
    RepaymentExceedsBalanceException,
)

NOW = datetime(2026, 3, 1, 12, 0)
INTERVAL = timedelta(days=30)


def make_credit(status: CreditStatus = CreditStatus.PENDING, total: str = "5136.42") -> Credit:
    return Credit(
        user_id="user_1",
        principal=Decimal("5000.00"),
        interest_rate=Decimal("10.00"),
        tenure=6,
        monthly_payment=Decimal("856.07"),
        total_repayable=Decimal(total),
        credit_score=750,
        status=status,
    )


# =============================================================================
# Transition Tests
# =============================================================================

class TestTransitions:
    def test_new_credit_owes_everything(self):
        credit = make_credit()

        assert credit.outstanding_balance == Decimal("5136.42")
        assert credit.amount_paid == Decimal("0.00")

    def test_approve_pending(self):
        credit = make_credit()

        credit.approve("admin_1", NOW, INTERVAL)

        assert credit.status == CreditStatus.APPROVED
        assert credit.approved_by == "admin_1"
        assert credit.approved_at == NOW
        assert credit.next_payment_date == NOW + INTERVAL

    def test_reject_pending(self):
        credit = make_credit()

        credit.reject("Insufficient history")

        assert credit.status == CreditStatus.REJECTED
        assert credit.rejection_reason == "Insufficient history"

    def test_auto_approve_sets_approval_time_without_admin(self):
        credit = make_credit()

        credit.auto_approve(NOW, INTERVAL)

        assert credit.status == CreditStatus.APPROVED
        assert credit.approved_by is None
        assert credit.approved_at == NOW

    def test_full_happy_path(self):
        credit = make_credit()

        credit.approve("admin_1", NOW, INTERVAL)
        credit.disburse(NOW, INTERVAL)
        credit.activate()

        assert credit.status == CreditStatus.ACTIVE
        assert credit.disbursed_at == NOW

    @pytest.mark.parametrize(
        "status",
        [
            CreditStatus.APPROVED,
            CreditStatus.REJECTED,
            CreditStatus.DISBURSED,
            CreditStatus.ACTIVE,
            CreditStatus.COMPLETED,
            CreditStatus.DEFAULTED,
        ],
    )
    def test_approve_only_from_pending(self, status):
        credit = make_credit(status=status)

        with pytest.raises(InvalidStateTransitionException):
            credit.approve("admin_1", NOW, INTERVAL)

        assert credit.status == status

    @pytest.mark.parametrize("status", [CreditStatus.APPROVED, CreditStatus.REJECTED])
    def test_reject_only_from_pending(self, status):
        credit = make_credit(status=status)

        with pytest.raises(InvalidStateTransitionException):
            credit.reject("too late")

        assert credit.rejection_reason is None

    def test_disburse_requires_approval(self):
        credit = make_credit()

        with pytest.raises(InvalidStateTransitionException):
            credit.disburse(NOW, INTERVAL)

        assert credit.disbursed_at is None

    def test_terminal_states_have_no_exits(self):
        for status in (CreditStatus.REJECTED, CreditStatus.COMPLETED, CreditStatus.DEFAULTED):
            credit = make_credit(status=status)
            with pytest.raises(InvalidStateTransitionException):
                credit.activate()
            with pytest.raises(InvalidStateTransitionException):
                credit.mark_defaulted()

    def test_default_from_active(self):
        credit = make_credit(status=CreditStatus.ACTIVE)

        credit.mark_defaulted()

        assert credit.status == CreditStatus.DEFAULTED


# =============================================================================
# Repayment Tests
# =============================================================================

class TestRepayment:
    def test_partial_repayment_moves_balance(self):
        credit = make_credit(status=CreditStatus.ACTIVE)

        credit.apply_repayment(Decimal("856.07"), NOW, INTERVAL)

        assert credit.amount_paid == Decimal("856.07")
        assert credit.outstanding_balance == Decimal("4280.35")
        assert credit.amount_paid + credit.outstanding_balance == credit.total_repayable
        assert credit.status == CreditStatus.ACTIVE
        assert credit.next_payment_date == NOW + INTERVAL

    def test_full_repayment_completes_credit(self):
        credit = make_credit(status=CreditStatus.ACTIVE)

        credit.apply_repayment(Decimal("5136.42"), NOW, INTERVAL)

        assert credit.outstanding_balance == Decimal("0.00")
        assert credit.status == CreditStatus.COMPLETED
        assert credit.next_payment_date is None

    def test_disbursed_credit_is_repayable(self):
        credit = make_credit(status=CreditStatus.DISBURSED)

        credit.apply_repayment(Decimal("100.00"), NOW, INTERVAL)

        assert credit.amount_paid == Decimal("100.00")

    def test_repayment_over_balance_rejected_without_mutation(self):
        credit = make_credit(status=CreditStatus.ACTIVE)

        with pytest.raises(RepaymentExceedsBalanceException) as exc_info:
            credit.apply_repayment(Decimal("6000"), NOW, INTERVAL)

        assert exc_info.value.outstanding_balance == Decimal("5136.42")
        assert credit.outstanding_balance == Decimal("5136.42")
        assert credit.amount_paid == Decimal("0.00")

    @pytest.mark.parametrize(
        "status",
        [CreditStatus.PENDING, CreditStatus.APPROVED, CreditStatus.COMPLETED, CreditStatus.DEFAULTED],
    )
    def test_repaying_inactive_credit_rejected(self, status):
        credit = make_credit(status=status)

        with pytest.raises(CreditNotActiveException):
            credit.apply_repayment(Decimal("10"), NOW, INTERVAL)

    def test_repayments_accumulate(self):
        credit = make_credit(status=CreditStatus.ACTIVE, total="300.00")

        for _ in range(3):
            credit.apply_repayment(Decimal("100.00"), NOW, INTERVAL)

        assert credit.amount_paid == Decimal("300.00")
        assert credit.status == CreditStatus.COMPLETED

    def test_check_repayment_does_not_mutate(self):
        credit = make_credit(status=CreditStatus.ACTIVE)

        credit.check_repayment(Decimal("100"))

        assert credit.amount_paid == Decimal("0.00")
