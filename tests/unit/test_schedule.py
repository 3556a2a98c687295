"""Unit tests for repayment schedule projection."""

from datetime import datetime
from decimal import Decimal

from src.domain.entities import Credit, CreditStatus
from src.service.credit import compute_terms, project_schedule
from src.service.credit.schedule import schedule_anchor


def make_credit(
    principal: str = "5000",
    tenure: int = 6,
    score: int = 750,
    **overrides,
) -> Credit:
    terms = compute_terms(Decimal(principal), tenure, score)
    return Credit(
        user_id="user_1",
        principal=terms.principal,
        interest_rate=terms.interest_rate,
        tenure=terms.tenure,
        monthly_payment=terms.monthly_payment,
        total_repayable=terms.total_repayable,
        credit_score=score,
        **overrides,
    )


class TestProjectSchedule:
    def test_one_installment_per_month_of_tenure(self):
        credit = make_credit(tenure=12)

        installments = project_schedule(credit, now=datetime(2026, 1, 15))

        assert len(installments) == 12
        assert [i.installment_number for i in installments] == list(range(1, 13))

    def test_amounts_sum_to_total_repayable(self):
        credit = make_credit(principal="7777.77", tenure=11, score=640)

        installments = project_schedule(credit, now=datetime(2026, 1, 15))

        assert sum(i.amount for i in installments) == credit.total_repayable

    def test_last_installment_absorbs_remainder(self):
        credit = make_credit(tenure=3)
        credit.total_repayable = credit.monthly_payment * 3 + Decimal("0.02")

        installments = project_schedule(credit, now=datetime(2026, 1, 15))

        assert installments[0].amount == credit.monthly_payment
        assert installments[1].amount == credit.monthly_payment
        assert installments[2].amount == credit.monthly_payment + Decimal("0.02")

    def test_every_installment_is_pending(self):
        credit = make_credit(status=CreditStatus.ACTIVE, amount_paid=Decimal("100.00"))

        installments = project_schedule(credit, now=datetime(2026, 1, 15))

        assert all(i.status == "PENDING" for i in installments)

    def test_due_dates_follow_calendar_months(self):
        credit = make_credit(tenure=3, disbursed_at=datetime(2026, 1, 31, 9, 30))

        installments = project_schedule(credit)

        assert [i.due_date for i in installments] == [
            datetime(2026, 2, 28, 9, 30),
            datetime(2026, 3, 31, 9, 30),
            datetime(2026, 4, 30, 9, 30),
        ]

    def test_schedule_does_not_change_after_repayment(self):
        credit = make_credit(disbursed_at=datetime(2026, 1, 1))
        before = project_schedule(credit)

        credit.amount_paid = Decimal("500.00")
        credit.outstanding_balance = credit.total_repayable - Decimal("500.00")

        assert project_schedule(credit) == before

    def test_installment_to_dict(self):
        credit = make_credit(tenure=1, disbursed_at=datetime(2026, 5, 1))

        data = project_schedule(credit)[0].to_dict()

        assert data["installment_number"] == 1
        assert data["due_date"] == "2026-06-01T00:00:00Z"
        assert data["status"] == "PENDING"


class TestScheduleAnchor:
    def test_disbursement_date_wins(self):
        credit = make_credit(
            approved_at=datetime(2026, 1, 1),
            disbursed_at=datetime(2026, 1, 10),
        )

        assert schedule_anchor(credit, datetime(2026, 3, 1)) == datetime(2026, 1, 10)

    def test_approval_date_used_before_disbursement(self):
        credit = make_credit(approved_at=datetime(2026, 1, 1))

        assert schedule_anchor(credit, datetime(2026, 3, 1)) == datetime(2026, 1, 1)

    def test_now_used_for_pending_credit(self):
        credit = make_credit()

        assert schedule_anchor(credit, datetime(2026, 3, 1)) == datetime(2026, 3, 1)
