"""
Repayment Schedule Projection.

Derives the installment plan of a credit from its terms. Nothing is stored:
the schedule is recomputed on every call and does not reflect repayments
already made.
"""

from datetime import datetime
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from src.domain.entities import Credit
from src.domain.money import round_money

from .models import ScheduledInstallment


def schedule_anchor(credit: Credit, now: Optional[datetime] = None) -> datetime:
    """Disbursement date if set, else approval date, else now."""
    if credit.disbursed_at is not None:
        return credit.disbursed_at
    if credit.approved_at is not None:
        return credit.approved_at
    return now or datetime.utcnow()


def project_schedule(
    credit: Credit,
    now: Optional[datetime] = None,
) -> List[ScheduledInstallment]:
    """
    Project the installments of a credit.

    Installment i (1-based) is due i calendar months after the anchor date.
    Every installment equals the monthly payment except the last, which is
    whatever remains of total_repayable, so the amounts always sum to
    total_repayable exactly.

    Args:
        credit: The credit to project
        now: Anchor used when the credit was never approved or disbursed

    Returns:
        `tenure` installments ordered by installment number
    """
    anchor = schedule_anchor(credit, now)
    tenure = credit.tenure

    installments = []
    for number in range(1, tenure + 1):
        if number < tenure:
            amount = credit.monthly_payment
        else:
            amount = round_money(credit.total_repayable - credit.monthly_payment * (tenure - 1))
        installments.append(
            ScheduledInstallment(
                installment_number=number,
                due_date=anchor + relativedelta(months=number),
                amount=amount,
            )
        )
    return installments
