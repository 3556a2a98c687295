"""
Credit Terms Calculation.

Maps a credit score to an annual interest rate and prices an amortizing
loan: a fixed monthly payment that repays principal plus interest over the
tenure.
"""

from decimal import Decimal

from src.domain.money import CENT, ZERO, round_money, to_decimal

from .models import CreditTerms
from .settings import CreditSettings, credit_settings


def interest_rate_for_score(
    credit_score: int,
    settings: CreditSettings = credit_settings,
) -> Decimal:
    """
    Map a credit score to an annual interest rate (percent).

    Tier boundaries are inclusive on the lower bound:
        >= 800 -> 8.0, >= 750 -> 10.0, >= 700 -> 12.0, >= 650 -> 15.0, else 18.0

    Args:
        credit_score: The borrower's score at request time
        settings: Credit settings (uses defaults if not provided)

    Returns:
        Annual rate in percent
    """
    tiers = settings.interest_tiers
    for min_score, rate in tiers:
        if credit_score >= min_score:
            return rate
    # Below every configured floor: use the most expensive tier
    return max(rate for _, rate in tiers)


def monthly_payment(principal: Decimal, annual_rate: Decimal, tenure: int) -> Decimal:
    """
    Fixed amortized installment, rounded half-up to cents.

        payment = P * r * (1 + r)^n / ((1 + r)^n - 1),  r = annual_rate / 100 / 12

    A zero rate degenerates to P / n.

    Raises:
        ValueError: If tenure is not positive
    """
    if tenure <= 0:
        raise ValueError(f"tenure must be positive, got {tenure}")

    principal = to_decimal(principal)
    r = to_decimal(annual_rate) / Decimal(100) / Decimal(12)
    if r == ZERO:
        return round_money(principal / tenure)

    growth = (1 + r) ** tenure
    return round_money(principal * r * growth / (growth - 1))


def compute_terms(
    principal: Decimal,
    tenure: int,
    credit_score: int,
    settings: CreditSettings = credit_settings,
) -> CreditTerms:
    """
    Price a credit request.

    Args:
        principal: Requested amount
        tenure: Duration in months
        credit_score: Borrower's score, selects the interest tier
        settings: Credit settings (uses defaults if not provided)

    Returns:
        CreditTerms with rate, monthly payment and total repayable
    """
    principal = round_money(principal)
    rate = interest_rate_for_score(credit_score, settings)
    payment = monthly_payment(principal, rate, tenure)

    return CreditTerms(
        principal=principal,
        interest_rate=rate.quantize(CENT),
        tenure=tenure,
        monthly_payment=payment,
        total_repayable=round_money(payment * tenure),
    )
