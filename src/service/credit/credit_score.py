"""
Credit Score Calculation.

Turns a user's savings, repayment history, ledger activity and KYC status
into a bounded integer score. The function is pure: the same inputs always
give the same score, with no clock or randomness involved.
"""

from decimal import Decimal, ROUND_HALF_UP

from src.domain.entities import CreditHistory
from src.domain.money import to_decimal

from .settings import CreditSettings, credit_settings


def savings_points(
    savings_total: Decimal,
    settings: CreditSettings = credit_settings,
) -> Decimal:
    """Points from savings, capped (default: 1 point per 100, max 100)."""
    savings_total = to_decimal(savings_total)
    if savings_total <= 0:
        return Decimal(0)
    return min(Decimal(settings.savings_points_cap), savings_total / settings.savings_divisor)


def transaction_points(
    transaction_count: int,
    settings: CreditSettings = credit_settings,
) -> int:
    """Points from ledger activity, capped (default: 2 per entry, max 50)."""
    return min(settings.transaction_points_cap, settings.transaction_points * transaction_count)


def compute_score(
    savings_total: Decimal,
    completed_credit_count: int,
    transaction_count: int,
    kyc_verified: bool,
    settings: CreditSettings = credit_settings,
) -> int:
    """
    Calculate a user's credit score.

    score = base
          + min(100, savings_total / 100)
          + 20 * completed_credit_count
          + min(50, 2 * transaction_count)
          + 50 if KYC verified
    rounded half-up, capped at 850.

    Args:
        savings_total: Sum of the user's savings balances
        completed_credit_count: Number of fully repaid credits
        transaction_count: Number of ledger entries the user owns
        kyc_verified: Whether the user's identity is verified
        settings: Credit settings (uses defaults if not provided)

    Returns:
        Integer score between base_score and max_score
    """
    score = Decimal(settings.base_score)
    score += savings_points(savings_total, settings)
    score += settings.completed_credit_points * max(0, completed_credit_count)
    score += transaction_points(max(0, transaction_count), settings)
    if kyc_verified:
        score += settings.kyc_points

    rounded = int(score.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return min(settings.max_score, rounded)


def score_history(
    history: CreditHistory,
    settings: CreditSettings = credit_settings,
) -> int:
    """Convenience wrapper scoring a CreditHistory snapshot."""
    return compute_score(
        savings_total=history.savings_total,
        completed_credit_count=history.completed_credit_count,
        transaction_count=history.transaction_count,
        kyc_verified=history.kyc_verified,
        settings=settings,
    )
