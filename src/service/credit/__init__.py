"""
Credit scoring, pricing and schedule projection.
"""

from .models import CreditTerms, ScheduledInstallment
from .settings import CreditSettings, credit_settings
from .credit_score import compute_score, score_history
from .terms import compute_terms, interest_rate_for_score, monthly_payment
from .schedule import project_schedule

__all__ = [
    # Settings
    "CreditSettings",
    "credit_settings",
    # Models
    "CreditTerms",
    "ScheduledInstallment",
    # Scoring
    "compute_score",
    "score_history",
    # Terms
    "compute_terms",
    "interest_rate_for_score",
    "monthly_payment",
    # Schedule
    "project_schedule",
]
