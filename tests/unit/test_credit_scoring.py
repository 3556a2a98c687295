"""
Unit tests for credit scoring and pricing.

These tests verify:
1. Score composition (base, savings, repaid credits, activity, KYC)
2. Caps on each factor and on the total score
3. Score to interest-rate tier mapping, including boundaries
4. Amortized monthly payment and total repayable
"""

from decimal import Decimal

import pytest

from src.domain.entities import CreditHistory
from src.service.credit import (
    CreditSettings,
    compute_score,
    compute_terms,
    interest_rate_for_score,
    monthly_payment,
    score_history,
)
from src.service.credit.credit_score import savings_points, transaction_points


# =============================================================================
# Score Composition Tests
# =============================================================================

class TestComputeScore:
    """Tests for compute_score."""

    def test_new_user_gets_base_score(self):
        """A user with no history at all scores exactly the base."""
        score = compute_score(
            savings_total=Decimal("0"),
            completed_credit_count=0,
            transaction_count=0,
            kyc_verified=False,
        )

        assert score == 600

    def test_savings_and_kyc_reach_750(self):
        """10,000 saved plus verified identity: 600 + 100 + 50."""
        score = compute_score(
            savings_total=Decimal("10000"),
            completed_credit_count=0,
            transaction_count=0,
            kyc_verified=True,
        )

        assert score == 750

    def test_savings_points_are_capped_at_100(self):
        score = compute_score(Decimal("50000"), 0, 0, False)

        assert score == 700

    def test_partial_savings_points_round_half_up(self):
        """250 saved is 2.5 points, rounded up to 3."""
        score = compute_score(Decimal("250"), 0, 0, False)

        assert score == 603

    def test_each_completed_credit_adds_20(self):
        assert compute_score(Decimal("0"), 3, 0, False) == 660

    def test_transaction_points_capped_at_50(self):
        assert compute_score(Decimal("0"), 0, 10, False) == 620
        assert compute_score(Decimal("0"), 0, 25, False) == 650
        assert compute_score(Decimal("0"), 0, 400, False) == 650

    def test_score_capped_at_850(self):
        score = compute_score(
            savings_total=Decimal("1000000"),
            completed_credit_count=20,
            transaction_count=1000,
            kyc_verified=True,
        )

        assert score == 850

    def test_negative_savings_contribute_nothing(self):
        assert compute_score(Decimal("-500"), 0, 0, False) == 600

    def test_score_is_deterministic(self):
        history = CreditHistory(
            savings_total=Decimal("1234.56"),
            completed_credit_count=1,
            transaction_count=7,
            kyc_verified=True,
        )

        assert score_history(history) == score_history(history)

    def test_score_history_matches_compute_score(self):
        history = CreditHistory(
            savings_total=Decimal("3000"),
            completed_credit_count=2,
            transaction_count=5,
            kyc_verified=False,
        )

        assert score_history(history) == compute_score(Decimal("3000"), 2, 5, False)
        assert score_history(history) == 600 + 30 + 40 + 10

    def test_custom_settings_change_weights(self):
        settings = CreditSettings(kyc_points=100, max_score=900)

        assert compute_score(Decimal("0"), 0, 0, True, settings) == 700


class TestScoreFactors:
    def test_savings_points_zero_for_empty_savings(self):
        assert savings_points(Decimal("0")) == 0

    def test_savings_points_linear_below_cap(self):
        assert savings_points(Decimal("4200")) == Decimal("42")

    def test_transaction_points_linear_below_cap(self):
        assert transaction_points(12) == 24


# =============================================================================
# Interest Tier Tests
# =============================================================================

class TestInterestRateForScore:
    """Tests for the score to annual rate mapping."""

    @pytest.mark.parametrize(
        "score,expected",
        [
            (850, Decimal("8.0")),
            (800, Decimal("8.0")),
            (799, Decimal("10.0")),
            (750, Decimal("10.0")),
            (749, Decimal("12.0")),
            (700, Decimal("12.0")),
            (699, Decimal("15.0")),
            (650, Decimal("15.0")),
            (649, Decimal("18.0")),
            (600, Decimal("18.0")),
        ],
    )
    def test_tier_boundaries_are_inclusive(self, score, expected):
        assert interest_rate_for_score(score) == expected

    def test_score_below_every_tier_gets_highest_rate(self):
        settings = CreditSettings(interest_tiers_json='[[700, "9.5"], [650, "14.0"]]')

        assert interest_rate_for_score(600, settings) == Decimal("14.0")

    def test_tiers_are_sorted_regardless_of_config_order(self):
        settings = CreditSettings(interest_tiers_json='[[0, "20"], [800, "5"], [700, "11"]]')

        assert interest_rate_for_score(810, settings) == Decimal("5")
        assert interest_rate_for_score(720, settings) == Decimal("11")
        assert interest_rate_for_score(100, settings) == Decimal("20")

    def test_invalid_tier_json_is_rejected(self):
        with pytest.raises(ValueError):
            CreditSettings(interest_tiers_json="not json")

    def test_negative_rate_is_rejected(self):
        with pytest.raises(ValueError):
            CreditSettings(interest_tiers_json='[[0, "-1"]]')


# =============================================================================
# Monthly Payment and Terms Tests
# =============================================================================

class TestMonthlyPayment:
    def test_standard_amortization(self):
        """1,000 at 12% over 12 months is the textbook 88.85."""
        assert monthly_payment(Decimal("1000"), Decimal("12"), 12) == Decimal("88.85")

    def test_zero_rate_divides_evenly(self):
        assert monthly_payment(Decimal("1200"), Decimal("0"), 12) == Decimal("100.00")

    def test_zero_rate_rounds_to_cents(self):
        assert monthly_payment(Decimal("100"), Decimal("0"), 3) == Decimal("33.33")

    def test_single_month_tenure(self):
        """One installment: principal plus one month of interest."""
        assert monthly_payment(Decimal("1200"), Decimal("12"), 1) == Decimal("1212.00")

    def test_payment_has_cent_precision(self):
        payment = monthly_payment(Decimal("5000"), Decimal("10"), 6)

        assert payment == payment.quantize(Decimal("0.01"))

    @pytest.mark.parametrize("tenure", [0, -3])
    def test_non_positive_tenure_raises(self, tenure):
        with pytest.raises(ValueError):
            monthly_payment(Decimal("1000"), Decimal("12"), tenure)


class TestComputeTerms:
    def test_terms_for_base_score(self):
        terms = compute_terms(Decimal("10000"), 12, 600)

        assert terms.principal == Decimal("10000.00")
        assert terms.interest_rate == Decimal("18.00")
        assert terms.tenure == 12

    def test_total_is_payment_times_tenure(self):
        terms = compute_terms(Decimal("5000"), 6, 750)

        assert terms.interest_rate == Decimal("10.00")
        assert terms.total_repayable == terms.monthly_payment * 6

    def test_total_repayable_exceeds_principal_when_rate_positive(self):
        terms = compute_terms(Decimal("1000"), 12, 700)

        assert terms.total_repayable > terms.principal

    def test_terms_to_dict(self):
        terms = compute_terms(Decimal("1000"), 12, 700)
        data = terms.to_dict()

        assert data["interest_rate"] == "12.00"
        assert data["monthly_payment"] == "88.85"
        assert data["total_repayable"] == "1066.20"
