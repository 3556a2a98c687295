"""
Credit Settings for the credit scoring and terms engine.

This module contains all configurable parameters for credit scoring, interest
pricing, auto-approval and request bounds. They can be adjusted via
environment variables without a code change.

Environment variables use the CREDIT_ prefix:
    CREDIT_AUTO_APPROVE_THRESHOLD=700
    CREDIT_MAX_AMOUNT=1000000
    CREDIT_INTEREST_TIERS_JSON='[[800,"8.0"],[750,"10.0"],[0,"18.0"]]'

Usage:
    from src.service.credit.settings import credit_settings

    # Use default settings (loaded from env)
    threshold = credit_settings.auto_approve_threshold

    # Or create custom settings for testing
    custom = CreditSettings(auto_approve_threshold=650)
"""

import json
from datetime import timedelta
from decimal import Decimal
from functools import lru_cache
from typing import List, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CreditSettings(BaseSettings):
    """
    Configurable parameters for scoring, pricing and request validation.

    All settings can be overridden via environment variables with CREDIT_ prefix.
    Monetary values are decimal strings/amounts in the account currency.
    Interest rates are annual percentages.
    """

    model_config = SettingsConfigDict(
        env_prefix="CREDIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Score Composition ===
    base_score: int = Field(
        default=600,
        description="Score of a user with no history at all",
    )
    max_score: int = Field(
        default=850,
        description="Upper cap applied after all factors are added",
    )
    savings_divisor: Decimal = Field(
        default=Decimal("100"),
        gt=0,
        description="Savings total is divided by this to get savings points",
    )
    savings_points_cap: int = Field(
        default=100,
        ge=0,
        description="Maximum points earned from savings",
    )
    completed_credit_points: int = Field(
        default=20,
        ge=0,
        description="Points per fully repaid credit",
    )
    transaction_points: int = Field(
        default=2,
        ge=0,
        description="Points per ledger entry",
    )
    transaction_points_cap: int = Field(
        default=50,
        ge=0,
        description="Maximum points earned from ledger activity",
    )
    kyc_points: int = Field(
        default=50,
        ge=0,
        description="Points for a verified identity",
    )

    # === Approval ===
    auto_approve_threshold: int = Field(
        default=700,
        description="Scores at or above this are approved without admin review",
    )

    # === Request Bounds ===
    min_amount: Decimal = Field(default=Decimal("100"), gt=0)
    max_amount: Decimal = Field(default=Decimal("1000000"), gt=0)
    min_tenure_months: int = Field(default=1, ge=1)
    max_tenure_months: int = Field(default=60, ge=1)

    # === Repayment Cadence ===
    payment_interval_days: int = Field(
        default=30,
        ge=1,
        description="Days between next_payment_date updates",
    )

    # === Interest Tiers ===
    interest_tiers_json: str = Field(
        default='[[800, "8.0"], [750, "10.0"], [700, "12.0"], [650, "15.0"], [0, "18.0"]]',
        description="Interest tiers as JSON array: [[min_score, annual_rate_percent], ...]",
    )

    @field_validator("interest_tiers_json")
    @classmethod
    def validate_tiers_json(cls, v: str) -> str:
        """Validate that tiers JSON is parseable and well-formed."""
        try:
            tiers = json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")
        if not isinstance(tiers, list) or not tiers:
            raise ValueError("Tiers must be a non-empty list")
        for tier in tiers:
            if not isinstance(tier, list) or len(tier) != 2:
                raise ValueError("Each tier must be [min_score, rate]")
            min_score, rate = tier
            if not isinstance(min_score, int):
                raise ValueError(f"min_score must be an integer: {min_score!r}")
            if Decimal(str(rate)) < 0:
                raise ValueError(f"rate cannot be negative: {rate}")
        return v

    @property
    def interest_tiers(self) -> List[Tuple[int, Decimal]]:
        """Tiers sorted from the highest minimum score down."""
        tiers = [
            (min_score, Decimal(str(rate)))
            for min_score, rate in json.loads(self.interest_tiers_json)
        ]
        return sorted(tiers, key=lambda t: t[0], reverse=True)

    @property
    def payment_interval(self) -> timedelta:
        return timedelta(days=self.payment_interval_days)


@lru_cache
def get_credit_settings() -> CreditSettings:
    """Get cached credit settings instance."""
    return CreditSettings()


credit_settings = get_credit_settings()
