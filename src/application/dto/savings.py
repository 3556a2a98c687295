"""Data transfer objects for savings account operations."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Account, LedgerEntry
from src.domain.money import MAX_AMOUNT, fits_money_column, has_cent_precision, to_decimal


def validate_amount(amount, field_name: str = "amount") -> List[str]:
    """Errors for a money input: must be a positive decimal with cents precision."""
    try:
        value = to_decimal(amount)
    except (ValueError, InvalidOperation):
        return [f"{field_name} must be a decimal number"]

    if not value.is_finite():
        return [f"{field_name} must be a decimal number"]
    errors = []
    if value <= 0:
        errors.append(f"{field_name} must be positive")
    elif not fits_money_column(value):
        errors.append(f"{field_name} must be less than {MAX_AMOUNT:f}")
    if not has_cent_precision(value):
        errors.append(f"{field_name} must have at most 2 decimal places")
    return errors


@dataclass(frozen=True)
class MovementRequest:
    """Input data for a deposit or a withdrawal."""
    user_id: str
    account_id: UUID
    amount: Decimal
    description: str = ""

    def validate(self) -> List[str]:
        errors = []

        if not self.user_id or not self.user_id.strip():
            errors.append("user_id is required")

        errors.extend(validate_amount(self.amount))

        if len(self.description) > 255:
            errors.append("description must be at most 255 characters")

        return errors


DepositRequest = MovementRequest
WithdrawRequest = MovementRequest


@dataclass(frozen=True)
class OpenAccountRequest:
    """Input data for opening an additional savings account."""
    user_id: str
    currency: str = "USD"
    interest_rate: Optional[Decimal] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.user_id or not self.user_id.strip():
            errors.append("user_id is required")

        if len(self.currency) != 3 or not self.currency.isalpha():
            errors.append("currency must be a 3-letter code")

        if self.interest_rate is not None and not (0 <= self.interest_rate <= 100):
            errors.append("interest_rate must be between 0 and 100")

        return errors


@dataclass(frozen=True)
class MovementResult:
    """A completed deposit/withdrawal: the ledger entry and the account after it."""

    entry: LedgerEntry
    account: Account

    @property
    def new_balance(self) -> Decimal:
        return self.account.balance
