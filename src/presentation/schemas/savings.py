"""Savings and ledger Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.domain.entities import Account, LedgerEntry


class MovementRequestSchema(BaseModel):
    """Schema for deposit and withdrawal request bodies."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "user_id": "c2f1a6e4-8d1b-4f3a-9a57-1f3a0d2b6c11",
                    "amount": "250.00",
                    "description": "Monthly savings",
                }
            ]
        }
    )
    user_id: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Owner of the account",
    )
    amount: Decimal = Field(
        ...,
        description="Amount to move, positive with at most 2 decimals",
        examples=["250.00"],
    )
    description: str = Field(default="", max_length=255)

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        """Ensure user_id is not just whitespace."""
        if not v.strip():
            raise ValueError("user_id cannot be empty or whitespace")
        return v.strip()


class OpenAccountRequestSchema(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=64)
    currency: str = Field(default="USD", min_length=3, max_length=3, examples=["USD"])


class AccountSchema(BaseModel):
    """Savings account as returned by the API."""

    account_id: UUID
    user_id: str
    account_number: str = Field(..., examples=["SAV-3F2A9C01D4E7"])
    balance: Decimal = Field(..., examples=["1250.00"])
    currency: str
    interest_rate: Decimal = Field(..., description="Annual savings rate in percent")
    is_active: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, account: Account) -> "AccountSchema":
        return cls(
            account_id=account.id,
            user_id=account.user_id,
            account_number=account.account_number,
            balance=account.balance,
            currency=account.currency,
            interest_rate=account.interest_rate,
            is_active=account.is_active,
            created_at=account.created_at,
        )


class BalanceSchema(BaseModel):
    account_id: UUID
    account_number: str
    balance: Decimal
    currency: str


class TransactionSchema(BaseModel):
    """A ledger entry as returned by the API."""

    transaction_id: UUID
    user_id: str
    type: str = Field(..., examples=["DEPOSIT"])
    amount: Decimal
    status: str
    reference: str = Field(..., examples=["DEP-9C1D4E7F3F2A4B8C9D0E1F2A3B4C5D6E"])
    description: str
    balance_before: Optional[Decimal] = None
    balance_after: Optional[Decimal] = None
    account_id: Optional[UUID] = None
    credit_id: Optional[UUID] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, entry: LedgerEntry) -> "TransactionSchema":
        return cls(
            transaction_id=entry.id,
            user_id=entry.user_id,
            type=entry.type.value,
            amount=entry.amount,
            status=entry.status.value,
            reference=entry.reference,
            description=entry.description,
            balance_before=entry.balance_before,
            balance_after=entry.balance_after,
            account_id=entry.account_id,
            credit_id=entry.credit_id,
            created_at=entry.created_at,
        )


class MovementResponseSchema(BaseModel):
    """Schema for deposit and withdrawal responses."""

    transaction: TransactionSchema
    new_balance: Decimal = Field(..., examples=["1500.00"])
