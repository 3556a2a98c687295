"""Credit-related Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities import Credit, Repayment
from src.service.credit import ScheduledInstallment

from .savings import TransactionSchema


class CreditRequestSchema(BaseModel):
    """
    Schema for POST /v1/credits request body.

    Bounds on amount and tenure are checked by the service so that every
    business-rule violation comes back as INVALID_REQUEST.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "user_id": "c2f1a6e4-8d1b-4f3a-9a57-1f3a0d2b6c11",
                    "amount": "5000.00",
                    "tenure": 6,
                    "purpose": "Working capital",
                }
            ]
        }
    )
    user_id: str = Field(..., min_length=1, max_length=64)
    amount: Decimal = Field(..., description="Principal, 100 to 1,000,000", examples=["5000.00"])
    tenure: int = Field(..., description="Duration in months, 1 to 60", examples=[6])
    purpose: Optional[str] = Field(None, max_length=500)


class RepaymentRequestSchema(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=64)
    amount: Decimal = Field(..., examples=["856.07"])


class ApproveRequestSchema(BaseModel):
    admin_id: str = Field(..., min_length=1, max_length=64)


class RejectRequestSchema(BaseModel):
    admin_id: str = Field(..., min_length=1, max_length=64)
    reason: str = Field(..., max_length=500, examples=["Insufficient repayment history"])


class DisburseRequestSchema(BaseModel):
    account_id: Optional[UUID] = Field(
        None,
        description="Savings account to pay the principal into (must belong to the borrower)",
    )


class RepaymentSchema(BaseModel):
    repayment_id: UUID
    transaction_id: UUID
    amount: Decimal
    created_at: datetime

    @classmethod
    def from_entity(cls, repayment: Repayment) -> "RepaymentSchema":
        return cls(
            repayment_id=repayment.id,
            transaction_id=repayment.ledger_entry_id,
            amount=repayment.amount,
            created_at=repayment.created_at,
        )


class CreditSchema(BaseModel):
    """A credit line as returned by the API."""

    credit_id: UUID
    user_id: str
    principal: Decimal
    interest_rate: Decimal = Field(..., description="Annual rate in percent", examples=["10.00"])
    tenure: int
    monthly_payment: Decimal
    total_repayable: Decimal
    amount_paid: Decimal
    outstanding_balance: Decimal
    credit_score: int = Field(..., ge=0, le=850)
    status: str = Field(..., examples=["APPROVED"])
    purpose: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    disbursed_at: Optional[datetime] = None
    next_payment_date: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    repayments: List[RepaymentSchema] = Field(default_factory=list)
    created_at: datetime

    @classmethod
    def from_entity(cls, credit: Credit) -> "CreditSchema":
        return cls(
            credit_id=credit.id,
            user_id=credit.user_id,
            principal=credit.principal,
            interest_rate=credit.interest_rate,
            tenure=credit.tenure,
            monthly_payment=credit.monthly_payment,
            total_repayable=credit.total_repayable,
            amount_paid=credit.amount_paid,
            outstanding_balance=credit.outstanding_balance,
            credit_score=credit.credit_score,
            status=credit.status.value,
            purpose=credit.purpose,
            approved_by=credit.approved_by,
            approved_at=credit.approved_at,
            disbursed_at=credit.disbursed_at,
            next_payment_date=credit.next_payment_date,
            rejection_reason=credit.rejection_reason,
            repayments=[RepaymentSchema.from_entity(r) for r in credit.repayments],
            created_at=credit.created_at,
        )


class RepaymentResponseSchema(BaseModel):
    transaction: TransactionSchema
    credit: CreditSchema


class InstallmentSchema(BaseModel):
    """One projected installment."""

    installment_number: int = Field(..., ge=1)
    due_date: datetime
    amount: Decimal
    status: str = Field(
        ...,
        description="Always PENDING: the projection does not track payments",
        examples=["PENDING"],
    )

    @classmethod
    def from_model(cls, installment: ScheduledInstallment) -> "InstallmentSchema":
        return cls(
            installment_number=installment.installment_number,
            due_date=installment.due_date,
            amount=installment.amount,
            status=installment.status,
        )


class ScheduleResponseSchema(BaseModel):
    credit_id: UUID
    total_repayable: Decimal
    installments: List[InstallmentSchema]


class CreditPageSchema(BaseModel):
    credits: List[CreditSchema]
    total: int
    skip: int
    take: int


class CreditStatsSchema(BaseModel):
    total: int
    pending: int
    approved: int
    rejected: int
    disbursed: int
    active: int
    completed: int
    defaulted: int
