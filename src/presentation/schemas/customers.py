"""Customer registration and admin schemas."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from src.domain.entities import User

from .credit import CreditSchema
from .savings import AccountSchema


class RegisterCustomerSchema(BaseModel):
    email: str = Field(..., max_length=255, examples=["ada@example.com"])
    first_name: str = Field(..., max_length=100, examples=["Ada"])
    last_name: str = Field(..., max_length=100, examples=["Obi"])
    kyc_verified: bool = Field(False, description="Identity verification already passed")


class CustomerSchema(BaseModel):
    user_id: str
    email: str
    first_name: str
    last_name: str
    role: str
    status: str
    kyc_verified: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "CustomerSchema":
        return cls(
            user_id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role.value,
            status=user.status.value,
            kyc_verified=user.kyc_verified,
            created_at=user.created_at,
        )


class RegistrationResponseSchema(BaseModel):
    customer: CustomerSchema
    account: AccountSchema


# =============================================================================
# Admin
# =============================================================================

class UpdateCustomerStatusSchema(BaseModel):
    status: str = Field(..., examples=["SUSPENDED"], description="ACTIVE, SUSPENDED or PENDING_VERIFICATION")


class CustomerPageSchema(BaseModel):
    customers: List[CustomerSchema]
    total: int
    skip: int
    take: int


class CustomerDetailSchema(BaseModel):
    customer: CustomerSchema
    accounts: List[AccountSchema]
    credits: List[CreditSchema]


class CustomerStatsSchema(BaseModel):
    total: int
    active: int
    suspended: int
    pending_verification: int
