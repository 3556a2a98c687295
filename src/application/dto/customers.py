"""Data transfer objects for customer registration and administration."""

import re
from dataclasses import dataclass, field
from typing import List

from src.domain.entities import Account, Credit, User, UserStatus

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class RegisterCustomerRequest:
    """Input data for registering a customer."""
    email: str
    first_name: str
    last_name: str
    kyc_verified: bool = False

    def validate(self) -> List[str]:
        errors = []

        if not self.email or not EMAIL_PATTERN.match(self.email):
            errors.append("email must be a valid email address")

        if not self.first_name or not self.first_name.strip():
            errors.append("first_name is required")

        if not self.last_name or not self.last_name.strip():
            errors.append("last_name is required")

        return errors


@dataclass(frozen=True)
class UpdateCustomerStatusRequest:
    """Admin input for changing a customer's status."""
    status: str

    def validate(self) -> List[str]:
        allowed = [status.value for status in UserStatus]
        if self.status not in allowed:
            return [f"status must be one of: {', '.join(allowed)}"]
        return []


@dataclass(frozen=True)
class CustomerPage:
    """One page of the admin customer listing."""

    customers: List[User]
    total: int
    skip: int
    take: int


@dataclass(frozen=True)
class CustomerDetail:
    """A customer with their savings accounts and credits."""

    customer: User
    accounts: List[Account] = field(default_factory=list)
    credits: List[Credit] = field(default_factory=list)


@dataclass(frozen=True)
class CustomerStats:
    total: int
    active: int
    suspended: int
    pending_verification: int
