"""Customer service - registration, profile lookup and admin management."""

from decimal import Decimal
from typing import Optional, Tuple

import structlog

from src.core.config import settings
from src.domain.entities import Account, User, UserRole, UserStatus
from src.domain.exceptions import (
    DuplicateUserException,
    InvalidRequestException,
    UserNotFoundException,
)
from src.domain.interfaces import UnitOfWork, UnitOfWorkFactory
from src.application.dto import (
    CustomerDetail,
    CustomerPage,
    CustomerStats,
    RegisterCustomerRequest,
    UpdateCustomerStatusRequest,
)

from .transactional import run_in_transaction

logger = structlog.get_logger(__name__)


class CustomerService:
    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def register(self, request: RegisterCustomerRequest) -> Tuple[User, Account]:
        """
        Register a customer together with a zero-balance savings account.

        Raises:
            InvalidRequestException: If request validation fails
            DuplicateUserException: If the email is already registered
        """
        errors = request.validate()
        if errors:
            raise InvalidRequestException("; ".join(errors))

        email = request.email.strip().lower()

        async def work(uow: UnitOfWork) -> Tuple[User, Account]:
            if await uow.users.get_by_email(email) is not None:
                raise DuplicateUserException(email)

            user = User(
                email=email,
                first_name=request.first_name.strip(),
                last_name=request.last_name.strip(),
                role=UserRole.CUSTOMER,
                kyc_verified=request.kyc_verified,
            )
            await uow.users.add(user)
            account = await uow.accounts.add(
                Account(
                    user_id=user.id,
                    currency=settings.default_currency,
                    interest_rate=Decimal(settings.default_savings_rate),
                )
            )
            return user, account

        user, account = await run_in_transaction(self._uow_factory, work, "register_customer")
        logger.info(
            "customer_registered",
            user_id=user.id,
            account_number=account.account_number,
        )
        return user, account

    async def get_customer(self, user_id: str) -> User:
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
        if user is None:
            raise UserNotFoundException(user_id)
        return user

    # =========================================================================
    # Admin
    # =========================================================================

    async def list_customers(
        self,
        skip: int = 0,
        take: int = 10,
        search: Optional[str] = None,
    ) -> CustomerPage:
        if skip < 0 or not (1 <= take <= 100):
            raise InvalidRequestException("skip must be >= 0 and take between 1 and 100")
        search = search.strip() if search else None
        async with self._uow_factory() as uow:
            customers, total = await uow.users.list_customers(skip=skip, take=take, search=search)
        return CustomerPage(customers=customers, total=total, skip=skip, take=take)

    async def get_customer_detail(self, user_id: str) -> CustomerDetail:
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if user is None:
                raise UserNotFoundException(user_id)
            accounts = await uow.accounts.list_by_user(user_id)
            credits = await uow.credits.list_by_user(user_id, repayment_limit=5)
        return CustomerDetail(customer=user, accounts=accounts, credits=credits)

    async def update_status(self, user_id: str, request: UpdateCustomerStatusRequest) -> User:
        """
        Set a customer's status (ACTIVE, SUSPENDED or PENDING_VERIFICATION).

        Raises:
            InvalidRequestException: If the status is unknown
            UserNotFoundException: If the user does not exist
        """
        errors = request.validate()
        if errors:
            raise InvalidRequestException("; ".join(errors))
        status = UserStatus(request.status)

        async def work(uow: UnitOfWork) -> Tuple[User, UserStatus]:
            user = await uow.users.get(user_id)
            if user is None:
                raise UserNotFoundException(user_id)
            previous = user.status
            user.status = status
            await uow.users.update(user)
            return user, previous

        user, previous = await run_in_transaction(
            self._uow_factory, work, "update_customer_status"
        )
        logger.info(
            "customer_status_updated",
            user_id=user_id,
            previous_status=previous.value,
            status=status.value,
        )
        return user

    async def stats(self) -> CustomerStats:
        async with self._uow_factory() as uow:
            total = await uow.analytics.count_customers()
            active = await uow.analytics.count_customers(UserStatus.ACTIVE)
            suspended = await uow.analytics.count_customers(UserStatus.SUSPENDED)
            pending = await uow.analytics.count_customers(UserStatus.PENDING_VERIFICATION)
        return CustomerStats(
            total=total,
            active=active,
            suspended=suspended,
            pending_verification=pending,
        )
