"""Customer, admin customer and savings account API endpoints."""

from typing import Annotated, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from src.application.dto import (
    MovementRequest,
    OpenAccountRequest,
    RegisterCustomerRequest,
    UpdateCustomerStatusRequest,
)
from src.application.services import CustomerService, SavingsService
from src.core.dependencies import get_customer_service, get_savings_service
from src.presentation.schemas import (
    AccountSchema,
    BalanceSchema,
    CreditSchema,
    CustomerDetailSchema,
    CustomerPageSchema,
    CustomerSchema,
    CustomerStatsSchema,
    ErrorResponseSchema,
    MovementRequestSchema,
    MovementResponseSchema,
    OpenAccountRequestSchema,
    RegisterCustomerSchema,
    RegistrationResponseSchema,
    TransactionSchema,
    UpdateCustomerStatusSchema,
)

customer_router = APIRouter(
    prefix="/customers",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Customer not found"},
        409: {"model": ErrorResponseSchema, "description": "Duplicate customer"},
    },
)

admin_customer_router = APIRouter(
    prefix="/admin/customers",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Customer not found"},
    },
)

savings_router = APIRouter(
    prefix="/savings",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request or insufficient funds"},
        404: {"model": ErrorResponseSchema, "description": "Account not found"},
        409: {"model": ErrorResponseSchema, "description": "Account inactive or concurrent update"},
    },
)

UserIdQuery = Annotated[str, Query(min_length=1, max_length=64, description="Acting user")]


# =============================================================================
# Customers
# =============================================================================

@customer_router.post(
    "",
    response_model=RegistrationResponseSchema,
    status_code=201,
    summary="Register Customer",
    description="Create a customer together with a zero-balance savings account.",
)
async def register_customer(
    request: RegisterCustomerSchema,
    customer_service: Annotated[CustomerService, Depends(get_customer_service)],
) -> RegistrationResponseSchema:
    user, account = await customer_service.register(
        RegisterCustomerRequest(
            email=request.email,
            first_name=request.first_name,
            last_name=request.last_name,
            kyc_verified=request.kyc_verified,
        )
    )
    return RegistrationResponseSchema(
        customer=CustomerSchema.from_entity(user),
        account=AccountSchema.from_entity(account),
    )


@customer_router.get("/{user_id}", response_model=CustomerSchema, summary="Get Customer")
async def get_customer(
    user_id: str,
    customer_service: Annotated[CustomerService, Depends(get_customer_service)],
) -> CustomerSchema:
    return CustomerSchema.from_entity(await customer_service.get_customer(user_id))


# =============================================================================
# Savings accounts
# =============================================================================

@savings_router.get("", response_model=List[AccountSchema], summary="List Savings Accounts")
async def list_accounts(
    user_id: UserIdQuery,
    savings_service: Annotated[SavingsService, Depends(get_savings_service)],
) -> List[AccountSchema]:
    accounts = await savings_service.list_accounts(user_id)
    return [AccountSchema.from_entity(a) for a in accounts]


@savings_router.post(
    "",
    response_model=AccountSchema,
    status_code=201,
    summary="Open Savings Account",
)
async def open_account(
    request: OpenAccountRequestSchema,
    savings_service: Annotated[SavingsService, Depends(get_savings_service)],
) -> AccountSchema:
    account = await savings_service.open_account(
        OpenAccountRequest(user_id=request.user_id, currency=request.currency)
    )
    return AccountSchema.from_entity(account)


@savings_router.get("/{account_id}", response_model=AccountSchema, summary="Get Savings Account")
async def get_account(
    account_id: UUID,
    user_id: UserIdQuery,
    savings_service: Annotated[SavingsService, Depends(get_savings_service)],
) -> AccountSchema:
    return AccountSchema.from_entity(await savings_service.get_account(user_id, account_id))


@savings_router.get("/{account_id}/balance", response_model=BalanceSchema, summary="Get Balance")
async def get_balance(
    account_id: UUID,
    user_id: UserIdQuery,
    savings_service: Annotated[SavingsService, Depends(get_savings_service)],
) -> BalanceSchema:
    account = await savings_service.get_balance(user_id, account_id)
    return BalanceSchema(
        account_id=account.id,
        account_number=account.account_number,
        balance=account.balance,
        currency=account.currency,
    )


@savings_router.get(
    "/{account_id}/transactions",
    response_model=List[TransactionSchema],
    summary="Account Transaction History",
)
async def account_history(
    account_id: UUID,
    user_id: UserIdQuery,
    savings_service: Annotated[SavingsService, Depends(get_savings_service)],
    limit: Annotated[int, Query(ge=1, le=500)] = 50,
) -> List[TransactionSchema]:
    entries = await savings_service.account_history(user_id, account_id, limit)
    return [TransactionSchema.from_entity(e) for e in entries]


@savings_router.post(
    "/{account_id}/deposit",
    response_model=MovementResponseSchema,
    summary="Deposit",
    description="Credit the account and record one DEPOSIT ledger entry atomically.",
)
async def deposit(
    account_id: UUID,
    request: MovementRequestSchema,
    savings_service: Annotated[SavingsService, Depends(get_savings_service)],
) -> MovementResponseSchema:
    result = await savings_service.deposit(
        MovementRequest(
            user_id=request.user_id,
            account_id=account_id,
            amount=request.amount,
            description=request.description,
        )
    )
    return MovementResponseSchema(
        transaction=TransactionSchema.from_entity(result.entry),
        new_balance=result.new_balance,
    )


@savings_router.post(
    "/{account_id}/withdraw",
    response_model=MovementResponseSchema,
    summary="Withdraw",
    description="Debit the account and record one WITHDRAWAL ledger entry atomically.",
)
async def withdraw(
    account_id: UUID,
    request: MovementRequestSchema,
    savings_service: Annotated[SavingsService, Depends(get_savings_service)],
) -> MovementResponseSchema:
    result = await savings_service.withdraw(
        MovementRequest(
            user_id=request.user_id,
            account_id=account_id,
            amount=request.amount,
            description=request.description,
        )
    )
    return MovementResponseSchema(
        transaction=TransactionSchema.from_entity(result.entry),
        new_balance=result.new_balance,
    )


@savings_router.post(
    "/{account_id}/deactivate",
    response_model=AccountSchema,
    summary="Deactivate Savings Account",
)
async def deactivate_account(
    account_id: UUID,
    user_id: UserIdQuery,
    savings_service: Annotated[SavingsService, Depends(get_savings_service)],
) -> AccountSchema:
    account = await savings_service.deactivate_account(user_id, account_id)
    return AccountSchema.from_entity(account)


# =============================================================================
# Admin customers
# =============================================================================

CustomerServiceDep = Annotated[CustomerService, Depends(get_customer_service)]


@admin_customer_router.get("", response_model=CustomerPageSchema, summary="List Customers")
async def list_customers(
    customer_service: CustomerServiceDep,
    skip: Annotated[int, Query(ge=0)] = 0,
    take: Annotated[int, Query(ge=1, le=100)] = 10,
    search: Annotated[Optional[str], Query(max_length=100)] = None,
) -> CustomerPageSchema:
    page = await customer_service.list_customers(skip, take, search)
    return CustomerPageSchema(
        customers=[CustomerSchema.from_entity(c) for c in page.customers],
        total=page.total,
        skip=page.skip,
        take=page.take,
    )


@admin_customer_router.get("/stats", response_model=CustomerStatsSchema, summary="Customer Counts")
async def customer_stats(customer_service: CustomerServiceDep) -> CustomerStatsSchema:
    stats = await customer_service.stats()
    return CustomerStatsSchema(**stats.__dict__)


@admin_customer_router.get("/{user_id}", response_model=CustomerDetailSchema, summary="Customer Detail")
async def get_customer_detail(user_id: str, customer_service: CustomerServiceDep) -> CustomerDetailSchema:
    detail = await customer_service.get_customer_detail(user_id)
    return CustomerDetailSchema(
        customer=CustomerSchema.from_entity(detail.customer),
        accounts=[AccountSchema.from_entity(a) for a in detail.accounts],
        credits=[CreditSchema.from_entity(c) for c in detail.credits],
    )


@admin_customer_router.put("/{user_id}/status", response_model=CustomerSchema, summary="Update Status")
async def update_customer_status(
    user_id: str,
    request: UpdateCustomerStatusSchema,
    customer_service: CustomerServiceDep,
) -> CustomerSchema:
    user = await customer_service.update_status(
        user_id,
        UpdateCustomerStatusRequest(status=request.status),
    )
    return CustomerSchema.from_entity(user)
