"""Credit API endpoints for customers and admins."""

from typing import Annotated, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from src.application.dto import (
    ApproveRequest,
    CreditPage,
    CreditRequest,
    RejectRequest,
    RepaymentRequest,
)
from src.application.services import CreditService
from src.core.dependencies import get_credit_service
from src.domain.entities import CreditStatus
from src.presentation.schemas import (
    ApproveRequestSchema,
    CreditPageSchema,
    CreditRequestSchema,
    CreditSchema,
    CreditStatsSchema,
    DisburseRequestSchema,
    ErrorResponseSchema,
    InstallmentSchema,
    RejectRequestSchema,
    RepaymentRequestSchema,
    RepaymentResponseSchema,
    ScheduleResponseSchema,
    TransactionSchema,
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    404: {"model": ErrorResponseSchema, "description": "Credit not found"},
    409: {"model": ErrorResponseSchema, "description": "Illegal state or concurrent update"},
}

credit_router = APIRouter(prefix="/credits", responses=ERROR_RESPONSES)
admin_credit_router = APIRouter(prefix="/admin/credits", responses=ERROR_RESPONSES)

UserIdQuery = Annotated[str, Query(min_length=1, max_length=64, description="Acting user")]
CreditServiceDep = Annotated[CreditService, Depends(get_credit_service)]


def _page_schema(page: CreditPage) -> CreditPageSchema:
    return CreditPageSchema(
        credits=[CreditSchema.from_entity(c) for c in page.credits],
        total=page.total,
        skip=page.skip,
        take=page.take,
    )


# =============================================================================
# Customer endpoints
# =============================================================================

@credit_router.post(
    "",
    response_model=CreditSchema,
    status_code=201,
    summary="Request Credit",
    description="""
    Request a credit line. The user is scored; scores of 700 and above are
    approved immediately, lower scores stay PENDING for admin review.
    """,
)
async def request_credit(
    request: CreditRequestSchema,
    credit_service: CreditServiceDep,
) -> CreditSchema:
    credit = await credit_service.request_credit(
        CreditRequest(
            user_id=request.user_id,
            amount=request.amount,
            tenure=request.tenure,
            purpose=request.purpose,
        )
    )
    return CreditSchema.from_entity(credit)


@credit_router.get("", response_model=List[CreditSchema], summary="List My Credits")
async def list_credits(
    user_id: UserIdQuery,
    credit_service: CreditServiceDep,
) -> List[CreditSchema]:
    credits = await credit_service.list_credits(user_id)
    return [CreditSchema.from_entity(c) for c in credits]


@credit_router.get("/{credit_id}", response_model=CreditSchema, summary="Get Credit")
async def get_credit(
    credit_id: UUID,
    user_id: UserIdQuery,
    credit_service: CreditServiceDep,
) -> CreditSchema:
    return CreditSchema.from_entity(await credit_service.get_credit(user_id, credit_id))


@credit_router.get(
    "/{credit_id}/schedule",
    response_model=ScheduleResponseSchema,
    summary="Repayment Schedule",
    description="Projected installments. Recomputed on every call; does not reflect payments made.",
)
async def get_schedule(
    credit_id: UUID,
    user_id: UserIdQuery,
    credit_service: CreditServiceDep,
) -> ScheduleResponseSchema:
    schedule = await credit_service.get_schedule(user_id, credit_id)
    return ScheduleResponseSchema(
        credit_id=schedule.credit.id,
        total_repayable=schedule.credit.total_repayable,
        installments=[InstallmentSchema.from_model(i) for i in schedule.installments],
    )


@credit_router.post(
    "/{credit_id}/repay",
    response_model=RepaymentResponseSchema,
    summary="Repay Credit",
)
async def repay_credit(
    credit_id: UUID,
    request: RepaymentRequestSchema,
    credit_service: CreditServiceDep,
) -> RepaymentResponseSchema:
    result = await credit_service.repay(
        RepaymentRequest(user_id=request.user_id, credit_id=credit_id, amount=request.amount)
    )
    return RepaymentResponseSchema(
        transaction=TransactionSchema.from_entity(result.entry),
        credit=CreditSchema.from_entity(result.credit),
    )


# =============================================================================
# Admin endpoints
# =============================================================================

@admin_credit_router.get("/pending", response_model=CreditPageSchema, summary="Pending Credits")
async def list_pending(
    credit_service: CreditServiceDep,
    skip: Annotated[int, Query(ge=0)] = 0,
    take: Annotated[int, Query(ge=1, le=100)] = 10,
) -> CreditPageSchema:
    return _page_schema(await credit_service.list_pending(skip, take))


@admin_credit_router.get("/stats", response_model=CreditStatsSchema, summary="Credit Counts")
async def credit_stats(credit_service: CreditServiceDep) -> CreditStatsSchema:
    stats = await credit_service.stats()
    return CreditStatsSchema(**stats.__dict__)


@admin_credit_router.get("", response_model=CreditPageSchema, summary="All Credits")
async def list_all(
    credit_service: CreditServiceDep,
    status: Annotated[Optional[CreditStatus], Query()] = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    take: Annotated[int, Query(ge=1, le=100)] = 10,
) -> CreditPageSchema:
    return _page_schema(await credit_service.list_all(status, skip, take))


@admin_credit_router.get("/{credit_id}", response_model=CreditSchema, summary="Get Any Credit")
async def get_credit_admin(credit_id: UUID, credit_service: CreditServiceDep) -> CreditSchema:
    return CreditSchema.from_entity(await credit_service.get_credit_admin(credit_id))


@admin_credit_router.post("/{credit_id}/approve", response_model=CreditSchema, summary="Approve")
async def approve_credit(
    credit_id: UUID,
    request: ApproveRequestSchema,
    credit_service: CreditServiceDep,
) -> CreditSchema:
    credit = await credit_service.approve(credit_id, ApproveRequest(admin_id=request.admin_id))
    return CreditSchema.from_entity(credit)


@admin_credit_router.post("/{credit_id}/reject", response_model=CreditSchema, summary="Reject")
async def reject_credit(
    credit_id: UUID,
    request: RejectRequestSchema,
    credit_service: CreditServiceDep,
) -> CreditSchema:
    credit = await credit_service.reject(
        credit_id, RejectRequest(admin_id=request.admin_id, reason=request.reason)
    )
    return CreditSchema.from_entity(credit)


@admin_credit_router.post("/{credit_id}/disburse", response_model=CreditSchema, summary="Disburse")
async def disburse_credit(
    credit_id: UUID,
    credit_service: CreditServiceDep,
    request: Optional[DisburseRequestSchema] = None,
) -> CreditSchema:
    account_id = request.account_id if request else None
    return CreditSchema.from_entity(await credit_service.disburse(credit_id, account_id))


@admin_credit_router.post("/{credit_id}/activate", response_model=CreditSchema, summary="Activate")
async def activate_credit(credit_id: UUID, credit_service: CreditServiceDep) -> CreditSchema:
    return CreditSchema.from_entity(await credit_service.activate(credit_id))


@admin_credit_router.post(
    "/{credit_id}/default",
    response_model=CreditSchema,
    summary="Mark Defaulted",
)
async def default_credit(credit_id: UUID, credit_service: CreditServiceDep) -> CreditSchema:
    return CreditSchema.from_entity(await credit_service.mark_defaulted(credit_id))
