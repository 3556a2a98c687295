"""Transaction history, notification inbox and admin analytics endpoints."""

from datetime import datetime
from typing import Annotated, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from src.application.dto import NotificationFilter, TransactionFilter
from src.application.services import (
    AnalyticsService,
    NotificationService,
    TransactionService,
)
from src.core.dependencies import (
    get_analytics_service,
    get_notification_service,
    get_transaction_service,
)
from src.domain.entities import LedgerEntryStatus, LedgerEntryType, NotificationType
from src.presentation.schemas import (
    CountSchema,
    CreditPerformanceSchema,
    DailySignupsSchema,
    DailyVolumeSchema,
    DashboardSchema,
    ErrorResponseSchema,
    MonthlyActivitySchema,
    NotificationSchema,
    PlatformTransactionStatsSchema,
    SavingsStatsSchema,
    TransactionSchema,
    TransactionStatsSchema,
    UserGrowthSchema,
)
from src.presentation.schemas.reports import rows_to_schema, totals_to_schema

ERROR_RESPONSES = {
    400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    404: {"model": ErrorResponseSchema, "description": "Not found"},
}

transaction_router = APIRouter(prefix="/transactions", responses=ERROR_RESPONSES)
notification_router = APIRouter(prefix="/notifications", responses=ERROR_RESPONSES)
analytics_router = APIRouter(prefix="/admin/analytics", responses=ERROR_RESPONSES)

UserIdQuery = Annotated[str, Query(min_length=1, max_length=64, description="Acting user")]


# =============================================================================
# Transactions
# =============================================================================

@transaction_router.get("", response_model=List[TransactionSchema], summary="Transaction History")
async def list_transactions(
    user_id: UserIdQuery,
    transaction_service: Annotated[TransactionService, Depends(get_transaction_service)],
    type: Annotated[Optional[LedgerEntryType], Query()] = None,
    status: Annotated[Optional[LedgerEntryStatus], Query()] = None,
    start_date: Annotated[Optional[datetime], Query()] = None,
    end_date: Annotated[Optional[datetime], Query()] = None,
    limit: Annotated[int, Query()] = 100,
) -> List[TransactionSchema]:
    entries = await transaction_service.list_transactions(
        user_id,
        TransactionFilter(
            entry_type=type,
            status=status,
            start=start_date,
            end=end_date,
            limit=limit,
        ),
    )
    return [TransactionSchema.from_entity(e) for e in entries]


@transaction_router.get("/stats", response_model=TransactionStatsSchema, summary="Period Stats")
async def transaction_stats(
    user_id: UserIdQuery,
    transaction_service: Annotated[TransactionService, Depends(get_transaction_service)],
    period: Annotated[str, Query(description="week, month or year")] = "month",
) -> TransactionStatsSchema:
    stats = await transaction_service.get_stats(user_id, period)
    return TransactionStatsSchema(
        period=stats.period,
        start_date=stats.start_date,
        end_date=stats.end_date,
        total_transactions=stats.total_transactions,
        by_type=totals_to_schema(stats.by_type),
    )


@transaction_router.get(
    "/analytics/monthly",
    response_model=List[MonthlyActivitySchema],
    summary="Monthly Activity",
)
async def monthly_analytics(
    user_id: UserIdQuery,
    transaction_service: Annotated[TransactionService, Depends(get_transaction_service)],
    months: Annotated[int, Query()] = 6,
) -> List[MonthlyActivitySchema]:
    return rows_to_schema(await transaction_service.get_monthly_analytics(user_id, months))


@transaction_router.get("/{transaction_id}", response_model=TransactionSchema, summary="Get Transaction")
async def get_transaction(
    transaction_id: UUID,
    user_id: UserIdQuery,
    transaction_service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> TransactionSchema:
    entry = await transaction_service.get_transaction(user_id, transaction_id)
    return TransactionSchema.from_entity(entry)


# =============================================================================
# Notifications
# =============================================================================

NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]


@notification_router.get("", response_model=List[NotificationSchema], summary="Inbox")
async def list_notifications(
    user_id: UserIdQuery,
    notification_service: NotificationServiceDep,
    type: Annotated[Optional[NotificationType], Query()] = None,
    unread_only: bool = False,
    limit: Annotated[int, Query()] = 50,
) -> List[NotificationSchema]:
    notifications = await notification_service.list_notifications(
        user_id,
        NotificationFilter(notification_type=type, unread_only=unread_only, limit=limit),
    )
    return [NotificationSchema.from_entity(n) for n in notifications]


@notification_router.get("/unread-count", response_model=CountSchema, summary="Unread Count")
async def unread_count(user_id: UserIdQuery, notification_service: NotificationServiceDep) -> CountSchema:
    return CountSchema(count=await notification_service.unread_count(user_id))


@notification_router.post("/read-all", response_model=CountSchema, summary="Mark All Read")
async def mark_all_read(user_id: UserIdQuery, notification_service: NotificationServiceDep) -> CountSchema:
    return CountSchema(count=await notification_service.mark_all_read(user_id))


@notification_router.get("/{notification_id}", response_model=NotificationSchema)
async def get_notification(
    notification_id: UUID,
    user_id: UserIdQuery,
    notification_service: NotificationServiceDep,
) -> NotificationSchema:
    notification = await notification_service.get_notification(user_id, notification_id)
    return NotificationSchema.from_entity(notification)


@notification_router.post("/{notification_id}/read", response_model=NotificationSchema)
async def mark_read(
    notification_id: UUID,
    user_id: UserIdQuery,
    notification_service: NotificationServiceDep,
) -> NotificationSchema:
    notification = await notification_service.mark_read(user_id, notification_id)
    return NotificationSchema.from_entity(notification)


@notification_router.delete("/{notification_id}", status_code=204)
async def delete_notification(
    notification_id: UUID,
    user_id: UserIdQuery,
    notification_service: NotificationServiceDep,
) -> Response:
    await notification_service.delete(user_id, notification_id)
    return Response(status_code=204)


# =============================================================================
# Admin analytics
# =============================================================================

AnalyticsServiceDep = Annotated[AnalyticsService, Depends(get_analytics_service)]


@analytics_router.get("/dashboard", response_model=DashboardSchema, summary="Dashboard")
async def dashboard(analytics_service: AnalyticsServiceDep) -> DashboardSchema:
    stats = await analytics_service.dashboard()
    return DashboardSchema(**stats.__dict__)


@analytics_router.get("/credits", response_model=CreditPerformanceSchema, summary="Credit Performance")
async def credit_performance(analytics_service: AnalyticsServiceDep) -> CreditPerformanceSchema:
    performance = await analytics_service.credit_performance()
    return CreditPerformanceSchema(**performance.__dict__)


@analytics_router.get("/savings", response_model=SavingsStatsSchema, summary="Savings Stats")
async def savings_stats(analytics_service: AnalyticsServiceDep) -> SavingsStatsSchema:
    stats = await analytics_service.savings_stats()
    return SavingsStatsSchema(**stats.__dict__)


@analytics_router.get(
    "/transactions",
    response_model=PlatformTransactionStatsSchema,
    summary="Platform Transaction Stats",
)
async def platform_transaction_stats(
    analytics_service: AnalyticsServiceDep,
    days: Annotated[int, Query()] = 30,
) -> PlatformTransactionStatsSchema:
    stats = await analytics_service.transaction_stats(days)
    return PlatformTransactionStatsSchema(
        days=stats.days,
        total_transactions=stats.total_transactions,
        total_amount=stats.total_amount,
        average_amount=stats.average_amount,
        by_type=totals_to_schema(stats.by_type),
        daily=[DailyVolumeSchema(day=d.day, count=d.count, amount=d.amount) for d in stats.daily],
    )


@analytics_router.get("/user-growth", response_model=UserGrowthSchema, summary="User Growth")
async def user_growth(
    analytics_service: AnalyticsServiceDep,
    days: Annotated[int, Query()] = 30,
) -> UserGrowthSchema:
    growth = await analytics_service.user_growth(days)
    return UserGrowthSchema(
        days=growth.days,
        new_customers=growth.new_customers,
        daily=[DailySignupsSchema(day=d.day, count=d.count) for d in growth.daily],
    )
