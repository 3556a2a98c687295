"""Schemas for transaction stats, notifications and admin analytics."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.entities import Notification


# =============================================================================
# Transactions
# =============================================================================

class TypeTotalsSchema(BaseModel):
    count: int
    total: Decimal


class TransactionStatsSchema(BaseModel):
    period: str = Field(..., examples=["month"])
    start_date: datetime
    end_date: datetime
    total_transactions: int
    by_type: Dict[str, TypeTotalsSchema]


class MonthlyActivitySchema(BaseModel):
    month: str = Field(..., examples=["2026-03"])
    transaction_count: int
    by_type: Dict[str, Decimal]


# =============================================================================
# Notifications
# =============================================================================

class NotificationSchema(BaseModel):
    notification_id: UUID
    type: str
    title: str
    message: str
    status: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    sent_at: Optional[datetime] = None
    read_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationSchema":
        return cls(
            notification_id=notification.id,
            type=notification.type.value,
            title=notification.title,
            message=notification.message,
            status=notification.status.value,
            metadata=notification.metadata,
            is_read=notification.is_read,
            sent_at=notification.sent_at,
            read_at=notification.read_at,
            created_at=notification.created_at,
        )


class CountSchema(BaseModel):
    count: int


# =============================================================================
# Admin analytics
# =============================================================================

class DashboardSchema(BaseModel):
    total_customers: int
    active_customers: int
    total_savings: Decimal
    total_credits: int
    pending_credits: int
    total_transactions: int


class CreditPerformanceSchema(BaseModel):
    total_requested: int
    counts: Dict[str, int]
    approval_rate: Decimal = Field(..., examples=["66.67"])
    rejection_rate: Decimal
    default_rate: Decimal


class SavingsStatsSchema(BaseModel):
    total_accounts: int
    total_balance: Decimal
    average_balance: Decimal


class DailyVolumeSchema(BaseModel):
    day: str = Field(..., examples=["2026-10-18"])
    count: int
    amount: Decimal


class PlatformTransactionStatsSchema(BaseModel):
    days: int
    total_transactions: int
    total_amount: Decimal
    average_amount: Decimal
    by_type: Dict[str, TypeTotalsSchema]
    daily: List[DailyVolumeSchema]


class DailySignupsSchema(BaseModel):
    day: str
    count: int


class UserGrowthSchema(BaseModel):
    days: int
    new_customers: int
    daily: List[DailySignupsSchema]


def totals_to_schema(by_type) -> Dict[str, TypeTotalsSchema]:
    return {
        entry_type: TypeTotalsSchema(count=totals.count, total=totals.total)
        for entry_type, totals in by_type.items()
    }


def rows_to_schema(rows: List) -> List[MonthlyActivitySchema]:
    return [
        MonthlyActivitySchema(
            month=row.month,
            transaction_count=row.transaction_count,
            by_type=row.by_type,
        )
        for row in rows
    ]
