"""Pydantic schemas for API request/response validation."""

from .credit import (
    ApproveRequestSchema,
    CreditPageSchema,
    CreditRequestSchema,
    CreditSchema,
    CreditStatsSchema,
    DisburseRequestSchema,
    InstallmentSchema,
    RejectRequestSchema,
    RepaymentRequestSchema,
    RepaymentResponseSchema,
    RepaymentSchema,
    ScheduleResponseSchema,
)
from .customers import (
    CustomerDetailSchema,
    CustomerPageSchema,
    CustomerSchema,
    CustomerStatsSchema,
    RegisterCustomerSchema,
    RegistrationResponseSchema,
    UpdateCustomerStatusSchema,
)
from .error import ErrorResponseSchema
from .reports import (
    CountSchema,
    CreditPerformanceSchema,
    DailySignupsSchema,
    DailyVolumeSchema,
    DashboardSchema,
    MonthlyActivitySchema,
    NotificationSchema,
    PlatformTransactionStatsSchema,
    SavingsStatsSchema,
    TransactionStatsSchema,
    TypeTotalsSchema,
    UserGrowthSchema,
)
from .savings import (
    AccountSchema,
    BalanceSchema,
    MovementRequestSchema,
    MovementResponseSchema,
    OpenAccountRequestSchema,
    TransactionSchema,
)

__all__ = [
    "ApproveRequestSchema",
    "CreditPageSchema",
    "CreditRequestSchema",
    "CreditSchema",
    "CreditStatsSchema",
    "DisburseRequestSchema",
    "InstallmentSchema",
    "RejectRequestSchema",
    "RepaymentRequestSchema",
    "RepaymentResponseSchema",
    "RepaymentSchema",
    "ScheduleResponseSchema",
    "CustomerDetailSchema",
    "CustomerPageSchema",
    "CustomerSchema",
    "CustomerStatsSchema",
    "RegisterCustomerSchema",
    "RegistrationResponseSchema",
    "UpdateCustomerStatusSchema",
    "ErrorResponseSchema",
    "CountSchema",
    "CreditPerformanceSchema",
    "DailySignupsSchema",
    "DailyVolumeSchema",
    "DashboardSchema",
    "MonthlyActivitySchema",
    "NotificationSchema",
    "PlatformTransactionStatsSchema",
    "SavingsStatsSchema",
    "TransactionStatsSchema",
    "TypeTotalsSchema",
    "UserGrowthSchema",
    "AccountSchema",
    "BalanceSchema",
    "MovementRequestSchema",
    "MovementResponseSchema",
    "OpenAccountRequestSchema",
    "TransactionSchema",
]
