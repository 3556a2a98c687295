"""Data Transfer Objects for application layer."""

from .credit import (
    ApproveRequest,
    CreditPage,
    CreditRequest,
    CreditSchedule,
    CreditStats,
    RejectRequest,
    RepaymentRequest,
    RepaymentResult,
)
from .customers import (
    CustomerDetail,
    CustomerPage,
    CustomerStats,
    RegisterCustomerRequest,
    UpdateCustomerStatusRequest,
)
from .notifications import NotificationFilter
from .savings import (
    DepositRequest,
    MovementRequest,
    MovementResult,
    OpenAccountRequest,
    WithdrawRequest,
    validate_amount,
)
from .transactions import (
    PERIOD_DAYS,
    MonthlyActivity,
    TransactionFilter,
    TransactionStats,
    TypeTotals,
    validate_period,
)

__all__ = [
    "ApproveRequest",
    "CreditPage",
    "CreditRequest",
    "CreditSchedule",
    "CreditStats",
    "RejectRequest",
    "RepaymentRequest",
    "RepaymentResult",
    "CustomerDetail",
    "CustomerPage",
    "CustomerStats",
    "RegisterCustomerRequest",
    "UpdateCustomerStatusRequest",
    "NotificationFilter",
    "DepositRequest",
    "MovementRequest",
    "MovementResult",
    "OpenAccountRequest",
    "WithdrawRequest",
    "validate_amount",
    "PERIOD_DAYS",
    "MonthlyActivity",
    "TransactionFilter",
    "TransactionStats",
    "TypeTotals",
    "validate_period",
]
