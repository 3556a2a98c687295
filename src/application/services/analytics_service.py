"""Analytics service - read-only rollups for the admin dashboard."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List

from src.domain.entities import CreditStatus, UserStatus
from src.domain.exceptions import InvalidRequestException
from src.domain.interfaces import UnitOfWorkFactory
from src.domain.money import ZERO, round_money
from src.application.dto import TypeTotals
from src.application.dto.transactions import empty_totals

# Statuses a credit can only reach after approval
APPROVED_OR_LATER = (
    CreditStatus.APPROVED,
    CreditStatus.DISBURSED,
    CreditStatus.ACTIVE,
    CreditStatus.COMPLETED,
    CreditStatus.DEFAULTED,
)
# Statuses in which money has left the platform
DISBURSED_OR_LATER = (
    CreditStatus.DISBURSED,
    CreditStatus.ACTIVE,
    CreditStatus.COMPLETED,
    CreditStatus.DEFAULTED,
)


def percentage(part: int, whole: int) -> Decimal:
    """part / whole as a percentage with two decimals (0.00 when whole is 0)."""
    if whole <= 0:
        return Decimal("0.00")
    return (Decimal(part) * 100 / Decimal(whole)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class DashboardStats:
    total_customers: int
    active_customers: int
    total_savings: Decimal
    total_credits: int
    pending_credits: int
    total_transactions: int


@dataclass(frozen=True)
class CreditPerformance:
    """Counts per status plus approval, rejection and default rates (percent)."""

    total_requested: int
    counts: Dict[str, int]
    approval_rate: Decimal
    rejection_rate: Decimal
    default_rate: Decimal


@dataclass(frozen=True)
class SavingsStats:
    total_accounts: int
    total_balance: Decimal
    average_balance: Decimal


@dataclass(frozen=True)
class DailyVolume:
    day: str
    count: int
    amount: Decimal


@dataclass
class PlatformTransactionStats:
    days: int
    total_transactions: int = 0
    total_amount: Decimal = ZERO
    average_amount: Decimal = ZERO
    by_type: Dict[str, TypeTotals] = field(default_factory=empty_totals)
    daily: List[DailyVolume] = field(default_factory=list)


@dataclass(frozen=True)
class DailySignups:
    day: str
    count: int


@dataclass(frozen=True)
class UserGrowth:
    """New customers per day over the last `days` days."""

    days: int
    new_customers: int
    daily: List[DailySignups]


def _window_start(days: int, now: datetime | None) -> datetime:
    if not (1 <= days <= 365):
        raise InvalidRequestException("days must be between 1 and 365")
    return (now or datetime.utcnow()) - timedelta(days=days)


class AnalyticsService:
    """Aggregate queries. Nothing here writes."""

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def dashboard(self) -> DashboardStats:
        async with self._uow_factory() as uow:
            total_customers = await uow.analytics.count_customers()
            active_customers = await uow.analytics.count_customers(UserStatus.ACTIVE)
            _, total_savings, _ = await uow.analytics.savings_summary()
            counts = await uow.credits.count_by_status()
            total_transactions = await uow.analytics.count_ledger_entries()

        return DashboardStats(
            total_customers=total_customers,
            active_customers=active_customers,
            total_savings=total_savings,
            total_credits=sum(counts.values()),
            pending_credits=counts[CreditStatus.PENDING],
            total_transactions=total_transactions,
        )

    async def credit_performance(self) -> CreditPerformance:
        """
        Lifecycle outcome rates.

        approval_rate = credits approved at some point / all credits
        rejection_rate = rejected / all credits
        default_rate = defaulted / credits that were disbursed
        """
        async with self._uow_factory() as uow:
            counts = await uow.credits.count_by_status()

        total = sum(counts.values())
        approved = sum(counts[status] for status in APPROVED_OR_LATER)
        disbursed = sum(counts[status] for status in DISBURSED_OR_LATER)

        return CreditPerformance(
            total_requested=total,
            counts={status.value: count for status, count in counts.items()},
            approval_rate=percentage(approved, total),
            rejection_rate=percentage(counts[CreditStatus.REJECTED], total),
            default_rate=percentage(counts[CreditStatus.DEFAULTED], disbursed),
        )

    async def savings_stats(self) -> SavingsStats:
        async with self._uow_factory() as uow:
            count, total, average = await uow.analytics.savings_summary()
        return SavingsStats(total_accounts=count, total_balance=total, average_balance=average)

    async def transaction_stats(self, days: int = 30, now: datetime | None = None) -> PlatformTransactionStats:
        """Platform-wide ledger volume over the last `days` days, all statuses."""
        since = _window_start(days, now)
        async with self._uow_factory() as uow:
            totals = await uow.analytics.ledger_totals_since(since)
            daily = await uow.analytics.ledger_daily_since(since)

        stats = PlatformTransactionStats(days=days)
        for entry_type, (count, amount) in totals.items():
            stats.by_type[entry_type] = TypeTotals(count=count, total=amount)
            stats.total_transactions += count
            stats.total_amount += amount
        if stats.total_transactions:
            stats.average_amount = round_money(stats.total_amount / stats.total_transactions)
        stats.daily = [DailyVolume(day=day, count=count, amount=amount) for day, count, amount in daily]
        return stats

    async def user_growth(self, days: int = 30, now: datetime | None = None) -> UserGrowth:
        since = _window_start(days, now)
        async with self._uow_factory() as uow:
            rows = await uow.analytics.customer_signups_since(since)

        daily = [DailySignups(day=day, count=count) for day, count in rows]
        return UserGrowth(days=days, new_customers=sum(d.count for d in daily), daily=daily)
