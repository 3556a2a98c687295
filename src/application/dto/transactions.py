"""Data transfer objects for transaction history and analytics."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from src.domain.entities import LedgerEntryStatus, LedgerEntryType
from src.domain.money import ZERO

# Length of each stats period in days
PERIOD_DAYS = {
    "week": 7,
    "month": 30,
    "year": 365,
}


@dataclass(frozen=True)
class TransactionFilter:
    """Filters for a user's transaction history."""
    entry_type: Optional[LedgerEntryType] = None
    status: Optional[LedgerEntryStatus] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    limit: int = 100

    def validate(self) -> List[str]:
        errors = []

        if self.start and self.end and self.start > self.end:
            errors.append("start_date must not be after end_date")

        if not (1 <= self.limit <= 500):
            errors.append("limit must be between 1 and 500")

        return errors


def validate_period(period: str) -> List[str]:
    if period not in PERIOD_DAYS:
        return [f"period must be one of: {', '.join(PERIOD_DAYS)}"]
    return []


@dataclass
class TypeTotals:
    """Count and sum of one entry type."""

    count: int = 0
    total: Decimal = ZERO

    def add(self, amount: Decimal) -> None:
        self.count += 1
        self.total += amount

    def to_dict(self) -> dict:
        return {"count": self.count, "total": str(self.total)}


def empty_totals() -> Dict[str, TypeTotals]:
    return {entry_type.value: TypeTotals() for entry_type in LedgerEntryType}


@dataclass
class TransactionStats:
    """Completed-entry totals for a user over a period."""

    period: str
    start_date: datetime
    end_date: datetime
    total_transactions: int = 0
    by_type: Dict[str, TypeTotals] = field(default_factory=empty_totals)


@dataclass
class MonthlyActivity:
    """Completed-entry totals for one calendar month (YYYY-MM)."""

    month: str
    transaction_count: int = 0
    by_type: Dict[str, Decimal] = field(
        default_factory=lambda: {entry_type.value: ZERO for entry_type in LedgerEntryType}
    )
