"""
ORM-level immutability of completed ledger entries.

Listeners fire before SQLAlchemy sends an UPDATE or DELETE for a
LedgerEntryModel. A completed entry can never be changed or removed; a
mistake is corrected with a new offsetting entry instead. Bulk statements
issued with raw SQL bypass these hooks.
"""

import structlog
from sqlalchemy import event, inspect

from src.domain.entities import LedgerEntryStatus
from src.domain.exceptions import LedgerImmutableException

from .models import LedgerEntryModel

logger = structlog.get_logger(__name__)


def _was_completed(target: LedgerEntryModel) -> bool:
    """Status as loaded from the store, ignoring unflushed changes."""
    history = inspect(target).attrs.status.history
    loaded = history.deleted or history.unchanged or history.added
    return bool(loaded) and loaded[0] == LedgerEntryStatus.COMPLETED.value


@event.listens_for(LedgerEntryModel, "before_update")
def _block_completed_update(mapper, connection, target: LedgerEntryModel) -> None:
    if _was_completed(target):
        logger.warning("ledger_mutation_blocked", operation="update", reference=target.reference)
        raise LedgerImmutableException(target.reference)


@event.listens_for(LedgerEntryModel, "before_delete")
def _block_completed_delete(mapper, connection, target: LedgerEntryModel) -> None:
    if _was_completed(target):
        logger.warning("ledger_mutation_blocked", operation="delete", reference=target.reference)
        raise LedgerImmutableException(target.reference)
