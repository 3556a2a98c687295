"""Run a unit of work, re-running it when a concurrent writer wins the race."""

from typing import Awaitable, Callable, Optional, TypeVar

import structlog

from src.core.config import settings
from src.core.metrics import record_conflict_retry
from src.domain.exceptions import ConflictException
from src.domain.interfaces import UnitOfWork, UnitOfWorkFactory

logger = structlog.get_logger(__name__)

T = TypeVar("T")


async def run_in_transaction(
    uow_factory: UnitOfWorkFactory,
    work: Callable[[UnitOfWork], Awaitable[T]],
    operation: str,
    max_retries: Optional[int] = None,
) -> T:
    """
    Execute `work` inside a fresh unit of work.

    The whole unit is re-run from scratch (new session, fresh reads) when it
    fails with ConflictException, up to `max_retries` times. Any other error
    propagates on the first attempt.

    Args:
        uow_factory: Creates a new unit of work per attempt
        work: Coroutine function doing the reads and writes
        operation: Name used in logs and metrics
        max_retries: Overrides settings.max_conflict_retries

    Returns:
        Whatever `work` returns

    Raises:
        ConflictException: If every attempt conflicted
    """
    retries = settings.max_conflict_retries if max_retries is None else max_retries
    attempt = 0

    while True:
        try:
            async with uow_factory() as uow:
                return await work(uow)
        except ConflictException:
            if attempt >= retries:
                logger.warning(
                    "transaction_conflict_exhausted",
                    operation=operation,
                    attempts=attempt + 1,
                )
                raise
            attempt += 1
            record_conflict_retry(operation)
            logger.info("transaction_conflict_retry", operation=operation, attempt=attempt)
