"""In-app implementation of NotificationSink."""

from typing import Any, Dict, Optional

import structlog

from src.core.metrics import record_notification
from src.domain.entities import Notification, NotificationType
from src.domain.interfaces import NotificationSink, UnitOfWorkFactory

logger = structlog.get_logger(__name__)


class InAppNotificationSink(NotificationSink):
    """
    Writes notifications to the user's inbox.

    Each send runs in its own transaction, after the business transaction
    that triggered it has committed. A failed send is logged and reported
    as False; it never fails the caller.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def send(
        self,
        user_id: str,
        title: str,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> bool:
        notification = Notification(
            user_id=user_id,
            title=title,
            message=message,
            type=NotificationType.IN_APP,
            metadata=metadata or {},
        )
        notification.mark_sent()

        try:
            async with self._uow_factory() as uow:
                await uow.notifications.add(notification)
        except Exception as e:
            logger.error(
                "notification_failed",
                user_id=user_id,
                title=title,
                error=str(e),
            )
            record_notification(sent=False)
            return False

        logger.info(
            "notification_sent",
            user_id=user_id,
            notification_id=str(notification.id),
            title=title,
        )
        record_notification(sent=True)
        return True
