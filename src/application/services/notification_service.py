"""Notification service - the user's in-app inbox."""

from typing import List
from uuid import UUID

import structlog

from src.domain.entities import Notification
from src.domain.exceptions import InvalidRequestException, NotificationNotFoundException
from src.domain.interfaces import UnitOfWork, UnitOfWorkFactory
from src.application.dto import NotificationFilter

logger = structlog.get_logger(__name__)


async def _load_owned(uow: UnitOfWork, user_id: str, notification_id: UUID) -> Notification:
    notification = await uow.notifications.get(notification_id)
    if notification is None or notification.user_id != user_id:
        raise NotificationNotFoundException(str(notification_id))
    return notification


class NotificationService:
    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def list_notifications(
        self,
        user_id: str,
        filters: NotificationFilter = NotificationFilter(),
    ) -> List[Notification]:
        errors = filters.validate()
        if errors:
            raise InvalidRequestException("; ".join(errors))

        async with self._uow_factory() as uow:
            return await uow.notifications.list_for_user(
                user_id,
                notification_type=filters.notification_type,
                unread_only=filters.unread_only,
                limit=filters.limit,
            )

    async def get_notification(self, user_id: str, notification_id: UUID) -> Notification:
        async with self._uow_factory() as uow:
            return await _load_owned(uow, user_id, notification_id)

    async def mark_read(self, user_id: str, notification_id: UUID) -> Notification:
        async with self._uow_factory() as uow:
            notification = await _load_owned(uow, user_id, notification_id)
            if not notification.is_read:
                notification.mark_read()
                await uow.notifications.update(notification)
        return notification

    async def mark_all_read(self, user_id: str) -> int:
        async with self._uow_factory() as uow:
            count = await uow.notifications.mark_all_read(user_id)
        logger.info("notifications_marked_read", user_id=user_id, count=count)
        return count

    async def delete(self, user_id: str, notification_id: UUID) -> None:
        async with self._uow_factory() as uow:
            await _load_owned(uow, user_id, notification_id)
            await uow.notifications.delete(notification_id)
        logger.info("notification_deleted", user_id=user_id, notification_id=str(notification_id))

    async def unread_count(self, user_id: str) -> int:
        async with self._uow_factory() as uow:
            return await uow.notifications.count_unread(user_id)
