"""PostgreSQL repository implementation for inbox notifications."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Notification, NotificationStatus, NotificationType
from src.domain.interfaces import NotificationRepository
from src.infrastructure.database.models import NotificationModel


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL-backed notification repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, notification: Notification) -> Notification:
        model = NotificationModel(
            id=notification.id,
            user_id=notification.user_id,
            type=notification.type.value,
            title=notification.title,
            message=notification.message,
            status=notification.status.value,
            metadata_=dict(notification.metadata),
            sent_at=notification.sent_at,
            read_at=notification.read_at,
            created_at=notification.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return notification

    async def get(self, notification_id: UUID) -> Optional[Notification]:
        model = await self._session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    async def update(self, notification: Notification) -> Notification:
        model = await self._session.get(NotificationModel, notification.id)
        if model is None:
            return await self.add(notification)

        model.status = notification.status.value
        model.sent_at = notification.sent_at
        model.read_at = notification.read_at
        await self._session.flush()
        return notification

    async def delete(self, notification_id: UUID) -> None:
        await self._session.execute(
            delete(NotificationModel).where(NotificationModel.id == notification_id)
        )

    async def list_for_user(
        self,
        user_id: str,
        notification_type: Optional[NotificationType] = None,
        unread_only: bool = False,
        limit: int = 50,
    ) -> List[Notification]:
        stmt = select(NotificationModel).where(NotificationModel.user_id == user_id)
        if notification_type is not None:
            stmt = stmt.where(NotificationModel.type == notification_type.value)
        if unread_only:
            stmt = stmt.where(NotificationModel.read_at.is_(None))
        stmt = stmt.order_by(NotificationModel.created_at.desc()).limit(limit)

        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def mark_all_read(self, user_id: str) -> int:
        now = datetime.utcnow()
        result = await self._session.execute(
            update(NotificationModel)
            .where(
                NotificationModel.user_id == user_id,
                NotificationModel.read_at.is_(None),
            )
            .values(status=NotificationStatus.READ.value, read_at=now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def count_unread(self, user_id: str) -> int:
        count = await self._session.scalar(
            select(func.count(NotificationModel.id)).where(
                NotificationModel.user_id == user_id,
                NotificationModel.read_at.is_(None),
            )
        )
        return count or 0

    def _to_entity(self, model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=NotificationType(model.type),
            title=model.title,
            message=model.message,
            status=NotificationStatus(model.status),
            metadata=dict(model.metadata_ or {}),
            sent_at=model.sent_at,
            read_at=model.read_at,
            created_at=model.created_at,
        )
