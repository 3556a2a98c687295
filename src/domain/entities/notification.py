"""Notification entity for the in-app inbox."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4


class NotificationType(str, Enum):
    IN_APP = "IN_APP"
    EMAIL = "EMAIL"
    SMS = "SMS"


class NotificationStatus(str, Enum):
    PENDING = "PENDING"
    SENT = "SENT"
    READ = "READ"


@dataclass
class Notification:
    """
    A message shown to a user.

    There is no email/SMS transport: a notification is stored and marked
    sent right away, then read from the inbox.
    """

    user_id: str
    title: str
    message: str
    type: NotificationType = NotificationType.IN_APP
    metadata: dict[str, Any] = field(default_factory=dict)
    status: NotificationStatus = NotificationStatus.PENDING
    id: UUID = field(default_factory=uuid4)
    sent_at: datetime | None = None
    read_at: datetime | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_read(self) -> bool:
        return self.read_at is not None

    def mark_sent(self) -> None:
        """Mark the notification as delivered to the inbox."""
        self.status = NotificationStatus.SENT
        self.sent_at = datetime.utcnow()

    def mark_read(self) -> None:
        self.status = NotificationStatus.READ
        self.read_at = datetime.utcnow()
