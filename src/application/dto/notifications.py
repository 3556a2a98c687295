"""Data transfer objects for the notification inbox."""

from dataclasses import dataclass
from typing import List, Optional

from src.domain.entities import NotificationType


@dataclass(frozen=True)
class NotificationFilter:
    notification_type: Optional[NotificationType] = None
    unread_only: bool = False
    limit: int = 50

    def validate(self) -> List[str]:
        if not (1 <= self.limit <= 200):
            return ["limit must be between 1 and 200"]
        return []
