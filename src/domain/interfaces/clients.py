"""External collaborator interfaces."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class NotificationSink(ABC):
    """
    Fire-and-forget delivery of user notifications.

    Callers never depend on delivery success: implementations log failures
    and report them through the return value instead of raising.
    """

    @abstractmethod
    async def send(
        self,
        user_id: str,
        title: str,
        message: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> bool:
        """
        Deliver a notification to a user.

        Args:
            user_id: Recipient
            title: Short headline
            message: Body text
            metadata: Extra structured data (e.g. credit_id)

        Returns:
            True if the notification was delivered
        """
        ...
