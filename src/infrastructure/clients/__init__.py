"""Outbound client implementations."""

from .notification_sink import InAppNotificationSink

__all__ = [
    "InAppNotificationSink",
]
