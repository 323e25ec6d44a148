"""Application services orchestrating the domain layer."""

from .notification_service import NotificationService

__all__ = ["NotificationService"]
