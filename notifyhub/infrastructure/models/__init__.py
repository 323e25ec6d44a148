"""SQLAlchemy models for the infrastructure layer."""

from .notification import NotificationActionModel, NotificationModel

__all__ = ["NotificationActionModel", "NotificationModel"]
