"""Domain entities exposed by the notification core."""

from .notification import (
    MAX_ACTION_LABEL_LENGTH,
    MAX_ACTION_TARGET_LENGTH,
    MAX_ENTITY_ID_LENGTH,
    MAX_ENTITY_TYPE_LENGTH,
    MAX_RECIPIENT_ID_LENGTH,
    MAX_RECIPIENT_TYPE_LENGTH,
    Notification,
    NotificationAction,
    NotificationRecipient,
    NotificationStatus,
)
from .pagination import PaginatedData

__all__ = [
    "MAX_ACTION_LABEL_LENGTH",
    "MAX_ACTION_TARGET_LENGTH",
    "MAX_ENTITY_ID_LENGTH",
    "MAX_ENTITY_TYPE_LENGTH",
    "MAX_RECIPIENT_ID_LENGTH",
    "MAX_RECIPIENT_TYPE_LENGTH",
    "Notification",
    "NotificationAction",
    "NotificationRecipient",
    "NotificationStatus",
    "PaginatedData",
]
