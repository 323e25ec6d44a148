"""Persistence contract the notification core depends on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence

from notifyhub.domain.entities import (
    Notification,
    NotificationRecipient,
    PaginatedData,
)
from notifyhub.domain.exceptions import ValidationError

# Returned by status and archive mutations when the notification was already
# in the requested state and nothing was written.
NO_CHANGE = -1


class NotificationRepository(ABC):
    """Abstract interface for notification persistence.

    Implementations provide lookups, bulk inserts and saves; the status and
    archive mutations are built on top of those.
    """

    @abstractmethod
    def get_notification(self, notification_id: int) -> Notification:
        """Return the stored notification or raise ``NotFoundError``."""

    @abstractmethod
    def add_range(self, notifications: Sequence[Notification]) -> int:
        """Insert ``notifications`` atomically and return how many were stored."""

    @abstractmethod
    def save(self, notification: Notification) -> int:
        """Persist changes made to an already stored notification."""

    @abstractmethod
    def get_notifications(
        self,
        recipients: Iterable[NotificationRecipient],
        page_index: int,
        page_size: int,
        show_archived: bool,
        title: str = "",
    ) -> PaginatedData[Notification]:
        """Return one page of notifications addressed to ``recipients``."""

    @abstractmethod
    def not_read_notification_count(
        self, recipients: Iterable[NotificationRecipient]
    ) -> int:
        """Return how many unread notifications ``recipients`` have."""

    def archive(self, notification_id: int) -> int:
        return self._apply_transition(notification_id, Notification.archive)

    def un_archive(self, notification_id: int) -> int:
        return self._apply_transition(notification_id, Notification.un_archive)

    def mark_as_read(self, notification_id: int) -> int:
        return self._apply_transition(notification_id, Notification.mark_as_read)

    def mark_as_unread(self, notification_id: int) -> int:
        return self._apply_transition(notification_id, Notification.mark_as_unread)

    def _apply_transition(
        self, notification_id: int, transition: Callable[[Notification], bool]
    ) -> int:
        notification = self.get_notification(notification_id)
        if not transition(notification):
            return NO_CHANGE
        return self.save(notification)


def validate_page(page_index: int, page_size: int) -> None:
    """Raise ``ValidationError`` for pagination arguments that make no sense."""

    if page_index < 0:
        raise ValidationError("page_index must be zero or greater", field="page_index")
    if page_size < 1:
        raise ValidationError("page_size must be greater than zero", field="page_size")


__all__ = ["NO_CHANGE", "NotificationRepository", "validate_page"]
