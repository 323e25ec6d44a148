"""Process-local notification store."""

from __future__ import annotations

import copy
import itertools
import threading
from collections.abc import Iterable, Sequence

from notifyhub.domain.entities import (
    Notification,
    NotificationRecipient,
    PaginatedData,
)
from notifyhub.domain.exceptions import NotFoundError, ValidationError
from notifyhub.domain.repositories import NotificationRepository, validate_page


class InMemoryNotificationRepository(NotificationRepository):
    """Keep notifications in a dictionary guarded by a lock.

    Callers always receive copies, so a fetched notification only changes the
    stored one once it is passed back through :meth:`save`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._notifications: dict[int, Notification] = {}
        self._ids = itertools.count(1)

    def get_notification(self, notification_id: int) -> Notification:
        with self._lock:
            notification = self._notifications.get(notification_id)
            if notification is None:
                raise NotFoundError(notification_id)
            return copy.deepcopy(notification)

    def add_range(self, notifications: Sequence[Notification]) -> int:
        staged = [copy.deepcopy(notification) for notification in notifications]
        with self._lock:
            for notification in staged:
                notification.id = next(self._ids)
                self._notifications[notification.id] = notification
        return len(staged)

    def save(self, notification: Notification) -> int:
        if notification.id is None:
            raise ValidationError("Notification id is required for updates", field="id")

        with self._lock:
            stored = self._notifications.get(notification.id)
            if stored is None:
                raise NotFoundError(notification.id)
            notification.copy_to(stored)
        return 1

    def get_notifications(
        self,
        recipients: Iterable[NotificationRecipient],
        page_index: int,
        page_size: int,
        show_archived: bool,
        title: str = "",
    ) -> PaginatedData[Notification]:
        validate_page(page_index, page_size)
        wanted = _recipient_keys(recipients)
        start = page_index * page_size
        with self._lock:
            matches = [
                notification
                for notification in self._belonging_to(wanted)
                if (show_archived or not notification.archived)
                and _matches_title(notification, title)
            ]
            matches.sort(key=lambda notification: notification.id, reverse=True)
            return PaginatedData(
                results=copy.deepcopy(matches[start : start + page_size]),
                total_count=len(matches),
            )

    def not_read_notification_count(
        self, recipients: Iterable[NotificationRecipient]
    ) -> int:
        wanted = _recipient_keys(recipients)
        with self._lock:
            return sum(
                1 for notification in self._belonging_to(wanted) if notification.is_unread()
            )

    def _belonging_to(
        self, wanted: set[tuple[str | None, str | None]]
    ) -> list[Notification]:
        """Return the stored notifications for ``wanted``; caller holds the lock."""

        return [
            notification
            for notification in self._notifications.values()
            if (notification.recipient_type, notification.recipient_id) in wanted
        ]


def _recipient_keys(
    recipients: Iterable[NotificationRecipient],
) -> set[tuple[str | None, str | None]]:
    return {(recipient.recipient_type, recipient.recipient_id) for recipient in recipients}


def _matches_title(notification: Notification, title: str) -> bool:
    if not title:
        return True
    needle = title.lower()
    return any(
        needle in value.lower()
        for value in (notification.summary, notification.description)
        if value
    )


__all__ = ["InMemoryNotificationRepository"]
