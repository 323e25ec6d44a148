"""Batching publisher that buffers notifications before persisting them."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from types import TracebackType

from notifyhub.config import get_settings
from notifyhub.domain.entities import (
    Notification,
    NotificationRecipient,
    PaginatedData,
)
from notifyhub.domain.exceptions import ServiceClosedError, ValidationError
from notifyhub.domain.repositories import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Manage notifications stored in a :class:`NotificationRepository`.

    Published notifications are kept in memory and handed to the repository in
    one bulk insert once more than ``batch_limit`` of them are waiting, or when
    the service is closed. Every other operation reads or changes already
    persisted notifications and goes straight to the repository.

    Notifications still buffered when the process dies are lost.
    """

    def __init__(
        self, repository: NotificationRepository, *, batch_limit: int | None = None
    ) -> None:
        self._repository = repository
        self._lock = threading.RLock()
        self._pending: list[Notification] = []
        self._closed = False
        self.batch_limit = (
            get_settings().batch_limit if batch_limit is None else batch_limit
        )

    @property
    def batch_limit(self) -> int:
        return self._batch_limit

    @batch_limit.setter
    def batch_limit(self, value: int) -> None:
        if value < 0:
            raise ValidationError("batch_limit must be zero or greater", field="batch_limit")
        self._batch_limit = value

    @property
    def pending_count(self) -> int:
        """Number of published notifications not yet handed to the repository."""

        with self._lock:
            return len(self._pending)

    def publish(self, notification: Notification) -> None:
        """Buffer ``notification`` and flush once the batch limit is exceeded.

        The append and the threshold check take the lock separately, so under
        contention the buffer may briefly grow past ``batch_limit``.
        Raises :class:`ServiceClosedError` once the service has been closed.
        """

        with self._lock:
            if self._closed:
                raise ServiceClosedError("Cannot publish on a closed notification service")
            self._pending.append(notification)
            logger.debug(
                "Buffered notification for %s/%s", notification.recipient_type,
                notification.recipient_id,
            )

        with self._lock:
            if len(self._pending) > self._batch_limit:
                self.flush()

    def flush(self) -> int:
        """Write every buffered notification to the repository in one call.

        The buffer is cleared only after the repository accepted the batch; if
        ``add_range`` raises, the notifications stay buffered and the error
        propagates to the caller.
        """

        with self._lock:
            if not self._pending:
                return 0

            batch = list(self._pending)
            try:
                stored = self._repository.add_range(batch)
            except Exception:
                logger.exception(
                    "Failed to store a batch of %d notifications", len(batch)
                )
                raise
            self._pending.clear()
            logger.info("Flushed %d notifications", len(batch))
            return stored

    def close(self) -> None:
        """Flush any remaining notifications; safe to call more than once."""

        with self._lock:
            self.flush()
            self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "NotificationService":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def archive(self, notification_id: int) -> int:
        return self._repository.archive(notification_id)

    def un_archive(self, notification_id: int) -> int:
        return self._repository.un_archive(notification_id)

    def mark_as_read(self, notification_id: int) -> int:
        return self._repository.mark_as_read(notification_id)

    def mark_as_unread(self, notification_id: int) -> int:
        return self._repository.mark_as_unread(notification_id)

    def get_notification(self, notification_id: int) -> Notification:
        return self._repository.get_notification(notification_id)

    def get_notifications(
        self,
        recipients: Iterable[NotificationRecipient],
        page_index: int,
        page_size: int = 10,
        show_archived: bool = False,
        title: str = "",
    ) -> PaginatedData[Notification]:
        """Return a page of notifications for ``recipients``, newest first."""

        return self._repository.get_notifications(
            recipients, page_index, page_size, show_archived, title
        )

    def get_notification_counter(
        self, recipients: Iterable[NotificationRecipient]
    ) -> int:
        """Return the number of unread notifications for ``recipients``."""

        return self._repository.not_read_notification_count(recipients)


__all__ = ["NotificationService"]
