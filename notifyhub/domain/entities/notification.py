"""Domain entity representing a notification and its lifecycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from notifyhub.config import (
    MAX_DESCRIPTION_LENGTH,
    MAX_SUMMARY_LENGTH,
    get_settings,
)
from notifyhub.domain.exceptions import ConflictError, ValidationError
from notifyhub.utils import ensure_length, now_in_app_timezone

logger = logging.getLogger(__name__)

MAX_ENTITY_ID_LENGTH = 100
MAX_ENTITY_TYPE_LENGTH = 100
MAX_RECIPIENT_ID_LENGTH = 100
MAX_RECIPIENT_TYPE_LENGTH = 100
MAX_ACTION_LABEL_LENGTH = 100
MAX_ACTION_TARGET_LENGTH = 500

_FIELD_LIMITS: dict[str, int] = {
    "description": MAX_DESCRIPTION_LENGTH,
    "summary": MAX_SUMMARY_LENGTH,
    "entity_type": MAX_ENTITY_TYPE_LENGTH,
    "entity_id": MAX_ENTITY_ID_LENGTH,
    "recipient_type": MAX_RECIPIENT_TYPE_LENGTH,
    "recipient_id": MAX_RECIPIENT_ID_LENGTH,
}


class NotificationStatus(str, Enum):
    """Whether the recipient has seen the notification."""

    UNREAD = "unread"
    READ = "read"


@dataclass(frozen=True)
class NotificationAction:
    """Link offered to the recipient alongside a notification."""

    label: str
    target: str

    def __post_init__(self) -> None:
        if len(self.label) > MAX_ACTION_LABEL_LENGTH:
            raise ValidationError(
                f"Action label cannot exceed {MAX_ACTION_LABEL_LENGTH} characters",
                field="label",
            )
        if len(self.target) > MAX_ACTION_TARGET_LENGTH:
            raise ValidationError(
                f"Action target cannot exceed {MAX_ACTION_TARGET_LENGTH} characters",
                field="target",
            )


@dataclass(frozen=True)
class NotificationRecipient:
    """Identify who a notification is addressed to; used to filter queries."""

    recipient_type: str | None
    recipient_id: str | None


@dataclass
class Notification:
    """Message addressed to a recipient about a domain entity.

    Instances built through :meth:`create` are transient until a repository
    persists them and assigns ``id``. State changes only happen through the
    transition methods, each of which reports whether anything changed.
    """

    id: int | None = None
    entity_id: str = ""
    description: str | None = None
    summary: str | None = None
    entity_type: str | None = None
    recipient_type: str | None = None
    recipient_id: str | None = None
    category: int | None = None
    actions: list[NotificationAction] = field(default_factory=list)
    status: NotificationStatus = NotificationStatus.UNREAD
    archived: bool = False
    archived_on: datetime | None = None
    created_on: datetime = field(default_factory=now_in_app_timezone)

    def __post_init__(self) -> None:
        self.status = NotificationStatus(self.status)
        self.actions = list(self.actions)
        self._validate()

    @classmethod
    def create(
        cls,
        description: str | None,
        entity_type: str | None,
        entity_id: str,
        recipient_type: str | None,
        recipient_id: str | None,
        summary: str | None = None,
        category: int | None = None,
        *actions: NotificationAction,
        description_limit: int | None = None,
        summary_limit: int | None = None,
    ) -> "Notification":
        """Build a new unread notification ready to be published.

        ``description`` and ``summary`` are truncated to the configured limits
        (``Settings.description_limit`` / ``Settings.summary_limit`` unless
        overridden); the entity type and recipient fields are truncated to
        their column sizes. ``ValidationError`` is raised when ``entity_id`` is
        blank or a field is still too long afterwards.
        """

        if description_limit is None or summary_limit is None:
            settings = get_settings()
            if description_limit is None:
                description_limit = settings.description_limit
            if summary_limit is None:
                summary_limit = settings.summary_limit

        return cls(
            description=ensure_length(description, description_limit),
            summary=ensure_length(summary, summary_limit),
            entity_type=ensure_length(entity_type, MAX_ENTITY_TYPE_LENGTH),
            entity_id=entity_id,
            recipient_type=ensure_length(recipient_type, MAX_RECIPIENT_TYPE_LENGTH),
            recipient_id=ensure_length(recipient_id, MAX_RECIPIENT_ID_LENGTH),
            category=category,
            actions=list(actions),
        )

    def _validate(self) -> None:
        if self.entity_id is None or not str(self.entity_id).strip():
            raise ValidationError("The entity id field is required", field="entity_id")
        for name, limit in _FIELD_LIMITS.items():
            value = getattr(self, name)
            if value is not None and len(value) > limit:
                raise ValidationError(
                    f"The field {name} must not exceed {limit} characters",
                    field=name,
                )

    def is_archived(self) -> bool:
        return self.archived

    def is_read(self) -> bool:
        return self.status is NotificationStatus.READ

    def is_unread(self) -> bool:
        return self.status is NotificationStatus.UNREAD

    def add_action(self, action: NotificationAction) -> None:
        """Append ``action`` to the notification actions."""

        self.actions.append(action)

    def archive(self) -> bool:
        """Archive the notification; ``False`` when it already is."""

        if self.archived:
            return False

        self.archived = True
        self.archived_on = now_in_app_timezone()
        logger.debug("Notification %s archived", self.id)
        return True

    def un_archive(self) -> bool:
        """Bring the notification back from the archive and mark it as read."""

        if not self.archived:
            return False

        self.status = NotificationStatus.READ
        self.archived = False
        self.archived_on = None
        logger.debug("Notification %s restored from archive", self.id)
        return True

    def mark_as_read(self) -> bool:
        if self.is_read():
            return False

        self.status = NotificationStatus.READ
        return True

    def mark_as_unread(self) -> bool:
        if self.is_unread():
            return False

        self.status = NotificationStatus.UNREAD
        return True

    def copy_to(self, notification: "Notification") -> None:
        """Copy every field except ``id`` onto ``notification``.

        Both objects must describe the same stored notification; a
        :class:`ConflictError` is raised otherwise and nothing is changed.
        """

        if self.id != notification.id:
            raise ConflictError(
                "Id of domain and data objects don't match.",
                {"source_id": self.id, "target_id": notification.id},
            )

        notification.description = self.description
        notification.summary = self.summary
        notification.entity_type = self.entity_type
        notification.entity_id = self.entity_id
        notification.recipient_type = self.recipient_type
        notification.recipient_id = self.recipient_id
        notification.category = self.category
        notification.actions = list(self.actions)
        notification.status = self.status
        notification.archived = self.archived
        notification.archived_on = self.archived_on
        notification.created_on = self.created_on


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
]
