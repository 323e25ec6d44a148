"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager

from sqlalchemy import and_, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from notifyhub.domain.entities import (
    Notification,
    NotificationAction,
    NotificationRecipient,
    NotificationStatus,
    PaginatedData,
)
from notifyhub.domain.exceptions import NotFoundError, StorageError, ValidationError
from notifyhub.domain.repositories import NotificationRepository, validate_page
from notifyhub.infrastructure.models import NotificationActionModel, NotificationModel
from notifyhub.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

logger = logging.getLogger(__name__)


class SqlAlchemyNotificationRepository(NotificationRepository):
    """Store :class:`Notification` objects through a SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_notification(self, notification_id: int) -> Notification:
        with self._storage_errors("get_notification"):
            model = self.session.get(NotificationModel, notification_id)
        if model is None:
            raise NotFoundError(notification_id)
        return self._to_entity(model)

    def add_range(self, notifications: Sequence[Notification]) -> int:
        models = []
        for notification in notifications:
            model = NotificationModel()
            self._apply_entity_to_model(model, notification, include_creation_fields=True)
            models.append(model)
        if not models:
            return 0

        with self._storage_errors("add_range"):
            self.session.add_all(models)
            self.session.commit()
        logger.debug("Inserted %d notifications", len(models))
        return len(models)

    def save(self, notification: Notification) -> int:
        if notification.id is None:
            raise ValidationError("Notification id is required for updates", field="id")

        with self._storage_errors("save"):
            model = self.session.get(NotificationModel, notification.id)
            if model is None:
                raise NotFoundError(notification.id)
            current = self._to_entity(model)
            notification.copy_to(current)
            self._apply_entity_to_model(model, current, include_creation_fields=False)
            self.session.add(model)
            self.session.commit()
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
        recipients = list(recipients)
        if not recipients:
            return PaginatedData()

        with self._storage_errors("get_notifications"):
            query = self._belonging_to(recipients)
            if not show_archived:
                query = query.filter(NotificationModel.archived.is_(False))
            if title:
                # Folded on both sides by the database.
                query = query.filter(
                    or_(
                        NotificationModel.summary.icontains(title, autoescape=True),
                        NotificationModel.description.icontains(title, autoescape=True),
                    )
                )
            total_count = query.count()
            models = (
                query.order_by(NotificationModel.id.desc())
                .offset(page_index * page_size)
                .limit(page_size)
                .all()
            )
        return PaginatedData(
            results=[self._to_entity(model) for model in models],
            total_count=total_count,
        )

    def not_read_notification_count(
        self, recipients: Iterable[NotificationRecipient]
    ) -> int:
        recipients = list(recipients)
        if not recipients:
            return 0

        with self._storage_errors("not_read_notification_count"):
            return (
                self._belonging_to(recipients)
                .filter(NotificationModel.status == NotificationStatus.UNREAD.value)
                .count()
            )

    def _belonging_to(self, recipients: Sequence[NotificationRecipient]) -> Query:
        return self.session.query(NotificationModel).filter(
            or_(
                *(
                    and_(
                        NotificationModel.recipient_type == recipient.recipient_type,
                        NotificationModel.recipient_id == recipient.recipient_id,
                    )
                    for recipient in recipients
                )
            )
        )

    @contextmanager
    def _storage_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Notification storage failed during %s: %s", operation, exc)
            raise StorageError(
                f"Notification storage failed during {operation}", operation=operation
            ) from exc

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel,
        notification: Notification,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            model.created_on = ensure_app_naive_datetime(
                notification.created_on or now_in_app_timezone()
            )
        else:
            model.created_on = ensure_app_naive_datetime(notification.created_on)
        model.description = notification.description
        model.summary = notification.summary
        model.entity_type = notification.entity_type
        model.entity_id = notification.entity_id
        model.recipient_type = notification.recipient_type
        model.recipient_id = notification.recipient_id
        model.category = notification.category
        model.status = notification.status.value
        model.archived = notification.archived
        model.archived_on = ensure_app_naive_datetime(notification.archived_on)

        stored_actions = [(action.label, action.target) for action in model.actions]
        actions = [(action.label, action.target) for action in notification.actions]
        if stored_actions != actions:
            model.actions = [
                NotificationActionModel(position=position, label=label, target=target)
                for position, (label, target) in enumerate(actions)
            ]

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            description=model.description,
            summary=model.summary,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            recipient_type=model.recipient_type,
            recipient_id=model.recipient_id,
            category=model.category,
            actions=[
                NotificationAction(label=action.label, target=action.target)
                for action in model.actions
            ],
            status=NotificationStatus(model.status),
            archived=bool(model.archived),
            archived_on=ensure_app_timezone(model.archived_on),
            created_on=ensure_app_timezone(model.created_on),
        )


__all__ = ["SqlAlchemyNotificationRepository"]
