"""SQLAlchemy models for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from notifyhub.config import MAX_DESCRIPTION_LENGTH, MAX_SUMMARY_LENGTH
from notifyhub.domain.entities import (
    MAX_ACTION_LABEL_LENGTH,
    MAX_ACTION_TARGET_LENGTH,
    MAX_ENTITY_ID_LENGTH,
    MAX_ENTITY_TYPE_LENGTH,
    MAX_RECIPIENT_ID_LENGTH,
    MAX_RECIPIENT_TYPE_LENGTH,
    NotificationStatus,
)
from notifyhub.infrastructure.database import Base


class NotificationActionModel(Base):
    """Database representation for the actions attached to a notification."""

    __tablename__ = "notification_action"

    id = Column(Integer, primary_key=True, autoincrement=True)
    notification_id = Column(
        Integer, ForeignKey("notification.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False, default=0)
    label = Column(String(MAX_ACTION_LABEL_LENGTH), nullable=False)
    target = Column(String(MAX_ACTION_TARGET_LENGTH), nullable=False)


class NotificationModel(Base):
    """Database representation for notifications."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    description = Column(String(MAX_DESCRIPTION_LENGTH), nullable=True)
    summary = Column(String(MAX_SUMMARY_LENGTH), nullable=True)
    entity_type = Column(String(MAX_ENTITY_TYPE_LENGTH), nullable=True)
    entity_id = Column(String(MAX_ENTITY_ID_LENGTH), nullable=False)
    recipient_type = Column(String(MAX_RECIPIENT_TYPE_LENGTH), nullable=True, index=True)
    recipient_id = Column(String(MAX_RECIPIENT_ID_LENGTH), nullable=True, index=True)
    category = Column(Integer, nullable=True)
    status = Column(
        String(10), nullable=False, default=NotificationStatus.UNREAD.value, index=True
    )
    archived = Column(Boolean, nullable=False, default=False)
    archived_on = Column(DateTime(), nullable=True)
    created_on = Column(DateTime(), nullable=False)

    actions = relationship(
        NotificationActionModel,
        cascade="all, delete-orphan",
        order_by=NotificationActionModel.position,
        lazy="selectin",
    )


__all__ = ["NotificationActionModel", "NotificationModel"]
