"""Errors raised by the notification core."""

from __future__ import annotations

from typing import Any


class NotificationError(Exception):
    """Base exception for every notification core failure.

    Attributes:
        message: Human readable description of the failure
        details: Additional context about the failure
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ValidationError(NotificationError, ValueError):
    """Raised when a notification or a query argument fails validation."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        field: str | None = None,
    ) -> None:
        if field:
            details = details or {}
            details["field"] = field
        super().__init__(message, details)


class NotFoundError(NotificationError, LookupError):
    """Raised when a notification id is unknown to the repository."""

    def __init__(self, notification_id: int | None) -> None:
        super().__init__(
            f"Notification with id {notification_id} not found",
            {"notification_id": notification_id},
        )
        self.notification_id = notification_id


class ConflictError(NotificationError):
    """Raised when two notification objects that should match do not."""


class ServiceClosedError(NotificationError):
    """Raised when publishing on a notification service that was closed."""


class StorageError(NotificationError):
    """Raised when the persistence layer fails to read or write notifications."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        operation: str | None = None,
    ) -> None:
        if operation:
            details = details or {}
            details["operation"] = operation
        super().__init__(message, details)


__all__ = [
    "ConflictError",
    "NotFoundError",
    "NotificationError",
    "ServiceClosedError",
    "StorageError",
    "ValidationError",
]
