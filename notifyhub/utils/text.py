"""String helpers shared by the domain layer."""

from __future__ import annotations

from notifyhub.domain.exceptions import ValidationError


def ensure_length(value: str | None, limit: int) -> str | None:
    """Return ``value`` cut down to at most ``limit`` characters."""

    if value is None:
        return None
    if limit < 0:
        raise ValidationError("limit must be a non-negative integer", field="limit")
    return value[:limit]
