"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from notifyhub.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    The timezone is resolved from ``NOTIFYHUB_APP_TIMEZONE`` (via ``Settings``).
    Fixed offsets such as ``UTC+05:30`` are accepted; anything that cannot be
    resolved falls back to UTC.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    return _resolve_timezone(tz_name)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in the configured timezone."""

    if value is None:
        return None

    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` localized to the app timezone but without ``tzinfo``.

    SQLite and SQL Server ``DATETIME`` columns drop the offset, so values are
    stored naive in the app timezone and re-localized when read back.
    """

    localized = ensure_app_timezone(value)
    if localized is None:
        return None
    return localized.replace(tzinfo=None)


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``tzinfo`` instance."""

    match = _OFFSET_PATTERN.match(tz_name)
    if match:
        sign = -1 if match.group("sign") == "-" else 1
        hours = int(match.group("hours"))
        minutes = int(match.group("minutes") or 0)
        offset = timedelta(hours=hours, minutes=minutes)
        return timezone(sign * offset)
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc
