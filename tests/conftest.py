"""Shared fixtures for the notification core test-suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

# Ensure the project root (which contains the ``notifyhub`` package) is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy.orm import Session

from notifyhub.config import Settings, reset_settings_cache
from notifyhub.domain.entities import Notification
from notifyhub.infrastructure.database import (
    create_db_engine,
    create_session_factory,
    initialize_database,
)
from notifyhub.utils import get_app_timezone


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test against default settings unless it overrides them."""

    for name in list(os.environ):
        if name.startswith("NOTIFYHUB_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(ROOT / "tests")
    reset_settings_cache()
    get_app_timezone.cache_clear()
    yield
    reset_settings_cache()
    get_app_timezone.cache_clear()


@pytest.fixture
def make_notification() -> Callable[..., Notification]:
    """Return a factory building valid notifications with overridable fields."""

    def factory(**overrides) -> Notification:
        values = {
            "description": "Your report is ready",
            "entity_type": "report",
            "entity_id": "42",
            "recipient_type": "user",
            "recipient_id": "alice",
            "summary": "Report ready",
            "category": None,
        }
        values.update(overrides)
        return Notification.create(
            values["description"],
            values["entity_type"],
            values["entity_id"],
            values["recipient_type"],
            values["recipient_id"],
            values["summary"],
            values["category"],
        )

    return factory


@pytest.fixture
def db_session() -> Iterator[Session]:
    """Yield a session bound to a fresh in-memory SQLite database."""

    engine = create_db_engine(Settings(database_url="sqlite://"))
    initialize_database(engine)
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
