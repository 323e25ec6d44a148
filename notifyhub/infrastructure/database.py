"""Database configuration and session management."""

from __future__ import annotations

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from notifyhub.config import Settings, get_settings

logger = logging.getLogger(__name__)

_IN_MEMORY_URLS = frozenset({"sqlite://", "sqlite:///:memory:"})


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


def create_db_engine(settings: Settings | None = None) -> Engine:
    """Create an engine for the configured ``database_url``."""

    settings = settings or get_settings()
    connect_args: dict[str, object] = {}
    if settings.database_url.startswith("sqlite"):
        # Publishers may flush from any thread.
        connect_args["check_same_thread"] = False
    options: dict[str, object] = {}
    if settings.database_url in _IN_MEMORY_URLS:
        # Every connection must see the same in-memory database.
        options["poolclass"] = StaticPool
    return create_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        connect_args=connect_args,
        **options,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database(engine: Engine) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from notifyhub.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Notification tables ready on %s", engine.url.render_as_string())


__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "initialize_database",
]
