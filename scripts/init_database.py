"""Utility script to create the notification tables in the database."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from notifyhub.config import Settings, get_settings
from notifyhub.infrastructure.database import create_db_engine, initialize_database


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for table creation."""

    parser = argparse.ArgumentParser(
        description="Create the notification tables for the configured database.",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy URL to use instead of NOTIFYHUB_DATABASE_URL",
    )
    parser.add_argument(
        "--echo",
        action="store_true",
        help="Print the SQL statements emitted while creating the tables.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> list[str]:
    """Create the tables and return the names of the tables now present."""

    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    settings = get_settings()
    overrides: dict[str, object] = {}
    if args.database_url:
        overrides["database_url"] = args.database_url
    if args.echo:
        overrides["database_echo"] = True
    if overrides:
        settings = Settings(**{**settings.model_dump(), **overrides})

    engine = create_db_engine(settings)
    try:
        initialize_database(engine)
        tables = sorted(inspect(engine).get_table_names())
    except SQLAlchemyError as exc:
        raise SystemExit(f"Could not create the notification tables: {exc}") from exc
    finally:
        engine.dispose()

    print("Tables ready: " + ", ".join(tables))
    return tables


if __name__ == "__main__":
    main()
