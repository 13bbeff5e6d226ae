"""Database initialization module.

Creates the catalog tables from the ORM metadata on app startup. Column
definitions are static; there is no migration step.
"""

import logging

from sqlalchemy import inspect

from catalog_api.models import Base

from .db import Database

logger = logging.getLogger(__name__)


def init_database_schema(database: Database) -> None:
    """Create missing tables and indexes.

    Existing tables are left untouched, so running this on every startup is
    safe.

    Raises:
        sqlalchemy.exc.SQLAlchemyError: If the database is unreachable or DDL fails.
    """
    try:
        existing = set(inspect(database.engine).get_table_names())
        missing = [name for name in Base.metadata.tables if name not in existing]
        Base.metadata.create_all(bind=database.engine)
    except Exception:
        logger.exception("Failed to initialize database schema")
        raise

    if missing:
        logger.info("Database schema initialized, created tables: %s", ", ".join(missing))
    else:
        logger.info("Database schema already up to date")
