from database import Base
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
import logging

import models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger(__name__)


def _check_column_exists(inspector, table: str, column: str) -> bool:
    """Check if a column exists in a table"""
    columns = [col['name'] for col in inspector.get_columns(table)]
    return column in columns


def _add_column_if_missing(engine: Engine, inspector, table: str, column: str, column_def: str):
    """Add a column to a table if it doesn't exist"""
    if not _check_column_exists(inspector, table, column):
        logger.info(f"Running migration: Adding '{column}' column to {table} table...")
        with engine.connect() as conn:
            conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {column_def}"))
            conn.commit()
        logger.info(f"✅ Migration complete: '{column}' column added to {table}")
        return True
    return False


def _run_essential_migrations(engine: Engine) -> int:
    """
    Upgrade databases created before asset keys and media types were tracked.

    Older videos tables only stored thumbnail_url and video_url.
    """
    inspector = inspect(engine)
    migrations_run = 0

    if 'videos' in inspector.get_table_names():
        for column in ('thumbnail_key', 'thumbnail_media_type', 'video_key', 'video_media_type'):
            if _add_column_if_missing(engine, inspector, 'videos', column, "TEXT"):
                migrations_run += 1

    return migrations_run


def init_database(engine: Engine):
    """Create tables and apply pending migrations"""
    migrations_run = _run_essential_migrations(engine)
    Base.metadata.create_all(bind=engine)

    if migrations_run:
        logger.info(f"Database initialized ({migrations_run} migration(s) applied)")
    else:
        logger.info("Database initialized")
