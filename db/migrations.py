"""Idempotent database migrations for newsroom.

Columns that later revisions added to ``articles`` are added to databases
created before them. Each migration checks if the column exists first.
"""

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

MIGRATIONS: list[tuple[str, str, str]] = [
    ("articles", "focus", "TEXT NOT NULL DEFAULT ''"),
    ("articles", "image_url", "TEXT"),
    ("articles", "drive_file_id", "TEXT"),
    ("articles", "featured", "BOOLEAN NOT NULL DEFAULT FALSE"),
]


def _column_exists(engine: Engine, table: str, column: str) -> bool:
    """Check if a column exists in the given table."""
    columns = inspect(engine).get_columns(table)
    return column in {c["name"] for c in columns}


def run_migrations(engine: Engine) -> None:
    """Run all pending migrations idempotently."""
    with engine.connect() as conn:
        for table, column, col_type in MIGRATIONS:
            if not _column_exists(engine, table, column):
                logger.info("Adding column %s.%s (%s)", table, column, col_type)
                conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {col_type}"))
                conn.commit()
            else:
                logger.debug("Column %s.%s already exists, skipping", table, column)
