"""Engine and session factory for the newsroom database."""

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from config import DATA_DIR, DATABASE_URL
from db.models import Base

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_SessionFactory: sessionmaker[Session] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # articles and submissions reference writers; SQLite ignores that unless asked
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine() -> Engine:
    """Lazily build the engine for ``DATABASE_URL``."""
    global _engine
    if _engine is None:
        is_sqlite = DATABASE_URL.startswith("sqlite")
        if is_sqlite:
            DATA_DIR.mkdir(parents=True, exist_ok=True)
        _engine = create_engine(DATABASE_URL, echo=False)
        if is_sqlite:
            event.listen(_engine, "connect", _enable_sqlite_foreign_keys)
        logger.debug("Database engine created for %s", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_session() -> Session:
    """New session. Rows stay readable after commit so routes can serialize them."""
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _SessionFactory()


def reset_engine() -> None:
    """Dispose the current engine; the next call rebuilds it from ``DATABASE_URL``."""
    global _engine, _SessionFactory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionFactory = None


def init_db() -> None:
    """Create the writer, article and submission tables, then run migrations."""
    from db.migrations import run_migrations

    engine = get_engine()
    Base.metadata.create_all(engine)
    run_migrations(engine)
