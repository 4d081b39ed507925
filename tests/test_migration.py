"""Tests for database migration idempotency."""

import pytest
from sqlalchemy import create_engine, text

from db.migrations import MIGRATIONS, run_migrations, _column_exists
from db.models import Base


@pytest.fixture
def engine(tmp_path):
    db_path = tmp_path / "test_migration.db"
    eng = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(eng)
    return eng


def test_migration_adds_columns(engine):
    """Columns should be added if they don't exist."""
    # SQLite doesn't support DROP COLUMN easily, so recreate the table in its first shape
    with engine.connect() as conn:
        conn.execute(text("DROP TABLE IF EXISTS articles"))
        conn.execute(text("""
            CREATE TABLE articles (
                id INTEGER PRIMARY KEY,
                headline VARCHAR(512) NOT NULL,
                slug TEXT NOT NULL,
                body TEXT NOT NULL,
                writer_id INTEGER NOT NULL REFERENCES writers(id),
                section VARCHAR(32) NOT NULL,
                publication_date DATETIME
            )
        """))
        conn.execute(text(
            "INSERT INTO articles (headline, slug, body, writer_id, section) "
            "VALUES ('Old', 'old', '{\"headline\": \"Old\"}', 1, 'news')"
        ))
        conn.commit()

    for _, column, _ in MIGRATIONS:
        assert not _column_exists(engine, "articles", column)

    run_migrations(engine)

    for _, column, _ in MIGRATIONS:
        assert _column_exists(engine, "articles", column)

    with engine.connect() as conn:
        row = conn.execute(text("SELECT focus, image_url, featured FROM articles")).one()
    assert row.focus == ""
    assert row.image_url is None
    assert not row.featured


def test_migration_idempotent(engine):
    """Running migrations twice should not fail."""
    run_migrations(engine)
    run_migrations(engine)  # Should not raise

    assert _column_exists(engine, "articles", "drive_file_id")
    assert _column_exists(engine, "articles", "featured")


def test_column_exists_check(engine):
    assert _column_exists(engine, "articles", "slug")
    assert _column_exists(engine, "article_submission", "thumbnail_url")
    assert not _column_exists(engine, "articles", "nonexistent_column")
