"""Shared fixtures: temporary database, image root, API client and sessions."""

import io
import json
import zipfile
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from api.session import Role, create_token
from db.database import get_session, init_db, reset_engine
from db.models import Article, Section, Writer


@pytest.fixture
def image_root(tmp_path, monkeypatch):
    root = tmp_path / "images"
    monkeypatch.setattr("api.drive.ARTICLE_IMAGE_PATH", root)
    monkeypatch.setattr("api.uploads.ARTICLE_IMAGE_PATH", root)
    return root


@pytest.fixture
def db(tmp_path, monkeypatch):
    """Use a temporary database for each test."""
    db_path = tmp_path / "test.db"
    monkeypatch.setattr("db.database.DATABASE_URL", f"sqlite:///{db_path}")
    monkeypatch.setattr("db.database.DATA_DIR", tmp_path)

    # Rebuild the engine so it uses the new path
    reset_engine()
    init_db()
    yield
    reset_engine()


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    monkeypatch.setattr("api.session.JWT_SECRET", "test-secret")


@pytest.fixture
def client(db, image_root):
    from main import app

    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_token(Role.ADMIN)}"}


@pytest.fixture
def editor_headers():
    return {"Authorization": f"Bearer {create_token(Role.EDITOR)}"}


def make_body(headline: str, text: str = "Body text") -> str:
    return json.dumps({
        "headline": headline,
        "paragraphs": [
            {"text_alignment": "left", "spans": [{"content": [{"text": {"content": text}}]}]},
        ],
    })


def make_zip(entries: dict[str, bytes]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buf.getvalue()


@pytest.fixture
def seeded(db):
    """Two writers and three articles, newest last."""
    session = get_session()
    now = datetime.now(timezone.utc)
    jane = Writer(first_name="Jane", last_name="Doe", bio="Reporter", title="Staff Writer")
    john = Writer(first_name="John", last_name="Roe", bio="Columnist", title="Editor")
    session.add_all([jane, john])
    session.flush()

    articles = [
        Article(
            headline="City Council Votes",
            focus="council",
            slug="city-council-votes",
            body=make_body("City Council Votes"),
            writer_id=jane.id,
            section=Section.NEWS,
            publication_date=now - timedelta(days=2),
            drive_file_id="drive-1",
        ),
        Article(
            headline="Season Opener",
            focus="football",
            slug="season-opener",
            body=make_body("Season Opener"),
            writer_id=john.id,
            section=Section.SPORTS,
            publication_date=now - timedelta(days=1),
            featured=True,
        ),
        Article(
            headline="Why Libraries Matter",
            focus="libraries",
            slug="why-libraries-matter",
            body=make_body("Why Libraries Matter"),
            writer_id=jane.id,
            section=Section.OPINION,
            publication_date=now,
            image_url="/image/2024/3/abc.png",
        ),
    ]
    session.add_all(articles)
    session.commit()
    ids = {
        "jane": jane.id,
        "john": john.id,
        "articles": [a.id for a in articles],
    }
    session.close()
    return ids
