"""Article routes."""

import logging
import re
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel

from api.errors import APIError
from api.pagination import paginate
from api.serializers import serialize_article
from api.session import Role, current_role, require_admin
from config import DEFAULT_PAGE_LIMIT
from db.database import get_session
from db.models import Article, Section, Writer
from richtext.models import ArticleContent

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["articles"])

_SLUG_STRIP = re.compile(r"[^A-Za-z0-9 -]")


class ArticleIn(BaseModel):
    content: ArticleContent
    writer_id: int
    section: Section
    focus: str = ""
    image_url: str | None = None
    drive_file_id: str | None = None
    featured: bool | None = None


class ArticlePatch(BaseModel):
    body: ArticleContent | None = None
    writer_id: int | None = None
    section: Section | None = None
    image_url: str | None = None
    featured: bool | None = None


def make_slug(headline: str) -> str:
    """``"Hello, World!"`` -> ``"hello-world"``."""
    return _SLUG_STRIP.sub("", headline.replace(" ", "-").lower())


def _check_page(page: int) -> None:
    if page <= 0:
        raise APIError.bad_request("Page must be positive")


def _get_writer(session: Any, writer_id: int) -> Writer:
    writer = session.get(Writer, writer_id)
    if writer is None:
        raise APIError.not_found(f"No writer with id {writer_id} found.")
    return writer


def _page_of_articles(query: Any, limit: int, page: int, role: Role) -> dict[str, Any]:
    count = query.count()
    rows = (
        query.add_entity(Writer)
        .join(Writer, Article.writer_id == Writer.id)
        .order_by(Article.publication_date.desc(), Article.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    content = [serialize_article(a, w, role == Role.ADMIN) for a, w in rows]
    return paginate(content, limit, page, count)


@router.get("/articles")
def list_articles(
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=100),
    page: int = Query(default=1),
    role: Role = Depends(current_role),
) -> dict[str, Any]:
    """Newest articles first, one page at a time."""
    _check_page(page)
    session = get_session()
    try:
        return _page_of_articles(session.query(Article), limit, page, role)
    finally:
        session.close()


@router.get("/sectionArticles/{section}")
def list_section_articles(
    section: str,
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=100),
    page: int = Query(default=1),
    role: Role = Depends(current_role),
) -> dict[str, Any]:
    try:
        section_value = Section(section)
    except ValueError:
        raise APIError.bad_request("Invalid section name")
    _check_page(page)

    session = get_session()
    try:
        query = session.query(Article).filter(Article.section == section_value)
        return _page_of_articles(query, limit, page, role)
    finally:
        session.close()


@router.get("/articles/featured")
def get_featured_article(role: Role = Depends(current_role)) -> dict[str, Any]:
    session = get_session()
    try:
        row = (
            session.query(Article, Writer)
            .join(Writer, Article.writer_id == Writer.id)
            .filter(Article.featured.is_(True))
            .order_by(Article.publication_date.desc())
            .first()
        )
        if row is None:
            raise APIError.not_found("There is no featured article")
        return serialize_article(row[0], row[1], role == Role.ADMIN)
    finally:
        session.close()


@router.get("/articles/{article_id:int}")
def get_article(article_id: int, role: Role = Depends(current_role)) -> dict[str, Any]:
    session = get_session()
    try:
        row = (
            session.query(Article, Writer)
            .join(Writer, Article.writer_id == Writer.id)
            .filter(Article.id == article_id)
            .first()
        )
        if row is None:
            raise APIError.not_found(f"No article with id {article_id}.")
        return serialize_article(row[0], row[1], role == Role.ADMIN)
    finally:
        session.close()


@router.get("/articles/{slug}")
def get_article_by_slug(slug: str, role: Role = Depends(current_role)) -> dict[str, Any]:
    session = get_session()
    try:
        row = (
            session.query(Article, Writer)
            .join(Writer, Article.writer_id == Writer.id)
            .filter(Article.slug == slug)
            .first()
        )
        if row is None:
            raise APIError.not_found(f"No article with slug {slug}.")
        return serialize_article(row[0], row[1], role == Role.ADMIN)
    finally:
        session.close()


@router.post("/articles", status_code=201)
def create_article(
    data: ArticleIn,
    response: Response,
    role: Role = Depends(require_admin),
) -> dict[str, Any]:
    """Store a new article; the slug is derived from the headline."""
    session = get_session()
    try:
        writer = _get_writer(session, data.writer_id)
        article = Article(
            headline=data.content.headline,
            focus=data.focus,
            slug=make_slug(data.content.headline),
            body=data.content.model_dump_json(),
            writer_id=writer.id,
            section=data.section,
            publication_date=datetime.now(timezone.utc),
            image_url=data.image_url,
            drive_file_id=data.drive_file_id,
            featured=bool(data.featured),
        )
        session.add(article)
        session.commit()
        logger.info("Created article %d (%s)", article.id, article.slug)

        response.headers["Location"] = f"/api/articles/{article.id}"
        return serialize_article(article, writer, is_admin=True, content=data.content)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@router.patch("/articles/{article_id:int}")
def update_article(
    article_id: int,
    patch: ArticlePatch,
    role: Role = Depends(require_admin),
) -> dict[str, Any]:
    """Partially update an article. A new body replaces the old one wholesale."""
    session = get_session()
    try:
        article = session.get(Article, article_id)
        if article is None:
            raise APIError.not_found(f"No article with id {article_id}.")

        if patch.writer_id is not None:
            article.writer_id = _get_writer(session, patch.writer_id).id
        if patch.body is not None:
            article.body = patch.body.model_dump_json()
            article.headline = patch.body.headline
        if patch.section is not None:
            article.section = patch.section
        if patch.image_url is not None:
            article.image_url = patch.image_url
        if patch.featured is not None:
            article.featured = patch.featured

        session.commit()
        writer = _get_writer(session, article.writer_id)
        return serialize_article(article, writer, is_admin=True)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@router.delete("/articles/{article_id:int}", status_code=202)
def delete_article(article_id: int, role: Role = Depends(require_admin)) -> Response:
    session = get_session()
    try:
        deleted = session.query(Article).filter(Article.id == article_id).delete()
        session.commit()
        if deleted == 0:
            raise APIError.not_found(f"No article with id {article_id}")
        logger.info("Deleted article %d", article_id)
        return Response(status_code=202)
    finally:
        session.close()
