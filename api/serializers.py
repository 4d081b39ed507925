"""Conversions from ORM rows to API payloads."""

import logging
from typing import Any

from pydantic import ValidationError

from api.errors import APIError
from db.models import Article, ArticleSubmission, Writer
from richtext.models import ArticleContent

logger = logging.getLogger(__name__)


def serialize_writer(writer: Writer) -> dict[str, Any]:
    return {
        "id": writer.id,
        "first_name": writer.first_name,
        "last_name": writer.last_name,
        "bio": writer.bio,
        "title": writer.title,
    }


def load_content(article: Article) -> ArticleContent:
    """Parse a stored body; a corrupt body is a server error."""
    try:
        return ArticleContent.model_validate_json(article.body)
    except ValidationError:
        logger.exception("Stored body of article %s does not parse", article.id)
        raise APIError()


def serialize_article(
    article: Article,
    writer: Writer,
    is_admin: bool,
    content: ArticleContent | None = None,
) -> dict[str, Any]:
    """Serialize an article. The Drive file id is only shown to admins."""
    content = content or load_content(article)
    return {
        "id": article.id,
        "headline": article.headline,
        "focus": article.focus,
        "slug": article.slug,
        "content": content.model_dump(),
        "writer": serialize_writer(writer),
        "section": article.section.value,
        "publication_date": article.publication_date.isoformat() if article.publication_date else None,
        "image_url": article.image_url or "",
        "drive_file_id": article.drive_file_id if is_admin else None,
        "featured": article.featured,
    }


def serialize_submission(submission: ArticleSubmission) -> dict[str, Any]:
    return {
        "id": submission.id,
        "headline": submission.headline,
        "focus": submission.focus,
        "section": submission.section.value,
        "author_id": submission.author_id,
        "drive_file_id": submission.drive_file_id,
        "thumbnail_url": submission.thumbnail_url,
    }
