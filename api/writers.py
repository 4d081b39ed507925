"""Writer routes."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from api.errors import APIError
from api.serializers import serialize_article, serialize_writer
from api.session import Role, current_role, require_admin
from db.database import get_session
from db.models import Article, Writer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["writers"])


class WriterIn(BaseModel):
    first_name: str
    last_name: str
    bio: str = ""
    title: str = ""


class WriterPatch(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    bio: str | None = None
    title: str | None = None


@router.get("/writers")
def list_writers() -> list[dict[str, Any]]:
    session = get_session()
    try:
        return [serialize_writer(w) for w in session.query(Writer).order_by(Writer.id).all()]
    finally:
        session.close()


@router.get("/writers/{writer_id:int}")
def get_writer(writer_id: int) -> dict[str, Any]:
    session = get_session()
    try:
        writer = session.get(Writer, writer_id)
        if writer is None:
            raise APIError.not_found(f"No writer with id {writer_id}.")
        return serialize_writer(writer)
    finally:
        session.close()


@router.get("/writers/{writer_id:int}/articles")
def get_writer_articles(writer_id: int, role: Role = Depends(current_role)) -> list[dict[str, Any]]:
    """All articles by one writer, newest first."""
    session = get_session()
    try:
        writer = session.get(Writer, writer_id)
        if writer is None:
            raise APIError.not_found(f"No writer with id {writer_id} found.")
        articles = (
            session.query(Article)
            .filter(Article.writer_id == writer_id)
            .order_by(Article.publication_date.desc())
            .all()
        )
        return [serialize_article(a, writer, role == Role.ADMIN) for a in articles]
    finally:
        session.close()


@router.get("/writers/{name}")
def get_writer_by_name(name: str) -> dict[str, Any]:
    """Look a writer up by ``firstName-lastName``."""
    first_name, sep, last_name = name.partition("-")
    if not sep:
        raise APIError.bad_request('Name must be in the form "firstName-lastName".')

    session = get_session()
    try:
        writer = (
            session.query(Writer)
            .filter(Writer.first_name == first_name, Writer.last_name == last_name)
            .first()
        )
        if writer is None:
            raise APIError.not_found(f"No writer with name {name}.")
        return serialize_writer(writer)
    finally:
        session.close()


@router.post("/writers", status_code=201)
def create_writer(
    data: WriterIn,
    response: Response,
    role: Role = Depends(require_admin),
) -> dict[str, Any]:
    session = get_session()
    try:
        writer = Writer(**data.model_dump())
        session.add(writer)
        session.commit()
        logger.info("Created writer %d", writer.id)
        response.headers["Location"] = f"/api/writers/{writer.id}"
        return serialize_writer(writer)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@router.patch("/writers/{writer_id:int}")
def update_writer(
    writer_id: int,
    patch: WriterPatch,
    role: Role = Depends(require_admin),
) -> dict[str, Any]:
    session = get_session()
    try:
        writer = session.get(Writer, writer_id)
        if writer is None:
            raise APIError.not_found(f"No writer with id {writer_id}.")
        for field, value in patch.model_dump(exclude_none=True).items():
            setattr(writer, field, value)
        session.commit()
        return serialize_writer(writer)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
