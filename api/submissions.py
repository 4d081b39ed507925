"""Article submission routes."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from api.errors import APIError
from api.serializers import serialize_submission
from api.session import Role, require_admin, require_editor
from db.database import get_session
from db.models import ArticleSubmission, Section, Writer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["submissions"])


class SubmissionIn(BaseModel):
    headline: str
    focus: str = ""
    section: Section
    author_id: int
    drive_file_id: str
    thumbnail_url: str | None = None


@router.get("/submission")
def list_submissions(role: Role = Depends(require_admin)) -> list[dict[str, Any]]:
    session = get_session()
    try:
        rows = session.query(ArticleSubmission).order_by(ArticleSubmission.id).all()
        return [serialize_submission(s) for s in rows]
    finally:
        session.close()


@router.post("/submission", status_code=201)
def create_submission(data: SubmissionIn, role: Role = Depends(require_editor)) -> dict[str, Any]:
    session = get_session()
    try:
        if session.get(Writer, data.author_id) is None:
            raise APIError.not_found(f"No writer with id {data.author_id} found.")
        submission = ArticleSubmission(**data.model_dump())
        session.add(submission)
        session.commit()
        logger.info("New submission %d for Drive file %s", submission.id, submission.drive_file_id)
        return serialize_submission(submission)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@router.delete("/submission/{submission_id:int}")
def delete_submission(submission_id: int, role: Role = Depends(require_admin)) -> Response:
    session = get_session()
    try:
        deleted = session.query(ArticleSubmission).filter(ArticleSubmission.id == submission_id).delete()
        session.commit()
        if deleted == 0:
            raise APIError.not_found(f"No submission with id {submission_id}")
        return Response(status_code=200)
    finally:
        session.close()
