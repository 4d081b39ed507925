"""Drive folder and document import routes."""

import logging

from fastapi import APIRouter, Depends

from api.errors import APIError
from api.session import Role, require_admin, require_editor
from config import ARTICLE_IMAGE_PATH, GOOGLE_CLIENT_SECRET_PATH
from drive.client import DriveClient, DriveFile
from drive.credentials import ServiceAccountCredentials
from richtext.importer import DocumentImporter
from richtext.models import ArticleContent

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/drive", tags=["drive"])

_client: DriveClient | None = None


def get_drive_client() -> DriveClient:
    """Get or create the process-wide Drive client."""
    global _client
    if _client is None:
        if not GOOGLE_CLIENT_SECRET_PATH:
            logger.error("GOOGLE_CLIENT_SECRET_PATH is not set")
            raise APIError(503, "Drive integration is not configured.")
        _client = DriveClient(ServiceAccountCredentials.from_file(GOOGLE_CLIENT_SECRET_PATH))
    return _client


def get_importer(client: DriveClient = Depends(get_drive_client)) -> DocumentImporter:
    return DocumentImporter(client, ARTICLE_IMAGE_PATH)


@router.get("/drafts")
def list_drafts(
    role: Role = Depends(require_admin),
    client: DriveClient = Depends(get_drive_client),
) -> list[DriveFile]:
    return client.list_drafts()


@router.get("/finals")
def list_finals(
    role: Role = Depends(require_admin),
    client: DriveClient = Depends(get_drive_client),
) -> list[DriveFile]:
    return client.list_finals()


@router.post("/final/{file_id}")
def move_draft_to_final(
    file_id: str,
    role: Role = Depends(require_admin),
    client: DriveClient = Depends(get_drive_client),
) -> DriveFile:
    if not any(f.id == file_id for f in client.list_drafts()):
        raise APIError.not_found("File not found in drafts folder.")
    return client.move_to_final(file_id)


@router.post("/draft/{file_id}")
def move_final_to_draft(
    file_id: str,
    role: Role = Depends(require_admin),
    client: DriveClient = Depends(get_drive_client),
) -> DriveFile:
    if not any(f.id == file_id for f in client.list_finals()):
        raise APIError.not_found("File not found in finals folder.")
    return client.move_to_draft(file_id)


@router.get("/content/{file_id}")
def get_file_content(
    file_id: str,
    role: Role = Depends(require_editor),
    importer: DocumentImporter = Depends(get_importer),
) -> ArticleContent:
    """Import a Drive document as an article body without storing it."""
    return importer.import_article(file_id)
