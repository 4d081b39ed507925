"""Picture uploads for article thumbnails and headshots."""

import logging
import uuid

from fastapi import APIRouter, Depends, File, Response, UploadFile

from api.errors import APIError
from api.session import Role, require_editor
from config import ARTICLE_IMAGE_PATH
from richtext.assets import store_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])

_JPEG_TYPES = {"image/jpeg", "image/jpg", "image/pjpeg"}


@router.post("/upload_picture", status_code=201)
def upload_picture(
    picture: UploadFile = File(...),
    role: Role = Depends(require_editor),
) -> Response:
    """Store a JPEG under a random name; ``Location`` gives its public URL."""
    if picture.content_type not in _JPEG_TYPES:
        raise APIError.bad_request("Required image type is JPEG")

    data = picture.file.read()
    location = store_image(ARTICLE_IMAGE_PATH, data, "jpeg", name=str(uuid.uuid4()))
    logger.info("Uploaded picture %s (%d bytes)", location.url, len(data))
    return Response(status_code=201, headers={"Location": location.url})
