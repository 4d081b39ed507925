"""ZIP export unpacking and content-addressed image storage.

Images are written to ``<root>/<year>/<month>/<name>.<extension>`` where the
name is derived from the image bytes, so re-importing an unchanged image
lands on the same file.
"""

import hashlib
import io
import logging
import uuid
import zipfile
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import NamedTuple

from richtext.errors import FormatError

logger = logging.getLogger(__name__)

IMAGES_PREFIX = "images/"
DEFAULT_IMAGE_EXTENSION = "png"


class AssetLocation(NamedTuple):
    """Where a stored image lives, relative to the image root."""

    year: int
    month: int
    name: str
    extension: str

    @property
    def relative_path(self) -> Path:
        return Path(str(self.year), str(self.month), f"{self.name}.{self.extension}")

    @property
    def url(self) -> str:
        """Public URL served by the ``/image`` static mount."""
        return f"/image/{self.year}/{self.month}/{self.name}.{self.extension}"


AssetMap = dict[str, AssetLocation]


def content_name(data: bytes) -> str:
    """Deterministic name for a blob: UUID v3 (URL namespace) of its bytes."""
    # uuid.uuid3 only takes bytes from 3.12 on
    digest = hashlib.md5(uuid.NAMESPACE_URL.bytes + data, usedforsecurity=False).digest()
    return str(uuid.UUID(bytes=digest[:16], version=3))


def store_image(
    root: Path,
    data: bytes,
    extension: str,
    name: str | None = None,
    now: datetime | None = None,
) -> AssetLocation:
    """Write image bytes under the date-partitioned image root.

    Uses ``content_name(data)`` when no name is given. Overwrites an existing
    file of the same name. ``OSError`` from the filesystem propagates.
    """
    now = now or datetime.now(timezone.utc)
    location = AssetLocation(now.year, now.month, name or content_name(data), extension)

    path = Path(root) / location.relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)

    logger.debug("Stored image %s (%d bytes)", path, len(data))
    return location


def _extension(entry_name: str) -> str:
    suffix = PurePosixPath(entry_name).suffix
    return suffix[1:] if suffix else DEFAULT_IMAGE_EXTENSION


def extract_assets(
    zip_bytes: bytes,
    image_root: Path,
    now: datetime | None = None,
) -> tuple[str, AssetMap]:
    """Split an exported ZIP into its HTML text and stored images.

    Returns the HTML (all ``.html`` entries concatenated in archive order)
    and a map from each in-archive image path to its stored location.
    Nothing is written unless the whole archive reads and decodes cleanly.
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(zip_bytes))
    except zipfile.BadZipFile as e:
        raise FormatError(f"Export is not a valid ZIP archive: {e}") from e

    html_parts: list[str] = []
    images: list[tuple[str, bytes]] = []

    with archive:
        for info in archive.infolist():
            if info.is_dir():
                continue
            entry_name = info.filename
            is_image = entry_name.startswith(IMAGES_PREFIX)
            if not is_image and not entry_name.endswith(".html"):
                continue

            try:
                data = archive.read(info)
            except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
                raise FormatError(f"Could not read archive entry {entry_name!r}: {e}") from e

            if is_image:
                images.append((entry_name, data))
                continue
            try:
                html_parts.append(data.decode("utf-8"))
            except UnicodeDecodeError as e:
                raise FormatError(f"HTML entry {entry_name!r} is not valid UTF-8") from e

    if not html_parts:
        raise FormatError("Export contains no HTML document")

    now = now or datetime.now(timezone.utc)
    asset_map: AssetMap = {
        entry_name: store_image(image_root, data, _extension(entry_name), now=now)
        for entry_name, data in images
    }

    logger.info("Extracted %d HTML entries and %d images", len(html_parts), len(asset_map))
    return "".join(html_parts), asset_map
