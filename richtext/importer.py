"""Document import service: export -> unpack -> build."""

import logging
from pathlib import Path
from typing import Literal, Protocol

from richtext.assets import extract_assets
from richtext.builder import build_article_content
from richtext.errors import FormatError
from richtext.models import ArticleContent

logger = logging.getLogger(__name__)

ExportFormat = Literal["zip", "html"]


class DocumentSource(Protocol):
    """Anything that can export a document by id."""

    def export(self, document_id: str, export_format: ExportFormat) -> bytes: ...


def import_archive(zip_bytes: bytes, image_root: Path) -> ArticleContent:
    """Build an article from a ZIP export, storing its images under ``image_root``."""
    html_text, asset_map = extract_assets(zip_bytes, image_root)
    return build_article_content(html_text, asset_map)


def import_html(html_text: str) -> ArticleContent:
    """Build an article from a plain HTML export (no images to extract)."""
    return build_article_content(html_text)


class DocumentImporter:
    """Turn documents from a ``DocumentSource`` into ``ArticleContent``.

    Holds no per-import state; concurrent imports of different documents are
    safe because stored image names are derived from their content.
    """

    def __init__(self, source: DocumentSource, image_root: Path) -> None:
        self.source = source
        self.image_root = Path(image_root)

    def import_article(self, document_id: str, export_format: ExportFormat = "zip") -> ArticleContent:
        """Export a document and build its rich-text body.

        ``FormatError``/``RemoteError`` from the pipeline and ``OSError`` from
        image storage are raised unchanged.
        """
        logger.info("Importing document %s (%s export)", document_id, export_format)
        payload = self.source.export(document_id, export_format)

        if export_format == "zip":
            content = import_archive(payload, self.image_root)
        else:
            try:
                html_text = payload.decode("utf-8")
            except UnicodeDecodeError as e:
                raise FormatError("HTML export is not valid UTF-8") from e
            content = import_html(html_text)

        logger.info("Imported document %s: %r, %d paragraphs", document_id, content.headline, len(content.paragraphs))
        return content
