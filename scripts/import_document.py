#!/usr/bin/env python3
"""CLI to import a Drive document (or a local export) as an article body."""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import ARTICLE_IMAGE_PATH, GOOGLE_CLIENT_SECRET_PATH
from drive.client import DriveClient
from drive.credentials import ServiceAccountCredentials
from richtext.errors import DocumentImportError
from richtext.importer import DocumentImporter, import_archive, import_html
from richtext.models import ArticleContent


def _run(args: argparse.Namespace) -> ArticleContent:
    if args.zip:
        return import_archive(Path(args.zip).read_bytes(), args.image_root)
    if args.html:
        return import_html(Path(args.html).read_text(encoding="utf-8"))

    if not GOOGLE_CLIENT_SECRET_PATH:
        raise SystemExit("GOOGLE_CLIENT_SECRET_PATH must be set to import from Drive")
    client = DriveClient(ServiceAccountCredentials.from_file(GOOGLE_CLIENT_SECRET_PATH))
    importer = DocumentImporter(client, args.image_root)
    return importer.import_article(args.document_id, export_format=args.format)


def main() -> None:
    parser = argparse.ArgumentParser(description="Import a document into the article rich-text format")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("document_id", nargs="?", help="Google Drive document id")
    source.add_argument("--zip", help="Path to a local ZIP export")
    source.add_argument("--html", help="Path to a local HTML export")
    parser.add_argument(
        "--format",
        choices=["zip", "html"],
        default="zip",
        help="Export format requested from Drive (default: zip)",
    )
    parser.add_argument(
        "--image-root",
        type=Path,
        default=ARTICLE_IMAGE_PATH,
        help="Directory extracted images are written to",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    try:
        content = _run(args)
    except (DocumentImportError, OSError):
        logging.exception("Import failed")
        sys.exit(1)

    print(content.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
