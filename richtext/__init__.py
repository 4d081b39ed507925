from richtext.assets import AssetLocation, extract_assets, store_image
from richtext.builder import build_article_content
from richtext.errors import DocumentImportError, FormatError, RemoteError
from richtext.importer import DocumentImporter, DocumentSource, import_archive, import_html
from richtext.models import ArticleContent, ArticleParagraph, ArticleSpan, SpanContent
from richtext.styles import parse_style

__all__ = [
    "AssetLocation",
    "ArticleContent",
    "ArticleParagraph",
    "ArticleSpan",
    "DocumentImportError",
    "DocumentImporter",
    "DocumentSource",
    "FormatError",
    "RemoteError",
    "SpanContent",
    "build_article_content",
    "extract_assets",
    "import_archive",
    "import_html",
    "parse_style",
    "store_image",
]
