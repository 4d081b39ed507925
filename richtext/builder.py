"""Build an ``ArticleContent`` document from exported HTML."""

import logging

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from richtext.assets import AssetMap
from richtext.errors import FormatError
from richtext.models import (
    ArticleContent,
    ArticleParagraph,
    ArticleSpan,
    SpanContent,
    anchor_span,
    image_span,
    text_span,
)
from richtext.styles import parse_style

logger = logging.getLogger(__name__)


def _flatten(node: PageElement) -> str:
    """Text content of a node with all markup removed."""
    if isinstance(node, Tag):
        return node.get_text()
    return str(node)


def _is_text(node: PageElement) -> bool:
    # Comments, CDATA, doctypes etc. are PreformattedString subclasses.
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return value


def _make_anchor(tag: Tag) -> SpanContent:
    return anchor_span(href=_attr(tag, "href"), content=tag.get_text())


def _make_image(tag: Tag, asset_map: AssetMap) -> SpanContent:
    src = _attr(tag, "src")
    location = asset_map.get(src)
    if location is not None:
        src = location.url

    styles = parse_style(tag.get("style"))
    return image_span(
        src=src,
        width=styles.get("width", ""),
        height=styles.get("height", ""),
        alt=_attr(tag, "alt"),
    )


def _build_span(span: Tag, asset_map: AssetMap) -> ArticleSpan:
    content: list[SpanContent] = []
    for child in span.children:
        if isinstance(child, Tag):
            if child.name == "a":
                content.append(_make_anchor(child))
            elif child.name == "img":
                content.append(_make_image(child, asset_map))
        elif _is_text(child):
            content.append(text_span(str(child)))

    styles = parse_style(span.get("style"))
    return ArticleSpan(
        content=content,
        font_style=styles.get("font-style", "normal"),
        text_decoration=styles.get("text-decoration", "none"),
        color=styles.get("color", "#000000"),
        font_weight=styles.get("font-weight", "400"),
    )


def _build_paragraph(paragraph: Tag, asset_map: AssetMap) -> ArticleParagraph:
    styles = parse_style(paragraph.get("style"))
    return ArticleParagraph(
        text_alignment=styles.get("text-align", "left"),
        text_indent=styles.get("text-indent", "0"),
        margin_left=styles.get("margin-left", "0"),
        margin_right=styles.get("margin-right", "0"),
        spans=[_build_span(span, asset_map) for span in paragraph.find_all("span")],
    )


def build_article_content(html_text: str, asset_map: AssetMap | None = None) -> ArticleContent:
    """Convert exported HTML into an ``ArticleContent``.

    The first ``<p>`` supplies the headline (text of its first child); every
    following ``<p>`` becomes a paragraph whose ``<span>`` descendants become
    spans. Raises ``FormatError`` when there is no paragraph or the first one
    is empty.
    """
    asset_map = asset_map or {}
    soup = BeautifulSoup(html_text, "html.parser")

    paragraphs = soup.find_all("p")
    if not paragraphs:
        raise FormatError("Document has no paragraphs")

    first = paragraphs[0]
    if not first.contents:
        raise FormatError("First paragraph of the document is empty")
    headline = _flatten(first.contents[0])

    article = ArticleContent(
        headline=headline,
        paragraphs=[_build_paragraph(p, asset_map) for p in paragraphs[1:]],
    )
    logger.debug("Built article %r with %d paragraphs", headline, len(article.paragraphs))
    return article
