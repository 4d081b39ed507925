"""Structured rich-text model for article bodies.

Bodies are stored as the JSON produced by ``ArticleContent.model_dump_json()``.
Fields added by later revisions (paragraph margins and indent, image spans)
carry defaults so that older stored bodies still validate.
"""

from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class TextContent(BaseModel):
    content: str


class AnchorContent(BaseModel):
    href: str = ""
    content: str = ""


class ImageContent(BaseModel):
    src: str
    width: str = ""
    height: str = ""
    alt: str = ""


class TextSpan(BaseModel):
    """``{"text": {"content": ...}}``"""

    model_config = ConfigDict(extra="forbid")

    text: TextContent


class AnchorSpan(BaseModel):
    """``{"anchor": {"href": ..., "content": ...}}``"""

    model_config = ConfigDict(extra="forbid")

    anchor: AnchorContent


class ImageSpan(BaseModel):
    """``{"image": {"src": ..., "width": ..., "height": ..., "alt": ...}}``"""

    model_config = ConfigDict(extra="forbid")

    image: ImageContent


# Externally tagged: each variant is an object with exactly one key.
SpanContent = Union[TextSpan, AnchorSpan, ImageSpan]


class ArticleSpan(BaseModel):
    """A run of inline content sharing one set of character styles."""

    content: list[SpanContent] = Field(default_factory=list)
    font_style: str = "normal"
    text_decoration: str = "none"
    color: str = "#000000"
    font_weight: str = "400"


class ArticleParagraph(BaseModel):
    text_alignment: str = "left"
    text_indent: str = "0"
    margin_left: str = "0"
    margin_right: str = "0"
    spans: list[ArticleSpan] = Field(default_factory=list)


class ArticleContent(BaseModel):
    """Headline plus paragraphs in reading order."""

    headline: str
    paragraphs: list[ArticleParagraph] = Field(default_factory=list)


def text_span(content: str) -> TextSpan:
    return TextSpan(text=TextContent(content=content))


def anchor_span(href: str, content: str) -> AnchorSpan:
    return AnchorSpan(anchor=AnchorContent(href=href, content=content))


def image_span(src: str, width: str = "", height: str = "", alt: str = "") -> ImageSpan:
    return ImageSpan(image=ImageContent(src=src, width=width, height=height, alt=alt))
