"""SQLAlchemy models for newsroom."""

import enum
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Section(str, enum.Enum):
    """Newspaper section an article is filed under."""

    NEWS = "news"
    FEATURES = "features"
    OPINION = "opinion"
    SPORTS = "sports"
    ARTS = "arts"


_section_type = Enum(Section, values_callable=lambda e: [m.value for m in e], native_enum=False, length=32)


class Writer(Base):
    __tablename__ = "writers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    __table_args__ = (Index("idx_writer_name", "first_name", "last_name"),)

    def __repr__(self) -> str:
        return f"<Writer(id={self.id}, name={self.first_name!r} {self.last_name!r})>"


class Article(Base):
    """Published article. ``body`` holds the JSON-serialized ArticleContent."""

    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    headline: Mapped[str] = mapped_column(String(512), nullable=False)
    focus: Mapped[str] = mapped_column(Text, nullable=False, default="")
    slug: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    writer_id: Mapped[int] = mapped_column(ForeignKey("writers.id"), nullable=False)
    section: Mapped[Section] = mapped_column(_section_type, nullable=False)
    publication_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    drive_file_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("idx_article_slug", "slug"),
        Index("idx_article_section", "section"),
        Index("idx_article_published", "publication_date"),
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, slug={self.slug!r})>"


class ArticleSubmission(Base):
    """An article proposed by an editor, pointing at its Drive document."""

    __tablename__ = "article_submission"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    headline: Mapped[str] = mapped_column(String(512), nullable=False)
    focus: Mapped[str] = mapped_column(Text, nullable=False, default="")
    section: Mapped[Section] = mapped_column(_section_type, nullable=False)
    author_id: Mapped[int] = mapped_column(ForeignKey("writers.id"), nullable=False)
    drive_file_id: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<ArticleSubmission(id={self.id}, headline={self.headline!r})>"
