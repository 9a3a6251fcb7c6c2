"""
Content database models: Article and Publisher.
"""

from enum import Enum
from typing import Optional
from uuid import uuid4

from sqlalchemy import Boolean, CheckConstraint, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class ArticleStatus(str, Enum):
    """Moderation status enumeration."""

    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"


class Article(Base, TimestampMixin):
    """Submitted news article."""

    __tablename__ = "articles"
    __table_args__ = (
        CheckConstraint("view_count >= 0", name="ck_articles_view_count_non_negative"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Content
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    publisher: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    tags: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    """
    Structure: ["AI", "Technology", ...]
    """

    # Author (denormalized from the submitting user)
    author_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    author_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    author_photo: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)

    # Moderation (admin controlled)
    status: Mapped[str] = mapped_column(
        String(50),
        default=ArticleStatus.PENDING.value,
        nullable=False,
        index=True,
    )
    decline_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)

    view_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, title={self.title[:30]}, status={self.status})>"

    @property
    def is_approved(self) -> bool:
        return self.status == ArticleStatus.APPROVED.value


class Publisher(Base, TimestampMixin):
    """Publisher reference entry."""

    __tablename__ = "publishers"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    logo_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)

    def __repr__(self) -> str:
        return f"<Publisher(name={self.name})>"
