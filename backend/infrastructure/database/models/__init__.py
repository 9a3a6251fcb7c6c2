"""
SQLAlchemy database models.
"""

from .base import Base, TimestampMixin
from .content import Article, ArticleStatus, Publisher
from .user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "Article",
    "ArticleStatus",
    "Publisher",
]
