"""Storage-backed implementations of the core repository interfaces."""

from .articles import SqlAlchemyArticleStore
from .publishers import PublisherDirectory, PublisherExistsError
from .users import SqlAlchemyUserDirectory

__all__ = [
    "PublisherDirectory",
    "PublisherExistsError",
    "SqlAlchemyArticleStore",
    "SqlAlchemyUserDirectory",
]
