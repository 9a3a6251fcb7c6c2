"""Core interfaces (ports) for the application."""

from .repositories import ArticleFilters, ArticleStore, UserDirectory

__all__ = [
    "ArticleFilters",
    "ArticleStore",
    "UserDirectory",
]
