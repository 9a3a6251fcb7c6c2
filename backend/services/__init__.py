"""
Service layer for business logic.
"""

from .article_access import ArticleAccessPolicy
from .entitlements import EntitlementEvaluator, as_utc, utcnow

__all__ = [
    "ArticleAccessPolicy",
    "EntitlementEvaluator",
    "as_utc",
    "utcnow",
]
