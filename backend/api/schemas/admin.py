"""
Moderation request and response schemas.
"""

from pydantic import BaseModel, Field


class DeclineRequest(BaseModel):
    """Reason shown to the author."""

    reason: str = Field(..., min_length=1, max_length=2000)


class PremiumToggleRequest(BaseModel):
    is_premium: bool


class SiteStatsResponse(BaseModel):
    """Site-wide counters for the admin dashboard."""

    users: int
    premium_users: int
    articles: int
    approved_articles: int
    premium_articles: int
    total_views: int
