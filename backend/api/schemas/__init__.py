"""
API request and response schemas.
"""

from .admin import DeclineRequest, PremiumToggleRequest, SiteStatsResponse
from .auth import TokenRequest, TokenResponse
from .content import (
    ArticleCreateRequest,
    ArticleResponse,
    ArticleSummary,
    ArticleUpdateRequest,
    ViewCountResponse,
)
from .payments import PaymentIntentRequest, PaymentIntentResponse
from .publishers import PublisherCreateRequest, PublisherResponse
from .users import (
    AdminRoleUpdateRequest,
    EntitlementResponse,
    SubscriptionRequest,
    UserCreateRequest,
    UserResponse,
)

__all__ = [
    "AdminRoleUpdateRequest",
    "ArticleCreateRequest",
    "ArticleResponse",
    "ArticleSummary",
    "ArticleUpdateRequest",
    "DeclineRequest",
    "EntitlementResponse",
    "PaymentIntentRequest",
    "PaymentIntentResponse",
    "PremiumToggleRequest",
    "PublisherCreateRequest",
    "PublisherResponse",
    "SiteStatsResponse",
    "SubscriptionRequest",
    "TokenRequest",
    "TokenResponse",
    "UserCreateRequest",
    "UserResponse",
]
