"""
User, role and subscription schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreateRequest(BaseModel):
    """First-login upsert request."""

    email: EmailStr
    name: Optional[str] = Field(None, max_length=255)
    photo_url: Optional[str] = Field(None, max_length=1000)


class UserResponse(BaseModel):
    """User response schema."""

    id: str
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = None
    is_admin: bool
    premium_expiry: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AdminRoleUpdateRequest(BaseModel):
    """Grant or revoke the admin flag."""

    is_admin: bool = True


class SubscriptionRequest(BaseModel):
    """Premium tier selection, e.g. "5-days"."""

    tier: str = Field(..., min_length=1, max_length=50)


class EntitlementResponse(BaseModel):
    """Current premium entitlement."""

    is_subscribed: bool
    premium_expiry: Optional[datetime] = None
