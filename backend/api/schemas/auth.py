"""
Identity token request and response schemas.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class TokenRequest(BaseModel):
    """Token issue request; the frontend posts the signed-in user's profile."""

    email: EmailStr
    name: Optional[str] = Field(None, max_length=255)
    photo_url: Optional[str] = Field(None, max_length=1000)


class TokenResponse(BaseModel):
    """Token response schema."""

    token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until the token expires
