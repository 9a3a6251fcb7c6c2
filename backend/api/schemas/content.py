"""
Article request and response schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_tags(v: Optional[list[str]]) -> Optional[list[str]]:
    if v is None:
        return v
    return [tag.strip() for tag in v if tag and tag.strip()]


class ArticleCreateRequest(BaseModel):
    """Article submission."""

    title: str = Field(..., min_length=1, max_length=500)
    body: str = Field(..., min_length=1)
    image_url: Optional[str] = Field(None, max_length=1000)
    publisher: str = Field(..., min_length=1, max_length=255)
    tags: list[str] = Field(default_factory=list, max_length=20)
    author_name: Optional[str] = Field(None, max_length=255)
    author_photo: Optional[str] = Field(None, max_length=1000)

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Drop blank labels and surrounding whitespace."""
        return _clean_tags(v)


class ArticleUpdateRequest(BaseModel):
    """Author edit; omitted fields are left unchanged."""

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    body: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = Field(None, max_length=1000)
    publisher: Optional[str] = Field(None, min_length=1, max_length=255)
    tags: Optional[list[str]] = Field(None, max_length=20)

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Drop blank labels and surrounding whitespace."""
        return _clean_tags(v)


class ArticleSummary(BaseModel):
    """Listing entry; the body is only served by the single-article read."""

    id: str
    title: str
    image_url: Optional[str] = None
    publisher: str
    tags: list[str] = []
    author_name: Optional[str] = None
    author_photo: Optional[str] = None
    is_premium: bool
    view_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ArticleResponse(ArticleSummary):
    """Full article."""

    body: str
    author_email: str
    status: str
    decline_reason: Optional[str] = None
    updated_at: datetime


class ViewCountResponse(BaseModel):
    id: str
    view_count: int
