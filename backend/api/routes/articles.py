"""
Public and author article API routes.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import access_context, get_article_policy
from api.schemas.content import (
    ArticleCreateRequest,
    ArticleResponse,
    ArticleSummary,
    ArticleUpdateRequest,
    ViewCountResponse,
)
from core.access import AccessContext
from core.interfaces import ArticleFilters
from services import ArticleAccessPolicy

router = APIRouter(prefix="/articles", tags=["Articles"])

Policy = Annotated[ArticleAccessPolicy, Depends(get_article_policy)]
Context = Annotated[AccessContext, Depends(access_context)]


@router.get("", response_model=list[ArticleSummary])
async def list_articles(
    policy: Policy,
    title: Optional[str] = Query(None, max_length=200),
    publisher: Optional[str] = Query(None, max_length=255),
    tag: Optional[str] = Query(None, max_length=100),
):
    """
    Approved articles, newest first.

    Filters are case-insensitive substring matches and combine with AND.
    """
    return await policy.list_approved(ArticleFilters(title=title, publisher=publisher, tag=tag))


@router.get("/trending", response_model=list[ArticleSummary])
async def list_trending(policy: Policy, limit: int = Query(6, ge=1, le=50)):
    return await policy.list_trending(limit)


@router.get("/premium", response_model=list[ArticleSummary])
async def list_premium(policy: Policy, context: Context):
    """Approved premium articles; subscribers only."""
    return await policy.list_premium(context)


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(article_id: str, policy: Policy, context: Context):
    """Single article. Premium articles need an active subscription."""
    return await policy.read(article_id, context)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def submit_article(body: ArticleCreateRequest, policy: Policy, context: Context):
    """Submit an article for moderation."""
    return await policy.submit(context, body.model_dump())


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: str,
    body: ArticleUpdateRequest,
    policy: Policy,
    context: Context,
):
    """Edit your own article. The edit goes back to moderation."""
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    return await policy.update_own(article_id, context, changes)


@router.patch("/{article_id}/views", response_model=ViewCountResponse)
async def record_view(article_id: str, policy: Policy):
    view_count = await policy.record_view(article_id)
    return ViewCountResponse(id=article_id, view_count=view_count)
