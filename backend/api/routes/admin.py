"""
Admin moderation API routes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import (
    authorize,
    get_article_policy,
    get_article_store,
    get_user_directory,
)
from api.schemas.admin import DeclineRequest, PremiumToggleRequest, SiteStatsResponse
from api.schemas.content import ArticleResponse
from core.access import Authenticated, IsAdmin
from infrastructure.repositories import SqlAlchemyArticleStore, SqlAlchemyUserDirectory
from services import ArticleAccessPolicy, utcnow

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(authorize(Authenticated(), IsAdmin()))],
)

Policy = Annotated[ArticleAccessPolicy, Depends(get_article_policy)]


@router.get("/articles", response_model=list[ArticleResponse])
async def list_all_articles(policy: Policy):
    """Every article regardless of status, newest first."""
    return await policy.list_all()


@router.patch("/articles/{article_id}/approve", response_model=ArticleResponse)
async def approve_article(article_id: str, policy: Policy):
    return await policy.approve(article_id)


@router.patch("/articles/{article_id}/decline", response_model=ArticleResponse)
async def decline_article(article_id: str, body: DeclineRequest, policy: Policy):
    return await policy.decline(article_id, body.reason)


@router.patch("/articles/{article_id}/premium", response_model=ArticleResponse)
async def set_article_premium(article_id: str, body: PremiumToggleRequest, policy: Policy):
    return await policy.set_premium(article_id, body.is_premium)


@router.delete("/articles/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(article_id: str, policy: Policy):
    await policy.delete(article_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/stats", response_model=SiteStatsResponse)
async def site_stats(
    directory: Annotated[SqlAlchemyUserDirectory, Depends(get_user_directory)],
    store: Annotated[SqlAlchemyArticleStore, Depends(get_article_store)],
):
    """Counters for the dashboard charts."""
    users = await directory.summary(utcnow())
    articles = await store.summary()
    return SiteStatsResponse(**users, **articles)
