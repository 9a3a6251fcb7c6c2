"""
SQLAlchemy-backed article store.
"""

import logging
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import NotFound
from core.interfaces import ArticleFilters, ArticleStore
from infrastructure.database.models import Article, ArticleStatus
from infrastructure.database.utils import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger(__name__)


def _has_tag(article: Article, needle: str) -> bool:
    return any(needle in str(label).lower() for label in (article.tags or []))


class SqlAlchemyArticleStore(ArticleStore):
    """Article persistence on a single async session."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, article_id: str) -> Article | None:
        result = await self._session.execute(select(Article).where(Article.id == article_id))
        return result.scalar_one_or_none()

    async def _require(self, article_id: str) -> Article:
        article = await self.get(article_id)
        if article is None:
            raise NotFound(f"Article {article_id} not found")
        return article

    async def insert(self, **fields: Any) -> Article:
        article = Article(**fields)
        self._session.add(article)
        await self._session.commit()
        await self._session.refresh(article)
        return article

    async def update(self, article_id: str, **fields: Any) -> Article:
        article = await self._require(article_id)
        for name, value in fields.items():
            setattr(article, name, value)
        await self._session.commit()
        await self._session.refresh(article)
        return article

    async def delete(self, article_id: str) -> None:
        article = await self._require(article_id)
        await self._session.delete(article)
        await self._session.commit()

    async def list_approved(
        self,
        filters: ArticleFilters | None = None,
        premium_only: bool = False,
    ) -> list[Article]:
        """
        Approved articles, newest first.

        Title and publisher filters run in SQL; the tag filter matches inside
        the JSON label list and is applied to the fetched rows.
        """
        filters = filters or ArticleFilters()
        query = select(Article).where(Article.status == ArticleStatus.APPROVED.value)

        if premium_only:
            query = query.where(Article.is_premium.is_(True))
        if filters.title and filters.title.strip():
            query = query.where(
                Article.title.ilike(contains_pattern(filters.title), escape=LIKE_ESCAPE)
            )
        if filters.publisher and filters.publisher.strip():
            query = query.where(
                Article.publisher.ilike(contains_pattern(filters.publisher), escape=LIKE_ESCAPE)
            )

        query = query.order_by(Article.created_at.desc(), Article.id)
        articles = list((await self._session.execute(query)).scalars().all())

        if filters.tag and filters.tag.strip():
            needle = filters.tag.strip().lower()
            articles = [a for a in articles if _has_tag(a, needle)]
        return articles

    async def list_trending(self, limit: int) -> list[Article]:
        query = (
            select(Article)
            .where(Article.status == ArticleStatus.APPROVED.value)
            .order_by(Article.view_count.desc(), Article.created_at.desc())
            .limit(limit)
        )
        return list((await self._session.execute(query)).scalars().all())

    async def list_by_author(self, email: str) -> list[Article]:
        query = (
            select(Article)
            .where(Article.author_email == email)
            .order_by(Article.created_at.desc())
        )
        return list((await self._session.execute(query)).scalars().all())

    async def list_all(self) -> list[Article]:
        query = select(Article).order_by(Article.created_at.desc())
        return list((await self._session.execute(query)).scalars().all())

    async def count_by_author(self, email: str) -> int:
        query = select(func.count()).select_from(Article).where(Article.author_email == email)
        return (await self._session.execute(query)).scalar() or 0

    async def increment_views(self, article_id: str) -> int:
        """Single-statement increment; safe under concurrent readers."""
        result = await self._session.execute(
            update(Article)
            .where(Article.id == article_id)
            .values(view_count=Article.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        await self._session.commit()
        if result.rowcount == 0:
            raise NotFound(f"Article {article_id} not found")

        # Refresh any instance already held by the session
        fresh = await self._session.execute(
            select(Article)
            .where(Article.id == article_id)
            .execution_options(populate_existing=True)
        )
        return fresh.scalar_one().view_count

    async def summary(self) -> dict[str, int]:
        """Article counters for the admin dashboard."""
        row = (
            await self._session.execute(
                select(
                    func.count(Article.id),
                    func.coalesce(func.sum(Article.view_count), 0),
                )
            )
        ).one()
        approved = (
            await self._session.execute(
                select(func.count())
                .select_from(Article)
                .where(Article.status == ArticleStatus.APPROVED.value)
            )
        ).scalar() or 0
        premium = (
            await self._session.execute(
                select(func.count()).select_from(Article).where(Article.is_premium.is_(True))
            )
        ).scalar() or 0
        return {
            "articles": int(row[0]),
            "approved_articles": approved,
            "premium_articles": premium,
            "total_views": int(row[1]),
        }
