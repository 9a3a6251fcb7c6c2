"""
Article access policy.

Combines gate outcomes with article flags (status, premium, author, quota)
to decide reads and writes.
"""

import logging
from typing import Any

from core.access import AccessContext, Authenticated, GateChain
from core.errors import Forbidden, NotFound, PremiumRequired, QuotaExceeded
from core.interfaces import ArticleFilters, ArticleStore
from infrastructure.database.models import Article, ArticleStatus

from .entitlements import EntitlementEvaluator

logger = logging.getLogger(__name__)

# Fields an author may change on their own article
AUTHOR_EDITABLE_FIELDS = {"title", "body", "image_url", "publisher", "tags"}

_require_login = GateChain([Authenticated()])


class ArticleAccessPolicy:
    """Read/write decisions for articles."""

    def __init__(self, store: ArticleStore, entitlements: EntitlementEvaluator):
        self._store = store
        self._entitlements = entitlements

    async def _require_subscriber(self, context: AccessContext) -> None:
        await _require_login.enforce(context)
        state = await self._entitlements.evaluate(context.claim.email)
        if not state.is_subscribed:
            raise PremiumRequired()

    async def _can_see_unpublished(self, article: Article, context: AccessContext) -> bool:
        if not (await _require_login.evaluate(context)).allowed:
            return False
        if article.author_email == context.claim.email:
            return True
        user = await context.directory.find_by_email(context.claim.email)
        return user is not None and user.is_admin

    async def read(self, article_id: str, context: AccessContext) -> Article:
        """
        Fetch one article.

        Approved non-premium articles are public. Premium articles require a
        logged-in caller with an active entitlement. Pending and declined
        articles are visible only to their author and to admins; anyone else
        gets NotFound.
        """
        article = await self._store.get(article_id)
        if article is None:
            raise NotFound("Article not found")
        if not article.is_approved and not await self._can_see_unpublished(article, context):
            raise NotFound("Article not found")
        if article.is_premium:
            await self._require_subscriber(context)
        return article

    async def list_approved(self, filters: ArticleFilters | None = None) -> list[Article]:
        return await self._store.list_approved(filters)

    async def list_premium(self, context: AccessContext) -> list[Article]:
        await self._require_subscriber(context)
        return await self._store.list_approved(premium_only=True)

    async def list_trending(self, limit: int = 6) -> list[Article]:
        return await self._store.list_trending(limit)

    async def submit(self, context: AccessContext, fields: dict[str, Any]) -> Article:
        """
        Submit a new article as the authenticated author.

        Subscribers may submit without limit; everyone else gets one article.
        The count-then-insert is not transactional, so two simultaneous first
        submissions can both land.
        """
        await _require_login.enforce(context)
        email = context.claim.email

        state = await self._entitlements.evaluate(email)
        if not state.is_subscribed:
            existing = await self._store.count_by_author(email)
            if existing > 0:
                logger.info("Submission quota exceeded for %s (%d on record)", email, existing)
                raise QuotaExceeded()

        fields = dict(fields)
        author_name = fields.pop("author_name", None)
        author_photo = fields.pop("author_photo", None)
        author = await context.directory.find_by_email(email)
        if author is not None:
            author_name = author_name or author.name
            author_photo = author_photo or author.photo_url

        article = await self._store.insert(
            **fields,
            author_email=email,
            author_name=author_name,
            author_photo=author_photo,
            status=ArticleStatus.PENDING.value,
            is_premium=False,
            view_count=0,
        )
        logger.info("Article %s submitted by %s", article.id, email)
        return article

    async def update_own(
        self,
        article_id: str,
        context: AccessContext,
        fields: dict[str, Any],
    ) -> Article:
        """Author edit; sends the article back to moderation."""
        await _require_login.enforce(context)
        article = await self._store.get(article_id)
        if article is None:
            raise NotFound("Article not found")
        if article.author_email != context.claim.email:
            raise Forbidden("You can only edit your own articles")

        changes = {k: v for k, v in fields.items() if k in AUTHOR_EDITABLE_FIELDS}
        return await self._store.update(
            article_id,
            **changes,
            status=ArticleStatus.PENDING.value,
            decline_reason=None,
        )

    async def record_view(self, article_id: str) -> int:
        """Count a view. Ungated; raises NotFound for unknown ids."""
        return await self._store.increment_views(article_id)

    async def list_own(self, email: str) -> list[Article]:
        return await self._store.list_by_author(email)

    # Moderation. Callers are expected to have passed Authenticated + IsAdmin.

    async def list_all(self) -> list[Article]:
        return await self._store.list_all()

    async def approve(self, article_id: str) -> Article:
        article = await self._store.update(
            article_id,
            status=ArticleStatus.APPROVED.value,
            decline_reason=None,
        )
        logger.info("Article %s approved", article_id)
        return article

    async def decline(self, article_id: str, reason: str) -> Article:
        article = await self._store.update(
            article_id,
            status=ArticleStatus.DECLINED.value,
            decline_reason=reason,
        )
        logger.info("Article %s declined", article_id)
        return article

    async def set_premium(self, article_id: str, is_premium: bool) -> Article:
        return await self._store.update(article_id, is_premium=is_premium)

    async def delete(self, article_id: str) -> None:
        await self._store.delete(article_id)
        logger.info("Article %s deleted", article_id)
