"""
API dependencies for authentication, authorization and service wiring.
"""

from functools import lru_cache
from typing import Annotated, Callable

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.payments import StripeAdapter, create_stripe_adapter
from core.access import AccessContext, Gate, GateChain
from core.security import IdentityTokenCodec
from infrastructure.config.settings import settings
from infrastructure.database import get_db
from infrastructure.repositories import (
    PublisherDirectory,
    SqlAlchemyArticleStore,
    SqlAlchemyUserDirectory,
)
from services import ArticleAccessPolicy, EntitlementEvaluator


@lru_cache
def get_token_codec() -> IdentityTokenCodec:
    """Process-wide identity token codec configured from settings."""
    return IdentityTokenCodec(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_days=settings.identity_token_expire_days,
    )


def get_user_directory(db: Annotated[AsyncSession, Depends(get_db)]) -> SqlAlchemyUserDirectory:
    return SqlAlchemyUserDirectory(db)


def get_article_store(db: Annotated[AsyncSession, Depends(get_db)]) -> SqlAlchemyArticleStore:
    return SqlAlchemyArticleStore(db)


def get_publisher_directory(db: Annotated[AsyncSession, Depends(get_db)]) -> PublisherDirectory:
    return PublisherDirectory(db)


def get_entitlement_evaluator(
    directory: Annotated[SqlAlchemyUserDirectory, Depends(get_user_directory)],
) -> EntitlementEvaluator:
    return EntitlementEvaluator(directory, settings.subscription_tiers)


def get_article_policy(
    store: Annotated[SqlAlchemyArticleStore, Depends(get_article_store)],
    evaluator: Annotated[EntitlementEvaluator, Depends(get_entitlement_evaluator)],
) -> ArticleAccessPolicy:
    return ArticleAccessPolicy(store, evaluator)


def get_payment_adapter() -> StripeAdapter:
    return create_stripe_adapter()


async def access_context(
    request: Request,
    codec: Annotated[IdentityTokenCodec, Depends(get_token_codec)],
    directory: Annotated[SqlAlchemyUserDirectory, Depends(get_user_directory)],
) -> AccessContext:
    """
    Unevaluated access context for the request.

    Used directly by routes whose gating depends on the resource (premium
    reads); the policy runs its own chain against it.
    """
    return AccessContext(
        codec=codec,
        directory=directory,
        authorization=request.headers.get("authorization"),
        path_params=dict(request.path_params),
    )


def authorize(*gates: Gate) -> Callable:
    """
    Dependency factory enforcing an ordered gate chain.

    Usage:
        @router.get("/users", dependencies=[Depends(authorize(Authenticated(), IsAdmin()))])

    The dependency resolves to the evaluated ``AccessContext`` so handlers
    can read the verified claim (and the admin user, when IsAdmin ran).
    """
    chain = GateChain(gates)

    async def dependency(
        context: Annotated[AccessContext, Depends(access_context)],
    ) -> AccessContext:
        return await chain.enforce(context)

    return dependency
