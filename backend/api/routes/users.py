"""
User, role and subscription API routes.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Request

from api.dependencies import (
    authorize,
    get_article_policy,
    get_entitlement_evaluator,
    get_user_directory,
)
from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.content import ArticleResponse
from api.schemas.users import (
    AdminRoleUpdateRequest,
    EntitlementResponse,
    SubscriptionRequest,
    UserCreateRequest,
    UserResponse,
)
from core.access import Authenticated, IsAdmin, IsSelf, NotFound
from core.domain import normalize_email
from infrastructure.repositories import SqlAlchemyUserDirectory
from services import ArticleAccessPolicy, EntitlementEvaluator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])

require_admin = authorize(Authenticated(), IsAdmin())
require_self = authorize(Authenticated(), IsSelf("email"))

Directory = Annotated[SqlAlchemyUserDirectory, Depends(get_user_directory)]


@router.post("", response_model=UserResponse)
@limiter.limit(get_rate_limit("signup"))
async def upsert_user(request: Request, body: UserCreateRequest, directory: Directory):
    """Create the user record on first login; later calls return it unchanged."""
    return await directory.upsert_on_first_login(
        email=body.email,
        name=body.name,
        photo_url=body.photo_url,
    )


@router.get("", response_model=list[UserResponse], dependencies=[Depends(require_admin)])
async def list_users(directory: Directory):
    return await directory.list_all()


@router.patch("/{email}", response_model=UserResponse, dependencies=[Depends(require_admin)])
async def update_admin_role(
    email: str,
    directory: Directory,
    body: Optional[AdminRoleUpdateRequest] = None,
):
    """Grant or revoke the admin flag. An empty body promotes the user."""
    is_admin = body.is_admin if body is not None else True
    user = await directory.set_admin(email, is_admin)
    logger.info("Admin flag for %s set to %s", user.email, is_admin)
    return user


@router.get("/{email}", response_model=UserResponse, dependencies=[Depends(require_self)])
async def get_user(email: str, directory: Directory):
    user = await directory.find_by_email(email)
    if user is None:
        raise NotFound("User not found")
    return user


@router.get(
    "/{email}/entitlement",
    response_model=EntitlementResponse,
    dependencies=[Depends(require_self)],
)
async def get_entitlement(
    email: str,
    evaluator: Annotated[EntitlementEvaluator, Depends(get_entitlement_evaluator)],
):
    """Current premium status. Clears the expiry if it has lapsed."""
    state = await evaluator.evaluate(email)
    return EntitlementResponse(is_subscribed=state.is_subscribed, premium_expiry=state.premium_expiry)


@router.patch(
    "/{email}/subscription",
    response_model=EntitlementResponse,
    dependencies=[Depends(require_self)],
)
async def grant_subscription(
    email: str,
    body: SubscriptionRequest,
    evaluator: Annotated[EntitlementEvaluator, Depends(get_entitlement_evaluator)],
):
    """
    Start a premium period for the caller.

    Called by the frontend once the payment processor confirms the charge.
    """
    state = await evaluator.grant(email, body.tier)
    return EntitlementResponse(is_subscribed=state.is_subscribed, premium_expiry=state.premium_expiry)


@router.get(
    "/{email}/articles",
    response_model=list[ArticleResponse],
    dependencies=[Depends(require_self)],
)
async def list_own_articles(
    email: str,
    policy: Annotated[ArticleAccessPolicy, Depends(get_article_policy)],
):
    """Everything the caller submitted, in any moderation state."""
    return await policy.list_own(normalize_email(email))
