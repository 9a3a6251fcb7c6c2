"""
Identity token API route.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_token_codec
from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.auth import TokenRequest, TokenResponse
from core.domain import IdentityClaim
from core.security import IdentityTokenCodec

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post("/jwt", response_model=TokenResponse)
@limiter.limit(get_rate_limit("token"))
async def issue_token(
    request: Request,
    body: TokenRequest,
    codec: Annotated[IdentityTokenCodec, Depends(get_token_codec)],
):
    """
    Issue a signed identity token for an email.

    The frontend calls this right after its identity provider signs the
    user in, and sends the token as a bearer credential from then on.
    """
    claim = IdentityClaim(email=body.email)
    token = codec.issue(claim)
    logger.info("Issued identity token for %s", claim.email)
    return TokenResponse(token=token, expires_in=codec.expire_days * 24 * 60 * 60)
