"""
Payment intent API route.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import authorize, get_payment_adapter
from api.schemas.payments import PaymentIntentRequest, PaymentIntentResponse
from adapters.payments import PaymentProviderError, StripeAdapter
from core.access import AccessContext, Authenticated
from core.errors import InvalidPaymentAmount, PaymentUnavailable

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post("/intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    body: PaymentIntentRequest,
    context: Annotated[AccessContext, Depends(authorize(Authenticated()))],
    payments: Annotated[StripeAdapter, Depends(get_payment_adapter)],
):
    """
    Start a checkout for a premium tier.

    Returns the processor's client secret. The subscription itself is granted
    through ``PATCH /users/{email}/subscription`` after confirmation.
    """
    try:
        client_secret = await payments.create_payment_intent(body.amount_cents)
    except ValueError as e:
        raise InvalidPaymentAmount(str(e)) from e
    except PaymentProviderError as e:
        logger.error("Payment intent failed for %s: %s", context.email, e)
        raise PaymentUnavailable() from e
    return PaymentIntentResponse(client_secret=client_secret)
