"""
Stripe payment-intent adapter.

Only creates payment intents and hands the client secret back to the
frontend. Confirmation and settlement happen out of band; the premium
entitlement is granted by a separate call once payment is confirmed.
"""

import logging
from typing import Any

import httpx

from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)


# Custom Exceptions
class PaymentProviderError(Exception):
    """Base exception for payment provider errors."""

    pass


class PaymentProviderAPIError(PaymentProviderError):
    """Raised when the payment provider API returns an error."""

    pass


class PaymentProviderAuthError(PaymentProviderError):
    """Raised when the payment provider key is missing or rejected."""

    pass


class StripeAdapter:
    """
    Stripe REST adapter for payment intents.

    Talks to the form-encoded Stripe API directly over httpx.
    """

    API_BASE_URL = "https://api.stripe.com/v1"

    def __init__(
        self,
        secret_key: str | None = None,
        api_base: str | None = None,
        timeout: float = 30.0,
    ):
        """
        Initialize Stripe adapter.

        Args:
            secret_key: Stripe secret key (defaults to settings)
            api_base: API base URL (defaults to settings)
            timeout: Request timeout in seconds
        """
        self.secret_key = secret_key or settings.stripe_secret_key
        self.api_base = (api_base or settings.stripe_api_base or self.API_BASE_URL).rstrip("/")
        self.timeout = timeout

        if not self.secret_key:
            logger.warning("Stripe secret key not configured. Set stripe_secret_key in settings.")

    def _get_headers(self) -> dict[str, str]:
        """Get HTTP headers for API requests."""
        if not self.secret_key:
            raise PaymentProviderAuthError(
                "Stripe secret key not configured. Set stripe_secret_key in settings."
            )
        return {"Authorization": f"Bearer {self.secret_key}"}

    async def _post(self, endpoint: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        POST form data to a Stripe endpoint.

        Raises:
            PaymentProviderAuthError: Key missing or rejected (401)
            PaymentProviderAPIError: Any other API or transport failure
        """
        url = f"{self.api_base}/{endpoint}"
        headers = self._get_headers()

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                logger.info(f"Making POST request to {endpoint}")
                response = await client.post(url, headers=headers, data=data)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            error_detail = str(e)
            try:
                error_detail = e.response.json().get("error", {}).get("message", error_detail)
            except ValueError:
                pass
            logger.error(f"Stripe API error ({e.response.status_code}): {error_detail}")
            if e.response.status_code == 401:
                raise PaymentProviderAuthError(f"Stripe rejected the API key: {error_detail}") from e
            raise PaymentProviderAPIError(f"API request failed: {error_detail}") from e
        except httpx.RequestError as e:
            logger.error(f"HTTP request error: {e}")
            raise PaymentProviderAPIError(f"Request failed: {e}") from e

    async def create_payment_intent(self, amount_cents: int, currency: str | None = None) -> str:
        """
        Create a card payment intent.

        Args:
            amount_cents: Amount in the smallest currency unit
            currency: ISO currency code (defaults to settings)

        Returns:
            The intent's client secret

        Raises:
            ValueError: amount is not positive
            PaymentProviderError: If the API request fails
        """
        if amount_cents <= 0:
            raise ValueError("Payment amount must be positive")

        currency = (currency or settings.payment_currency).lower()
        logger.info(f"Creating payment intent for {amount_cents} {currency}")

        response = await self._post(
            "payment_intents",
            {
                "amount": str(amount_cents),
                "currency": currency,
                "payment_method_types[]": "card",
            },
        )

        client_secret = response.get("client_secret")
        if not client_secret:
            raise PaymentProviderAPIError("Stripe response did not include a client secret")
        logger.info(f"Created payment intent {response.get('id', '<unknown>')}")
        return client_secret


def create_stripe_adapter(
    secret_key: str | None = None,
    api_base: str | None = None,
) -> StripeAdapter:
    """
    Create a Stripe adapter instance.

    Args:
        secret_key: Stripe secret key (defaults to settings)
        api_base: API base URL (defaults to settings)

    Returns:
        StripeAdapter instance
    """
    return StripeAdapter(secret_key=secret_key, api_base=api_base)
