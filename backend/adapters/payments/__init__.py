"""Payment adapters for the premium checkout flow."""

from .stripe_adapter import (
    PaymentProviderAPIError,
    PaymentProviderAuthError,
    PaymentProviderError,
    StripeAdapter,
    create_stripe_adapter,
)

__all__ = [
    "StripeAdapter",
    "PaymentProviderError",
    "PaymentProviderAPIError",
    "PaymentProviderAuthError",
    "create_stripe_adapter",
]
