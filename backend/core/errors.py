"""
API error taxonomy.

Every failure a gate, the article policy or a route can report is one of
these. They are terminal for the request and are rendered by a single
exception handler as ``{"detail": ..., "code": ...}`` with the class's
status code.
"""


class ApiError(Exception):
    """Base class for errors rendered with a machine-readable code."""

    status_code: int = 400
    code: str = "bad_request"
    default_detail: str = "Bad request"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class AccessError(ApiError):
    """Base class for authorization and entitlement failures."""

    status_code = 403
    code = "access_denied"
    default_detail = "Access denied"


class Unauthenticated(AccessError):
    """No usable identity on the request."""

    status_code = 401
    code = "unauthenticated"
    default_detail = "Not authenticated"

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class InvalidToken(Unauthenticated):
    """Token present but tampered, malformed or expired."""

    code = "invalid_token"
    default_detail = "Invalid or expired token"


class Forbidden(AccessError):
    """Valid identity without the privilege or ownership required."""

    status_code = 403
    code = "forbidden"
    default_detail = "Forbidden access"


class PremiumRequired(AccessError):
    """Valid identity lacking an active premium entitlement."""

    status_code = 402
    code = "premium_required"
    default_detail = "An active premium subscription is required to access this content"


class QuotaExceeded(AccessError):
    """Non-subscriber already used the free article submission."""

    status_code = 403
    code = "quota_exceeded"
    default_detail = "Free accounts may submit one article. Subscribe to publish more"


class NotFound(AccessError):
    """Referenced user or article does not exist."""

    status_code = 404
    code = "not_found"
    default_detail = "Resource not found"


class InvalidSubscriptionTier(AccessError):
    """Requested subscription duration tier is not configured."""

    status_code = 422
    code = "invalid_subscription_tier"
    default_detail = "Unknown subscription tier"


class Conflict(ApiError):
    """Create request collides with an existing record."""

    status_code = 409
    code = "conflict"
    default_detail = "Resource already exists"


class InvalidPaymentAmount(ApiError):
    """Charge amount the payment processor would refuse."""

    status_code = 422
    code = "invalid_amount"
    default_detail = "Payment amount must be positive"


class PaymentUnavailable(ApiError):
    """Payment processor failed or rejected the request."""

    status_code = 502
    code = "payment_provider_unavailable"
    default_detail = "Payment provider unavailable"
