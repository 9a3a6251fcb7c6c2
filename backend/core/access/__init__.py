"""Authorization gates and the access error taxonomy."""

from ..errors import (
    AccessError,
    Forbidden,
    InvalidSubscriptionTier,
    InvalidToken,
    NotFound,
    PremiumRequired,
    QuotaExceeded,
    Unauthenticated,
)
from .gates import (
    AccessContext,
    AccessDecision,
    Authenticated,
    Gate,
    GateChain,
    IsAdmin,
    IsSelf,
)

__all__ = [
    "AccessContext",
    "AccessDecision",
    "AccessError",
    "Authenticated",
    "Forbidden",
    "Gate",
    "GateChain",
    "InvalidSubscriptionTier",
    "InvalidToken",
    "IsAdmin",
    "IsSelf",
    "NotFound",
    "PremiumRequired",
    "QuotaExceeded",
    "Unauthenticated",
]
