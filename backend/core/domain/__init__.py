"""Domain value objects."""

from .identity import EntitlementState, IdentityClaim, normalize_email

__all__ = [
    "EntitlementState",
    "IdentityClaim",
    "normalize_email",
]
