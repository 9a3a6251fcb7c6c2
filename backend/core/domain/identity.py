"""Identity and entitlement value objects."""
from dataclasses import dataclass
from datetime import datetime


def normalize_email(email: str | None) -> str:
    """Canonical form used for every directory key comparison."""
    return (email or "").strip().lower()


@dataclass(frozen=True)
class IdentityClaim:
    """Claim embedded in a signed identity token."""

    email: str

    def __post_init__(self):
        object.__setattr__(self, "email", normalize_email(self.email))


@dataclass(frozen=True)
class EntitlementState:
    """Premium entitlement computed at evaluation time."""

    is_subscribed: bool
    premium_expiry: datetime | None = None
