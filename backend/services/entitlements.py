"""
Premium entitlement evaluation.

Entitlements are a single expiry timestamp on the user record. Expired
entitlements are cleared lazily, the next time they are evaluated, rather
than by a background sweep.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Callable, Mapping

from sqlalchemy.exc import SQLAlchemyError

from core.domain import EntitlementState, normalize_email
from core.errors import InvalidSubscriptionTier
from core.interfaces import UserDirectory

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps (e.g. read back from SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class EntitlementEvaluator:
    """Decides and grants premium access for an email."""

    def __init__(
        self,
        directory: UserDirectory,
        tiers: Mapping[str, int],
        clock: Clock = utcnow,
    ):
        """
        Args:
            directory: user directory used for lookups and expiry writes
            tiers: subscription tier name -> duration in minutes
            clock: returns the current aware UTC time
        """
        self._directory = directory
        self._tiers = {name: timedelta(minutes=minutes) for name, minutes in tiers.items()}
        self._clock = clock

    @property
    def tiers(self) -> list[str]:
        return list(self._tiers)

    async def evaluate(self, email: str) -> EntitlementState:
        """
        Current entitlement for ``email``.

        Not read-only: an expired timestamp is cleared on the way out. The
        clear is best-effort; if the write fails the caller still gets the
        expired decision and the next evaluation retries it.
        """
        user = await self._directory.find_by_email(email)
        if user is None or user.premium_expiry is None:
            return EntitlementState(is_subscribed=False)

        now = self._clock()
        expiry = as_utc(user.premium_expiry)
        if now < expiry:
            return EntitlementState(is_subscribed=True, premium_expiry=expiry)

        try:
            if await self._directory.clear_expired_premium(user.email, now):
                logger.info("Cleared expired premium entitlement for %s", user.email)
        except SQLAlchemyError as e:
            logger.warning("Failed to clear expired entitlement for %s: %s", user.email, e)
            await self._directory.rollback()
        return EntitlementState(is_subscribed=False)

    async def grant(self, email: str, tier: str) -> EntitlementState:
        """
        Set the entitlement to expire ``tier`` from now.

        Raises:
            InvalidSubscriptionTier: tier is not configured
            NotFound: no user with this email
        """
        duration = self._tiers.get(tier)
        if duration is None:
            raise InvalidSubscriptionTier(
                f"Unknown subscription tier '{tier}'. Valid tiers: {', '.join(self._tiers)}"
            )

        expiry = self._clock() + duration
        await self._directory.set_premium_expiry(normalize_email(email), expiry)
        logger.info("Granted %s premium tier to %s until %s", tier, normalize_email(email), expiry.isoformat())
        return EntitlementState(is_subscribed=True, premium_expiry=expiry)
