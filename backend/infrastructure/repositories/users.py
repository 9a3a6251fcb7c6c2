"""
SQLAlchemy-backed user directory.
"""

import logging
from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain import normalize_email
from core.errors import NotFound
from core.interfaces import UserDirectory
from infrastructure.database.models import User

logger = logging.getLogger(__name__)


class SqlAlchemyUserDirectory(UserDirectory):
    """User records keyed by normalized email."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_email(self, email: str) -> User | None:
        key = normalize_email(email)
        if not key:
            return None
        result = await self._session.execute(select(User).where(User.email == key))
        return result.scalar_one_or_none()

    async def _require(self, email: str) -> User:
        user = await self.find_by_email(email)
        if user is None:
            raise NotFound(f"User {normalize_email(email)} not found")
        return user

    async def upsert_on_first_login(
        self,
        email: str,
        name: str | None = None,
        photo_url: str | None = None,
    ) -> User:
        """
        Return the user for ``email``, creating it on first login.

        An existing record is returned unchanged. Two concurrent first logins
        race on the unique email constraint: the loser rolls back and reads
        the winner's row.
        """
        key = normalize_email(email)
        if not key:
            raise ValueError("email must not be blank")

        existing = await self.find_by_email(key)
        if existing is not None:
            return existing

        user = User(email=key, name=name, photo_url=photo_url)
        self._session.add(user)
        try:
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            winner = await self.find_by_email(key)
            if winner is None:
                raise
            logger.info("Concurrent first login for %s resolved to existing record", key)
            return winner

        await self._session.refresh(user)
        logger.info("Registered new user %s", key)
        return user

    async def set_admin(self, email: str, is_admin: bool) -> User:
        user = await self._require(email)
        user.is_admin = is_admin
        await self._session.commit()
        await self._session.refresh(user)
        return user

    async def set_premium_expiry(self, email: str, expiry: datetime | None) -> User:
        user = await self._require(email)
        user.premium_expiry = expiry
        await self._session.commit()
        await self._session.refresh(user)
        return user

    async def clear_expired_premium(self, email: str, now: datetime) -> bool:
        """
        Conditionally clear a lapsed entitlement.

        The expiry check runs inside the UPDATE, so a grant committed by
        another session after our read is left intact.
        """
        key = normalize_email(email)
        result = await self._session.execute(
            update(User)
            .where(User.email == key, User.premium_expiry <= now)
            .values(premium_expiry=None)
            .execution_options(synchronize_session=False)
        )
        await self._session.commit()

        # Refresh any instance already held by the session
        refreshed = await self._session.execute(
            select(User).where(User.email == key).execution_options(populate_existing=True)
        )
        refreshed.scalar_one_or_none()
        return result.rowcount > 0

    async def list_all(self) -> list[User]:
        result = await self._session.execute(select(User).order_by(User.created_at.desc()))
        return list(result.scalars().all())

    async def summary(self, now: datetime) -> dict[str, int]:
        """User counters for the admin dashboard."""
        total = (await self._session.execute(select(func.count()).select_from(User))).scalar() or 0
        premium = (
            await self._session.execute(
                select(func.count()).select_from(User).where(User.premium_expiry > now)
            )
        ).scalar() or 0
        return {"users": total, "premium_users": premium}

    async def rollback(self) -> None:
        await self._session.rollback()
