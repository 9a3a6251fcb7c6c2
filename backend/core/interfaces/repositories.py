"""Repository interfaces for data access."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any


class UserDirectory(ABC):
    """Keyed store of user records (email -> record)."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Any | None:
        """Get user by email."""
        ...

    @abstractmethod
    async def upsert_on_first_login(
        self,
        email: str,
        name: str | None = None,
        photo_url: str | None = None,
    ) -> Any:
        """Return the existing record for email, inserting it if absent."""
        ...

    @abstractmethod
    async def set_admin(self, email: str, is_admin: bool) -> Any:
        """Set the admin flag. Raises NotFound if email is unknown."""
        ...

    @abstractmethod
    async def set_premium_expiry(self, email: str, expiry: datetime | None) -> Any:
        """Set or clear the entitlement expiry. Raises NotFound if email is unknown."""
        ...

    @abstractmethod
    async def clear_expired_premium(self, email: str, now: datetime) -> bool:
        """Clear the expiry only if it is still at or before ``now``; True if cleared."""
        ...

    @abstractmethod
    async def list_all(self) -> list[Any]:
        """List all users."""
        ...

    @abstractmethod
    async def summary(self, now: datetime) -> dict[str, int]:
        """Aggregate user counters."""
        ...

    @abstractmethod
    async def rollback(self) -> None:
        """Discard any pending changes after a failed write."""
        ...


@dataclass(frozen=True)
class ArticleFilters:
    """Optional listing filters; all given filters combine with AND."""

    title: str | None = None
    publisher: str | None = None
    tag: str | None = None


class ArticleStore(ABC):
    """Abstract repository for articles."""

    @abstractmethod
    async def get(self, article_id: str) -> Any | None:
        ...

    @abstractmethod
    async def insert(self, **fields: Any) -> Any:
        ...

    @abstractmethod
    async def update(self, article_id: str, **fields: Any) -> Any:
        """Apply field changes. Raises NotFound if the article is absent."""
        ...

    @abstractmethod
    async def delete(self, article_id: str) -> None:
        """Delete an article. Raises NotFound if the article is absent."""
        ...

    @abstractmethod
    async def list_approved(
        self,
        filters: ArticleFilters | None = None,
        premium_only: bool = False,
    ) -> list[Any]:
        ...

    @abstractmethod
    async def list_trending(self, limit: int) -> list[Any]:
        ...

    @abstractmethod
    async def list_by_author(self, email: str) -> list[Any]:
        ...

    @abstractmethod
    async def list_all(self) -> list[Any]:
        ...

    @abstractmethod
    async def count_by_author(self, email: str) -> int:
        ...

    @abstractmethod
    async def summary(self) -> dict[str, int]:
        """Aggregate article counters."""
        ...

    @abstractmethod
    async def increment_views(self, article_id: str) -> int:
        """Atomically add one view and return the new count."""
        ...
