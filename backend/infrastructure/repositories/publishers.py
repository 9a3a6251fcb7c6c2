"""
Publisher reference directory.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import Publisher


class PublisherExistsError(Exception):
    """Raised when a publisher name is already registered."""

    pass


class PublisherDirectory:
    """Reads and registers publishers."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_all(self) -> list[Publisher]:
        result = await self._session.execute(select(Publisher).order_by(Publisher.name))
        return list(result.scalars().all())

    async def create(self, name: str, logo_url: str | None = None) -> Publisher:
        publisher = Publisher(name=name.strip(), logo_url=logo_url)
        self._session.add(publisher)
        try:
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            raise PublisherExistsError(f"Publisher '{name.strip()}' already exists")
        await self._session.refresh(publisher)
        return publisher
