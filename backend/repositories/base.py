from __future__ import annotations

from typing import Generic, Optional, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from models.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Base repository with common CRUD helpers.

    No commits are performed here - commit responsibility is left to the
    session owner (request dependency or CLI).
    """

    model: Type[T]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with an async session."""
        self.session = session

    async def create(self, entity: T) -> T:
        """Add an entity and flush so its generated id is available."""
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def get_by_id(self, id_value: int, *, refresh: bool = False) -> Optional[T]:
        """Get an entity by its primary key.

        refresh=True reloads the row even if it is already in the identity map,
        which is needed after bulk UPDATE statements.
        """
        return await self.session.get(self.model, id_value, populate_existing=refresh)

    async def update_fields(self, entity: T, **fields: object) -> T:
        """Set attributes on a loaded entity and flush."""
        for name, value in fields.items():
            setattr(entity, name, value)
        await self.session.flush()
        return entity

    async def delete(self, entity: T) -> None:
        """Delete an entity from the session (not committed)."""
        await self.session.delete(entity)
        await self.session.flush()
