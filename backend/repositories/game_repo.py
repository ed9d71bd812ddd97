from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.game import Game
from .base import BaseRepository


class GameRepository(BaseRepository[Game]):
    """Repository for Game entities."""

    model = Game

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_slug(self, slug: str) -> Optional[Game]:
        stmt = select(Game).where(Game.slug == slug)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self, active_only: bool = False) -> List[Game]:
        stmt = select(Game).order_by(Game.id)
        if active_only:
            stmt = stmt.where(Game.is_active == True)  # noqa: E712
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
