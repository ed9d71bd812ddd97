from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.tournament_result import TournamentResult
from .base import BaseRepository


class TournamentResultRepository(BaseRepository[TournamentResult]):
    model = TournamentResult

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_by_tournament(self, tournament_id: int) -> List[TournamentResult]:
        stmt = (
            select(TournamentResult)
            .where(TournamentResult.tournament_id == tournament_id)
            .order_by(TournamentResult.position.asc(), TournamentResult.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
