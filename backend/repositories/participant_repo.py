from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.tournament_participant import TournamentParticipant
from .base import BaseRepository


class ParticipantRepository(BaseRepository[TournamentParticipant]):
    """Repository for TournamentParticipant rows."""

    model = TournamentParticipant

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get(self, tournament_id: int, user_id: int) -> Optional[TournamentParticipant]:
        stmt = select(TournamentParticipant).where(
            TournamentParticipant.tournament_id == tournament_id,
            TournamentParticipant.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_tournament(self, tournament_id: int) -> List[TournamentParticipant]:
        stmt = (
            select(TournamentParticipant)
            .where(TournamentParticipant.tournament_id == tournament_id)
            .order_by(TournamentParticipant.joined_at.asc(), TournamentParticipant.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

