from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.tournament import Tournament
from models.tournament_participant import TournamentParticipant
from models.tournament_result import TournamentResult
from .base import BaseRepository


class TournamentRepository(BaseRepository[Tournament]):
    """Repository for Tournament entities and their participant counter."""

    model = Tournament

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_filtered(
        self, status: Optional[str] = None, game_id: Optional[int] = None
    ) -> List[Tournament]:
        stmt = select(Tournament).order_by(Tournament.start_time.asc(), Tournament.id.asc())
        if status is not None:
            stmt = stmt.where(Tournament.status == status)
        if game_id is not None:
            stmt = stmt.where(Tournament.game_id == game_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def try_increment_participants(self, tournament_id: int) -> bool:
        """Take one slot if current_participants < max_participants.

        Single conditional UPDATE; returns False when the tournament is full.
        """
        stmt = (
            update(Tournament)
            .where(
                Tournament.id == tournament_id,
                Tournament.current_participants < Tournament.max_participants,
            )
            .values(current_participants=Tournament.current_participants + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def decrement_participants(self, tournament_id: int) -> bool:
        stmt = (
            update(Tournament)
            .where(Tournament.id == tournament_id, Tournament.current_participants > 0)
            .values(current_participants=Tournament.current_participants - 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def delete_with_dependents(self, tournament: Tournament) -> None:
        """Delete a tournament together with its participant and result rows."""
        await self.session.execute(
            delete(TournamentResult).where(TournamentResult.tournament_id == tournament.id)
        )
        await self.session.execute(
            delete(TournamentParticipant).where(
                TournamentParticipant.tournament_id == tournament.id
            )
        )
        await self.delete(tournament)
