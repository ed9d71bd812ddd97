from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.team import Team
from models.team_member import TeamMember
from .base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """Repository for Team entities and their member counter."""

    model = Team

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_join_code(self, join_code: str) -> Optional[Team]:
        stmt = select(Team).where(Team.join_code == join_code.strip())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> List[Team]:
        result = await self.session.execute(select(Team).order_by(Team.id))
        return list(result.scalars().all())

    async def list_by_user(self, user_id: int) -> List[Team]:
        stmt = (
            select(Team)
            .join(TeamMember, TeamMember.team_id == Team.id)
            .where(TeamMember.user_id == user_id)
            .order_by(Team.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def try_increment_members(self, team_id: int) -> bool:
        """Take one seat if current_members < max_members (single conditional UPDATE)."""
        stmt = (
            update(Team)
            .where(Team.id == team_id, Team.current_members < Team.max_members)
            .values(current_members=Team.current_members + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def decrement_members(self, team_id: int) -> bool:
        stmt = (
            update(Team)
            .where(Team.id == team_id, Team.current_members > 0)
            .values(current_members=Team.current_members - 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def record_match(self, team_id: int, won: bool) -> None:
        values = {"matches_played": Team.matches_played + 1}
        if won:
            values["wins"] = Team.wins + 1
        stmt = (
            update(Team)
            .where(Team.id == team_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

    async def delete_with_members(self, team: Team) -> None:
        await self.session.execute(delete(TeamMember).where(TeamMember.team_id == team.id))
        await self.delete(team)
