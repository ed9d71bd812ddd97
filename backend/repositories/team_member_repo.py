from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.team_member import TeamMember
from .base import BaseRepository


class TeamMemberRepository(BaseRepository[TeamMember]):
    model = TeamMember

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get(self, team_id: int, user_id: int) -> Optional[TeamMember]:
        stmt = select(TeamMember).where(
            TeamMember.team_id == team_id, TeamMember.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_team(self, team_id: int) -> List[TeamMember]:
        stmt = (
            select(TeamMember)
            .where(TeamMember.team_id == team_id)
            .order_by(TeamMember.joined_at.asc(), TeamMember.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
