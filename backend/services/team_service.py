"""Teams: creation, joining by id or join code, leaving."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import CapacityError, DomainError, DuplicateError, NotFoundError
from models.team import Team
from models.team_member import TeamMember
from repositories.team_member_repo import TeamMemberRepository
from repositories.team_repo import TeamRepository
from repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


async def get_team(session: AsyncSession, team_id: int) -> Team:
    team = await TeamRepository(session).get_by_id(team_id, refresh=True)
    if team is None:
        raise NotFoundError("Team", team_id)
    return team


async def _add_member(session: AsyncSession, team: Team, user_id: int, role: str) -> TeamMember:
    if await UserRepository(session).get_by_id(user_id) is None:
        raise NotFoundError("User", user_id)
    members = TeamMemberRepository(session)
    if await members.get(team.id, user_id) is not None:
        raise DuplicateError("Already a member of this team")
    if not await TeamRepository(session).try_increment_members(team.id):
        raise CapacityError("Team is full")
    try:
        member = await members.create(TeamMember(team_id=team.id, user_id=user_id, role=role))
    except IntegrityError as e:
        raise DuplicateError("Already a member of this team") from e
    logger.info("User %s joined team %s as %s", user_id, team.id, role)
    return member


async def create_team(
    session: AsyncSession,
    name: str,
    captain_id: int,
    logo: Optional[str] = None,
    country: Optional[str] = None,
    max_members: int = 6,
) -> Team:
    """Create a team with a TEAM%03d join code; the captain is its first member."""
    if max_members < 1:
        raise DomainError("max_members must be at least 1")
    if await UserRepository(session).get_by_id(captain_id) is None:
        raise NotFoundError("User", captain_id)
    teams = TeamRepository(session)
    team = await teams.create(
        Team(
            name=name,
            logo=logo,
            country=country,
            captain_id=captain_id,
            max_members=max_members,
            current_members=0,
        )
    )
    team.join_code = f"TEAM{team.id:03d}"
    await session.flush()
    await _add_member(session, team, captain_id, "captain")
    return await get_team(session, team.id)


async def update_team(session: AsyncSession, team_id: int, changes: Dict[str, Any]) -> Team:
    team = await get_team(session, team_id)
    max_members = changes.get("max_members")
    if max_members is not None and max_members < team.current_members:
        raise DomainError("max_members cannot be lower than current members")
    captain_id = changes.get("captain_id")
    if captain_id is not None and await TeamMemberRepository(session).get(team_id, captain_id) is None:
        raise DomainError("Captain must be a member of the team")
    return await TeamRepository(session).update_fields(team, **changes)


async def delete_team(session: AsyncSession, team_id: int) -> None:
    team = await get_team(session, team_id)
    await TeamRepository(session).delete_with_members(team)
    logger.info("Deleted team %s", team_id)


async def join_team(session: AsyncSession, team_id: int, user_id: int) -> Team:
    team = await TeamRepository(session).get_by_id(team_id)
    if team is None:
        raise NotFoundError("Team", team_id)
    await _add_member(session, team, user_id, "member")
    return await get_team(session, team_id)


async def join_team_by_code(session: AsyncSession, join_code: str, user_id: int) -> Team:
    """Join the team owning join_code; rejects when the team is full."""
    team = await TeamRepository(session).get_by_join_code(join_code)
    if team is None:
        raise NotFoundError("Team", join_code)
    await _add_member(session, team, user_id, "member")
    return await get_team(session, team.id)


async def leave_team(session: AsyncSession, team_id: int, user_id: int) -> Team:
    await get_team(session, team_id)
    members = TeamMemberRepository(session)
    member = await members.get(team_id, user_id)
    if member is None:
        raise NotFoundError("Team member", user_id)
    await members.delete(member)
    await TeamRepository(session).decrement_members(team_id)
    logger.info("User %s left team %s", user_id, team_id)
    return await get_team(session, team_id)


async def list_members(session: AsyncSession, team_id: int) -> List[TeamMember]:
    await get_team(session, team_id)
    return await TeamMemberRepository(session).list_by_team(team_id)


async def list_user_teams(session: AsyncSession, user_id: int) -> List[Team]:
    if await UserRepository(session).get_by_id(user_id) is None:
        raise NotFoundError("User", user_id)
    return await TeamRepository(session).list_by_user(user_id)
