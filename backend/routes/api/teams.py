"""Teams: CRUD, membership and join-by-code."""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_db_session
from repositories.team_repo import TeamRepository
from services.team_service import (
    create_team,
    delete_team,
    get_team,
    join_team,
    join_team_by_code,
    leave_team,
    list_members,
    update_team,
)

from .schemas import CamelModel, JoinTeamOut, MessageOut, TeamMemberOut, TeamOut

router = APIRouter(prefix="/teams", tags=["teams"])


class TeamCreateBody(CamelModel):
    name: str = Field(..., min_length=1, max_length=128)
    captain_id: int
    logo: Optional[str] = None
    country: Optional[str] = None
    max_members: int = Field(default=6, ge=1)


class TeamUpdateBody(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    logo: Optional[str] = None
    country: Optional[str] = None
    captain_id: Optional[int] = None
    max_members: Optional[int] = Field(default=None, ge=1)
    rank: Optional[int] = Field(default=None, ge=0)


class JoinByCodeBody(CamelModel):
    join_code: str = Field(..., min_length=1)
    user_id: int


class MemberBody(CamelModel):
    user_id: int


@router.get("", response_model=List[TeamOut], summary="List teams")
async def get_teams(session: AsyncSession = Depends(get_db_session)):
    return await TeamRepository(session).list_all()


@router.post("/join-by-code", response_model=JoinTeamOut, summary="Join a team by its invitation code")
async def post_join_by_code(body: JoinByCodeBody, session: AsyncSession = Depends(get_db_session)):
    team = await join_team_by_code(session, body.join_code, body.user_id)
    return JoinTeamOut(message="Successfully joined team", team=TeamOut.model_validate(team))


@router.get("/{team_id}", response_model=TeamOut, summary="Get one team")
async def get_one(team_id: int, session: AsyncSession = Depends(get_db_session)):
    return await get_team(session, team_id)


@router.post("", response_model=TeamOut, summary="Create a team; the captain becomes its first member")
async def post_team(body: TeamCreateBody, session: AsyncSession = Depends(get_db_session)):
    return await create_team(
        session,
        name=body.name,
        captain_id=body.captain_id,
        logo=body.logo,
        country=body.country,
        max_members=body.max_members,
    )


@router.put("/{team_id}", response_model=TeamOut, summary="Update a team")
async def put_team(team_id: int, body: TeamUpdateBody, session: AsyncSession = Depends(get_db_session)):
    changes = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None or k in ("logo", "country")}
    return await update_team(session, team_id, changes)


@router.delete("/{team_id}", response_model=MessageOut, summary="Delete a team")
async def delete_one(team_id: int, session: AsyncSession = Depends(get_db_session)):
    await delete_team(session, team_id)
    return MessageOut(message="Team deleted")


@router.get("/{team_id}/members", response_model=List[TeamMemberOut], summary="Team members")
async def get_members(team_id: int, session: AsyncSession = Depends(get_db_session)):
    return await list_members(session, team_id)


@router.post("/{team_id}/join", response_model=JoinTeamOut, summary="Join a team by id")
async def post_join(team_id: int, body: MemberBody, session: AsyncSession = Depends(get_db_session)):
    team = await join_team(session, team_id, body.user_id)
    return JoinTeamOut(message="Successfully joined team", team=TeamOut.model_validate(team))


@router.delete("/{team_id}/members/{user_id}", response_model=JoinTeamOut, summary="Leave a team")
async def delete_member(team_id: int, user_id: int, session: AsyncSession = Depends(get_db_session)):
    team = await leave_team(session, team_id, user_id)
    return JoinTeamOut(message="Left team", team=TeamOut.model_validate(team))
