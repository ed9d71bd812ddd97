"""Tournaments: CRUD, participants, join flow and results."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_db_session
from repositories.tournament_repo import TournamentRepository
from repositories.user_repo import UserRepository
from services.results_service import ResultEntry, distribute_prizes, list_results
from services.tournament_service import (
    create_tournament,
    delete_tournament,
    get_tournament,
    join_tournament,
    list_participants,
    remove_participant,
    update_tournament,
)

from .schemas import (
    CamelModel,
    JoinTournamentOut,
    MessageOut,
    ParticipantOut,
    ResultOut,
    TournamentOut,
)

router = APIRouter(prefix="/tournaments", tags=["tournaments"])


class TournamentCreateBody(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    game_id: Optional[int] = None
    description: Optional[str] = None
    entry_fee: Decimal = Field(..., ge=0)
    prize_pool: Decimal = Field(..., ge=0)
    max_participants: int = Field(..., ge=1)
    mode: str = "solo"
    status: str = "upcoming"
    start_time: datetime
    end_time: Optional[datetime] = None
    room_code: Optional[str] = None
    room_password: Optional[str] = None
    rules: Optional[str] = None


class TournamentUpdateBody(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    game_id: Optional[int] = None
    description: Optional[str] = None
    entry_fee: Optional[Decimal] = Field(default=None, ge=0)
    prize_pool: Optional[Decimal] = Field(default=None, ge=0)
    max_participants: Optional[int] = Field(default=None, ge=1)
    mode: Optional[str] = None
    status: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    room_code: Optional[str] = None
    room_password: Optional[str] = None
    rules: Optional[str] = None


class JoinBody(CamelModel):
    user_id: int
    team_id: Optional[int] = None


class ResultBody(CamelModel):
    user_id: int
    position: int = Field(..., ge=1)
    team_id: Optional[int] = None
    kills: int = Field(default=0, ge=0)
    points: int = Field(default=0, ge=0)
    prize_won: Decimal = Field(default=Decimal("0"), ge=0)


_REQUIRED_ON_UPDATE = ("title", "entry_fee", "prize_pool", "max_participants", "mode", "status", "start_time")


@router.get("", response_model=List[TournamentOut], summary="List tournaments")
async def get_tournaments(
    status: Optional[str] = Query(default=None),
    game_id: Optional[int] = Query(default=None, alias="gameId"),
    session: AsyncSession = Depends(get_db_session),
):
    return await TournamentRepository(session).list_filtered(status=status, game_id=game_id)


@router.get("/{tournament_id}", response_model=TournamentOut, summary="Get one tournament")
async def get_one(tournament_id: int, session: AsyncSession = Depends(get_db_session)):
    return await get_tournament(session, tournament_id)


@router.post("", response_model=TournamentOut, summary="Create a tournament")
async def post_tournament(body: TournamentCreateBody, session: AsyncSession = Depends(get_db_session)):
    return await create_tournament(session, body.model_dump())


@router.put("/{tournament_id}", response_model=TournamentOut, summary="Update a tournament")
async def put_tournament(
    tournament_id: int,
    body: TournamentUpdateBody,
    session: AsyncSession = Depends(get_db_session),
):
    changes = body.model_dump(exclude_unset=True)
    # Explicit nulls on non-nullable columns are ignored
    changes = {k: v for k, v in changes.items() if not (v is None and k in _REQUIRED_ON_UPDATE)}
    return await update_tournament(session, tournament_id, changes)


@router.delete("/{tournament_id}", response_model=MessageOut, summary="Delete a tournament")
async def delete_one(tournament_id: int, session: AsyncSession = Depends(get_db_session)):
    await delete_tournament(session, tournament_id)
    return MessageOut(message="Tournament deleted")


@router.get(
    "/{tournament_id}/participants",
    response_model=List[ParticipantOut],
    summary="Participants in join order",
)
async def get_participants(tournament_id: int, session: AsyncSession = Depends(get_db_session)):
    return await list_participants(session, tournament_id)


@router.post(
    "/{tournament_id}/join",
    response_model=JoinTournamentOut,
    summary="Join a tournament and pay its entry fee",
)
async def post_join(
    tournament_id: int,
    body: JoinBody,
    session: AsyncSession = Depends(get_db_session),
):
    participant = await join_tournament(session, tournament_id, body.user_id, body.team_id)
    user = await UserRepository(session).get_by_id(body.user_id, refresh=True)
    return JoinTournamentOut(
        message="Successfully joined tournament",
        participant=ParticipantOut.model_validate(participant),
        balance=user.wallet_balance,
    )


@router.delete(
    "/{tournament_id}/participants/{user_id}",
    response_model=MessageOut,
    summary="Remove a participant (refunds while upcoming)",
)
async def delete_participant(
    tournament_id: int,
    user_id: int,
    session: AsyncSession = Depends(get_db_session),
):
    refunded = await remove_participant(session, tournament_id, user_id)
    return MessageOut(message="Participant removed and refunded" if refunded else "Participant removed")


@router.get("/{tournament_id}/results", response_model=List[ResultOut], summary="Results by position")
async def get_results(tournament_id: int, session: AsyncSession = Depends(get_db_session)):
    return await list_results(session, tournament_id)


@router.post(
    "/{tournament_id}/results",
    response_model=List[ResultOut],
    summary="Record results and distribute prizes",
)
async def post_results(
    tournament_id: int,
    body: List[ResultBody],
    session: AsyncSession = Depends(get_db_session),
):
    entries = [ResultEntry(**item.model_dump()) for item in body]
    return await distribute_prizes(session, tournament_id, entries)
