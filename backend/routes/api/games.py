"""Games catalogue."""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_db_session
from core.errors import DuplicateError, NotFoundError
from models.game import Game
from repositories.game_repo import GameRepository

from .schemas import CamelModel, GameOut

router = APIRouter(prefix="/games", tags=["games"])


class GameCreateBody(CamelModel):
    name: str = Field(..., min_length=1, max_length=128)
    slug: str = Field(..., min_length=1, max_length=64, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None
    is_active: bool = True


@router.get("", response_model=List[GameOut], summary="List games")
async def get_games(session: AsyncSession = Depends(get_db_session)):
    return await GameRepository(session).list_all()


@router.get("/{game_id}", response_model=GameOut, summary="Get one game")
async def get_game(game_id: int, session: AsyncSession = Depends(get_db_session)):
    game = await GameRepository(session).get_by_id(game_id)
    if game is None:
        raise NotFoundError("Game", game_id)
    return game


@router.post("", response_model=GameOut, summary="Create a game")
async def post_game(body: GameCreateBody, session: AsyncSession = Depends(get_db_session)):
    repo = GameRepository(session)
    if await repo.get_by_slug(body.slug) is not None:
        raise DuplicateError("Game slug already exists")
    return await repo.create(Game(**body.model_dump()))
