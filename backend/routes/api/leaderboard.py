"""GET /api/leaderboard."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_db_session
from services.leaderboard_service import get_leaderboard

from .schemas import LeaderboardRowOut, UserOut

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=List[LeaderboardRowOut], summary="Top non-admin users by balance plus bonus")
async def get_rows(session: AsyncSession = Depends(get_db_session)):
    rows = await get_leaderboard(session)
    return [
        LeaderboardRowOut(
            **UserOut.model_validate(row["user"]).model_dump(),
            rank=row["rank"],
            score=row["score"],
        )
        for row in rows
    ]
