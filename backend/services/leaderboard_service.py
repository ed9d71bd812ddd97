"""Leaderboard: non-admin users ranked by wallet balance plus bonus coins."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from core.money import to_money
from repositories.user_repo import UserRepository


async def get_leaderboard(session: AsyncSession, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Return ranked rows ``{rank, user, score}``, best first."""
    limit = limit if limit is not None else get_settings().leaderboard_limit
    users = await UserRepository(session).leaderboard(limit)
    return [
        {
            "rank": i + 1,
            "user": user,
            "score": to_money(user.wallet_balance) + user.bonus_coins,
        }
        for i, user in enumerate(users)
    ]
