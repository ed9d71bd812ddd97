from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Numeric, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from .base import BaseRepository

MONEY = Numeric(10, 2)


class UserRepository(BaseRepository[User]):
    """Repository for User entities, including the atomic wallet update."""

    model = User

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(User.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_referral_code(self, code: str) -> Optional[User]:
        stmt = select(User).where(User.referral_code == code)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> List[User]:
        result = await self.session.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def list_non_admin_ids(self) -> List[int]:
        result = await self.session.execute(
            select(User.id).where(User.is_admin == False).order_by(User.id)  # noqa: E712
        )
        return list(result.scalars().all())

    async def list_referred_by(self, referral_code: str) -> List[User]:
        stmt = select(User).where(User.referred_by == referral_code).order_by(User.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def apply_wallet_delta(self, user_id: int, delta: Decimal) -> bool:
        """Add a signed delta to wallet_balance in one UPDATE statement.

        Debits only apply when the balance covers them. Returns False when no
        row was updated (unknown user or insufficient balance).
        """
        stmt = update(User).where(User.id == user_id)
        if delta < 0:
            stmt = stmt.where(func.round(User.wallet_balance, 2, type_=MONEY) >= -delta)
        stmt = stmt.values(
            wallet_balance=func.round(User.wallet_balance + delta, 2, type_=MONEY)
        ).execution_options(synchronize_session=False)
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def leaderboard(self, limit: int) -> List[User]:
        """Non-admin users by wallet_balance + bonus_coins, highest first."""
        score = User.wallet_balance + User.bonus_coins
        stmt = (
            select(User)
            .where(User.is_admin == False)  # noqa: E712
            .order_by(score.desc(), User.id.asc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
