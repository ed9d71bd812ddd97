from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.transaction import Transaction
from .base import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for wallet ledger rows (append-only apart from status)."""

    model = Transaction

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_all(self, limit: int = 1000) -> List[Transaction]:
        stmt = (
            select(Transaction)
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_user(self, user_id: int) -> List[Transaction]:
        stmt = (
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def sum_amount(
        self,
        type_: str,
        status: str = "completed",
        since: Optional[datetime] = None,
    ) -> Decimal:
        """Sum of signed amounts for one type/status, optionally since a time."""
        stmt = select(func.coalesce(func.sum(Transaction.amount), 0)).where(
            Transaction.type == type_, Transaction.status == status
        )
        if since is not None:
            stmt = stmt.where(Transaction.created_at >= since)
        result = await self.session.execute(stmt)
        return Decimal(str(result.scalar() or 0))

    async def count_by_user_and_type(self, user_id: int, type_: str) -> int:
        stmt = select(func.count(Transaction.id)).where(
            Transaction.user_id == user_id, Transaction.type == type_
        )
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)
