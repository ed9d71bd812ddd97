"""Admin analytics summary computed with SQL aggregates."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.money import ZERO, to_money
from models.team import Team
from models.tournament import Tournament
from models.user import User
from repositories.transaction_repo import TransactionRepository


async def _count(session: AsyncSession, stmt) -> int:
    result = await session.execute(stmt)
    return int(result.scalar() or 0)


async def get_analytics(session: AsyncSession, days: int = 30) -> Dict[str, Any]:
    """
    Platform totals plus counts for the last ``days`` days.

    Revenue figures are absolute amounts of completed transactions in range:
    entry fees collected, deposits, withdrawals; profit = entry fees - withdrawals.
    """
    since = datetime.now(timezone.utc) - timedelta(days=days)

    users_total = await _count(session, select(func.count(User.id)))
    users_new = await _count(session, select(func.count(User.id)).where(User.created_at >= since))

    status_rows = await session.execute(
        select(Tournament.status, func.count(Tournament.id)).group_by(Tournament.status)
    )
    by_status = {status: int(n) for status, n in status_rows.all()}
    tournaments_new = await _count(
        session, select(func.count(Tournament.id)).where(Tournament.created_at >= since)
    )

    tx = TransactionRepository(session)
    entry_fees = abs(to_money(await tx.sum_amount("tournament_entry", since=since)))
    deposits = abs(to_money(await tx.sum_amount("deposit", since=since)))
    withdrawals = abs(to_money(await tx.sum_amount("withdrawal", since=since)))
    per_user = to_money(entry_fees / users_new) if users_new else ZERO

    teams_total = await _count(session, select(func.count(Team.id)))
    teams_active = await _count(session, select(func.count(Team.id)).where(Team.current_members > 1))
    avg_size_raw = (await session.execute(select(func.avg(Team.current_members)))).scalar()
    avg_size = round(float(avg_size_raw), 2) if avg_size_raw is not None else 0.0

    return {
        "range_days": days,
        "users": {"total": users_total, "new": users_new},
        "tournaments": {
            "total": sum(by_status.values()),
            "new": tournaments_new,
            "upcoming": by_status.get("upcoming", 0),
            "live": by_status.get("live", 0),
            "ended": by_status.get("ended", 0),
        },
        "revenue": {
            "entry_fees": entry_fees,
            "deposits": deposits,
            "withdrawals": withdrawals,
            "profit": entry_fees - withdrawals,
            "average_per_user": per_user,
        },
        "teams": {"total": teams_total, "active": teams_active, "average_size": avg_size},
    }
