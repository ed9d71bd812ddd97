"""GET /api/leaderboard ordering, admin exclusion and limit."""

from __future__ import annotations

import pytest

from core.database import get_database_manager
from services.leaderboard_service import get_leaderboard


@pytest.mark.asyncio
async def test_leaderboard_orders_by_balance_plus_bonus(api, make_user):
    low = await make_user(balance="100.00", bonus=0)
    high = await make_user(balance="50.00", bonus=100)
    tie_a = await make_user(balance="120.00", bonus=0)
    tie_b = await make_user(balance="20.00", bonus=100)
    await make_user(balance="99999.00", bonus=9999, is_admin=True)

    async with api() as client:
        r = await client.get("/api/leaderboard")

    assert r.status_code == 200
    rows = r.json()
    assert [row["id"] for row in rows] == [high, tie_a, tie_b, low]
    assert [row["rank"] for row in rows] == [1, 2, 3, 4]
    assert rows[0]["score"] == "150.00"
    assert all(not row["isAdmin"] for row in rows)


@pytest.mark.asyncio
async def test_leaderboard_limit(make_user):
    for i in range(5):
        await make_user(balance=f"{i}.00")
    async with get_database_manager().session() as session:
        rows = await get_leaderboard(session, limit=3)
    assert len(rows) == 3
    assert rows[0]["score"] > rows[1]["score"] > rows[2]["score"]
