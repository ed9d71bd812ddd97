# Ensure backend is at sys.path[0] when pytest runs (from repo root or from backend dir)
import asyncio
import os
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

_tests_dir = Path(__file__).resolve().parent
_backend = _tests_dir.parent
_str_backend = str(_backend)
if sys.path[0:1] != [_str_backend]:
    sys.path.insert(0, _str_backend)

# Cheap bcrypt cost for test users; read once by the cached settings
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from httpx import ASGITransport, AsyncClient

from core.database import dispose_database, get_database_manager, init_database
import models  # noqa: F401  registers every table on Base.metadata
from models.base import Base
from models.team import Team
from models.team_member import TeamMember
from models.tournament import Tournament
from models.user import User
from services.auth_service import hash_password

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_db():
    """Use in-memory SQLite for tests (sync fixture runs async setup/teardown)."""
    async def _setup():
        await init_database(TEST_DB_URL)
        engine = get_database_manager().engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def _teardown():
        await dispose_database()

    asyncio.run(_setup())
    yield
    asyncio.run(_teardown())


@pytest.fixture
def api(test_db):
    """Factory for an httpx client bound to the app: ``async with api() as client``."""
    from main import app

    def _client() -> AsyncClient:
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    return _client


@pytest.fixture
def make_user(test_db):
    """Insert a user directly and return its id."""
    counter = {"n": 0}

    async def _make(
        balance: str = "0.00",
        bonus: int = 0,
        is_admin: bool = False,
        username: str = None,
        referral_code: str = None,
        referred_by: str = None,
    ) -> int:
        counter["n"] += 1
        name = username or f"player{counter['n']}"
        async with get_database_manager().session() as session:
            user = User(
                username=name,
                email=f"{name}@example.com",
                password_hash=hash_password("secret123"),
                wallet_balance=Decimal(balance),
                bonus_coins=bonus,
                is_admin=is_admin,
                referral_code=referral_code,
                referred_by=referred_by,
            )
            session.add(user)
            await session.flush()
            return user.id

    return _make


@pytest.fixture
def make_tournament(test_db):
    async def _make(
        entry_fee: str = "100.00",
        prize_pool: str = "1000.00",
        max_participants: int = 10,
        current_participants: int = 0,
        status: str = "upcoming",
        title: str = "Weekend Cup",
    ) -> int:
        async with get_database_manager().session() as session:
            tournament = Tournament(
                title=title,
                entry_fee=Decimal(entry_fee),
                prize_pool=Decimal(prize_pool),
                max_participants=max_participants,
                current_participants=current_participants,
                mode="solo",
                status=status,
                start_time=datetime.now(timezone.utc) + timedelta(days=1),
            )
            session.add(tournament)
            await session.flush()
            return tournament.id

    return _make


@pytest.fixture
def make_team(test_db):
    """Insert a team with the captain as its only member row and the given counters."""
    async def _make(
        captain_id: int,
        join_code: str = "TEAMX01",
        max_members: int = 6,
        current_members: int = 1,
    ) -> int:
        async with get_database_manager().session() as session:
            team = Team(
                name=f"Team {join_code}",
                captain_id=captain_id,
                join_code=join_code,
                max_members=max_members,
                current_members=current_members,
            )
            session.add(team)
            await session.flush()
            session.add(TeamMember(team_id=team.id, user_id=captain_id, role="captain"))
            return team.id

    return _make

