"""
Deterministic demo data: games, an admin, a demo player, two tournaments and a team.
Idempotent: each row is looked up by its natural key (slug, email, title, join code)
before insert. Counters start consistent with the rows actually created.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.game import Game
from models.team import Team
from models.team_member import TeamMember
from models.tournament import Tournament
from models.transaction import Transaction
from models.user import User
from services.auth_service import hash_password

GAMES: List[Dict[str, Any]] = [
    {"name": "Free Fire", "slug": "free-fire", "description": "Battle Royale", "category": "Battle Royale"},
    {"name": "PUBG", "slug": "pubg", "description": "Battle Royale", "category": "Battle Royale"},
    {"name": "Call of Duty", "slug": "cod", "description": "FPS", "category": "FPS"},
    {"name": "Apex Legends", "slug": "apex", "description": "Battle Royale", "category": "Battle Royale"},
    {"name": "Valorant", "slug": "valorant", "description": "FPS", "category": "FPS"},
    {"name": "CS:GO", "slug": "csgo", "description": "FPS", "category": "FPS"},
]

# Demo credentials; never use outside a local demo database
USERS: List[Dict[str, Any]] = [
    {
        "username": "admin",
        "email": "admin@firefight.com",
        "password": "admin123",
        "phone": "+1234567890",
        "country": "US",
        "wallet_balance": Decimal("10000.00"),
        "bonus_coins": 1000,
        "referral_code": "ADMIN001",
        "is_admin": True,
    },
    {
        "username": "johndoe",
        "email": "john@example.com",
        "password": "demo123",
        "phone": "+9876543210",
        "country": "IN",
        "wallet_balance": Decimal("2450.00"),
        "bonus_coins": 850,
        "referral_code": "JOHN001",
        "is_admin": False,
    },
]

TOURNAMENTS: List[Dict[str, Any]] = [
    {
        "title": "Free Fire Championship",
        "game_slug": "free-fire",
        "description": "Ultimate Battle Royale Championship with top players",
        "entry_fee": Decimal("250.00"),
        "prize_pool": Decimal("25000.00"),
        "max_participants": 50,
        "mode": "squad",
        "status": "live",
        "starts_in": timedelta(hours=2),
        "room_code": "FF2024XYZ",
        "room_password": "fire123",
        "rules": "Follow fair play rules",
    },
    {
        "title": "PUBG Arena Masters",
        "game_slug": "pubg",
        "description": "Elite tournament for experienced PUBG players",
        "entry_fee": Decimal("150.00"),
        "prize_pool": Decimal("15000.00"),
        "max_participants": 20,
        "mode": "solo",
        "status": "upcoming",
        "starts_in": timedelta(days=1),
        "room_code": None,
        "room_password": None,
        "rules": "No cheating allowed",
    },
]

TEAM = {"name": "Fire Fighters", "country": "IN", "join_code": "FF2024XYZ", "captain_email": "john@example.com"}

# Historical ledger rows for the demo player; the seeded balance already reflects them
DEMO_TRANSACTIONS: List[Dict[str, Any]] = [
    {"type": "tournament_win", "amount": Decimal("1250.00"), "description": "Tournament Win - Free Fire Championship"},
    {"type": "tournament_entry", "amount": Decimal("-150.00"), "description": "Tournament Entry - PUBG Arena Masters"},
    {"type": "referral_bonus", "amount": Decimal("50.00"), "description": "Referral Bonus - Friend joined"},
]


async def seed_demo(session: AsyncSession) -> Dict[str, int]:
    """
    Idempotent demo seed. Returns counts: games_inserted, users_inserted,
    tournaments_inserted, teams_inserted, transactions_inserted.
    """
    counts = {
        "games_inserted": 0,
        "users_inserted": 0,
        "tournaments_inserted": 0,
        "teams_inserted": 0,
        "transactions_inserted": 0,
    }

    # --- Games ---
    games_by_slug: Dict[str, Game] = {}
    for row in GAMES:
        r = await session.execute(select(Game).where(Game.slug == row["slug"]))
        game = r.scalar_one_or_none()
        if game is None:
            game = Game(is_active=True, **row)
            session.add(game)
            counts["games_inserted"] += 1
        games_by_slug[row["slug"]] = game
    await session.flush()

    # --- Users ---
    users_by_email: Dict[str, User] = {}
    for row in USERS:
        r = await session.execute(select(User).where(User.email == row["email"]))
        user = r.scalar_one_or_none()
        if user is None:
            data = dict(row)
            user = User(password_hash=hash_password(data.pop("password")), **data)
            session.add(user)
            counts["users_inserted"] += 1
        users_by_email[row["email"]] = user
    await session.flush()

    # --- Tournaments ---
    now = datetime.now(timezone.utc)
    for row in TOURNAMENTS:
        r = await session.execute(select(Tournament).where(Tournament.title == row["title"]))
        if r.scalar_one_or_none() is None:
            data = dict(row)
            game = games_by_slug[data.pop("game_slug")]
            start = now + data.pop("starts_in")
            session.add(Tournament(game_id=game.id, start_time=start, current_participants=0, **data))
            counts["tournaments_inserted"] += 1

    # --- Team + captain membership ---
    r = await session.execute(select(Team).where(Team.join_code == TEAM["join_code"]))
    if r.scalar_one_or_none() is None:
        captain = users_by_email[TEAM["captain_email"]]
        team = Team(
            name=TEAM["name"],
            country=TEAM["country"],
            captain_id=captain.id,
            join_code=TEAM["join_code"],
            max_members=6,
            current_members=1,
        )
        session.add(team)
        await session.flush()
        session.add(TeamMember(team_id=team.id, user_id=captain.id, role="captain"))
        counts["teams_inserted"] += 1

    # --- Demo ledger ---
    demo = users_by_email["john@example.com"]
    r = await session.execute(select(Transaction.id).where(Transaction.user_id == demo.id).limit(1))
    if r.scalar_one_or_none() is None:
        for i, row in enumerate(DEMO_TRANSACTIONS):
            session.add(
                Transaction(
                    user_id=demo.id,
                    status="completed",
                    created_at=now - timedelta(days=i),
                    **row,
                )
            )
            counts["transactions_inserted"] += 1

    await session.flush()
    return counts
