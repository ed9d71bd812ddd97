"""Response models shared by the API routers.

Field names are snake_case in Python and camelCase on the wire; money is
serialized as a decimal string with two fractional digits.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from core.money import format_money

Money = Annotated[Decimal, PlainSerializer(format_money, return_type=str, when_used="always")]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageOut(CamelModel):
    message: str


class UserOut(CamelModel):
    id: int
    username: str
    email: str
    phone: Optional[str] = None
    country: Optional[str] = None
    avatar: Optional[str] = None
    wallet_balance: Money
    bonus_coins: int
    referral_code: Optional[str] = None
    referred_by: Optional[str] = None
    is_admin: bool
    created_at: datetime


class AuthOut(CamelModel):
    user: UserOut
    token: str


class GameOut(CamelModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None
    is_active: bool


class TournamentOut(CamelModel):
    id: int
    title: str
    game_id: Optional[int] = None
    description: Optional[str] = None
    entry_fee: Money
    prize_pool: Money
    max_participants: int
    current_participants: int
    mode: str
    status: str
    start_time: datetime
    end_time: Optional[datetime] = None
    room_code: Optional[str] = None
    room_password: Optional[str] = None
    rules: Optional[str] = None
    created_at: datetime


class ParticipantOut(CamelModel):
    id: int
    tournament_id: int
    user_id: int
    team_id: Optional[int] = None
    joined_at: datetime


class JoinTournamentOut(CamelModel):
    message: str
    participant: ParticipantOut
    balance: Money


class TeamOut(CamelModel):
    id: int
    name: str
    logo: Optional[str] = None
    country: Optional[str] = None
    captain_id: Optional[int] = None
    join_code: Optional[str] = None
    max_members: int
    current_members: int
    wins: int
    matches_played: int
    rank: int
    created_at: datetime


class TeamMemberOut(CamelModel):
    id: int
    team_id: int
    user_id: int
    role: str
    joined_at: datetime


class JoinTeamOut(CamelModel):
    message: str
    team: TeamOut


class TransactionOut(CamelModel):
    id: int
    user_id: int
    type: str
    amount: Money
    description: Optional[str] = None
    status: str
    created_at: datetime


class BalanceOut(CamelModel):
    message: str
    balance: Money


class NotificationOut(CamelModel):
    id: int
    user_id: int
    title: str
    message: str
    type: str
    read: bool
    created_at: datetime


class ResultOut(CamelModel):
    id: int
    tournament_id: int
    user_id: int
    team_id: Optional[int] = None
    position: int
    kills: int
    points: int
    prize_won: Money


class LeaderboardRowOut(UserOut):
    rank: int
    score: Money


class ReferralOut(CamelModel):
    user: UserOut
    is_rewarded: bool
    bonus_amount: Money


class SentOut(CamelModel):
    message: str
    sent: int = Field(..., ge=0)


class AnalyticsUsers(CamelModel):
    total: int
    new: int


class AnalyticsTournaments(CamelModel):
    total: int
    new: int
    upcoming: int
    live: int
    ended: int


class AnalyticsRevenue(CamelModel):
    entry_fees: Money
    deposits: Money
    withdrawals: Money
    profit: Money
    average_per_user: Money


class AnalyticsTeams(CamelModel):
    total: int
    active: int
    average_size: float


class AnalyticsOut(CamelModel):
    range_days: int
    users: AnalyticsUsers
    tournaments: AnalyticsTournaments
    revenue: AnalyticsRevenue
    teams: AnalyticsTeams

