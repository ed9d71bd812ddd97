"""Repository layer for DB access only (CRUD + simple queries).

Repositories operate on the models in backend/models/ and never commit. The
counter and wallet helpers are single conditional UPDATE statements so
capacity and balance checks cannot be raced past.
"""

from .base import BaseRepository
from .game_repo import GameRepository
from .notification_repo import NotificationRepository
from .participant_repo import ParticipantRepository
from .result_repo import TournamentResultRepository
from .team_member_repo import TeamMemberRepository
from .team_repo import TeamRepository
from .tournament_repo import TournamentRepository
from .transaction_repo import TransactionRepository
from .user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "GameRepository",
    "NotificationRepository",
    "ParticipantRepository",
    "TeamMemberRepository",
    "TeamRepository",
    "TournamentRepository",
    "TournamentResultRepository",
    "TransactionRepository",
    "UserRepository",
]
