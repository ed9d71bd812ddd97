"""SQLAlchemy models for the tournament platform.

Importing this package registers every table on ``Base.metadata``.
"""

from .base import Base
from .game import Game
from .notification import Notification
from .team import Team
from .team_member import TeamMember
from .tournament import Tournament
from .tournament_participant import TournamentParticipant
from .tournament_result import TournamentResult
from .transaction import Transaction
from .user import User

__all__ = [
    "Base",
    "Game",
    "Notification",
    "Team",
    "TeamMember",
    "Tournament",
    "TournamentParticipant",
    "TournamentResult",
    "Transaction",
    "User",
]
