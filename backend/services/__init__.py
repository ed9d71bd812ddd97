"""Services: business operations composed from repositories.

Services take the caller's AsyncSession, never commit, and signal business
rule failures with core.errors exceptions.
"""

from .tournament_service import join_tournament
from .wallet_service import update_user_wallet

__all__ = [
    "join_tournament",
    "update_user_wallet",
]
