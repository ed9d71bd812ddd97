"""REST API mounted under /api."""

from fastapi import APIRouter

from .admin import router as admin_router
from .auth import router as auth_router
from .games import router as games_router
from .leaderboard import router as leaderboard_router
from .meta import router as meta_router
from .notifications import router as notifications_router
from .teams import router as teams_router
from .tournaments import router as tournaments_router
from .users import router as users_router
from .wallet import router as wallet_router

router = APIRouter(prefix="/api")
router.include_router(auth_router)
router.include_router(users_router)
router.include_router(games_router)
router.include_router(tournaments_router)
router.include_router(teams_router)
router.include_router(wallet_router)
router.include_router(notifications_router)
router.include_router(leaderboard_router)
router.include_router(admin_router)
router.include_router(meta_router)

api_router = router
