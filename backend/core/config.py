import os
from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from typing import List


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables with safe defaults."""

    app_name: str = "Fire Fight"
    env: str = "dev"
    database_url: str = "sqlite+aiosqlite:///./firefight.db"
    log_level: str = "INFO"
    seed_demo_data: bool = False
    leaderboard_limit: int = 50
    referral_bonus: Decimal = Decimal("50.00")
    welcome_bonus_coins: int = 100
    bcrypt_rounds: int = 12
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables.

        DATABASE_URL=sqlite+aiosqlite:///:memory: together with SEED_DEMO_DATA=1
        gives the in-memory demo mode.
        """
        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            env=os.getenv("ENV", cls.env),
            database_url=os.getenv("DATABASE_URL") or cls.database_url,
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            seed_demo_data=_env_bool("SEED_DEMO_DATA", cls.seed_demo_data),
            leaderboard_limit=int(os.getenv("LEADERBOARD_LIMIT", cls.leaderboard_limit)),
            referral_bonus=Decimal(os.getenv("REFERRAL_BONUS", str(cls.referral_bonus))),
            welcome_bonus_coins=int(os.getenv("WELCOME_BONUS_COINS", cls.welcome_bonus_coins)),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", cls.bcrypt_rounds)),
            cors_allow_origins=_env_list("CORS_ALLOW_ORIGINS", ["*"]),
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings.from_env()
