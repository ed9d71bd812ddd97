"""Unit tests for Settings.from_env."""

from __future__ import annotations

from decimal import Decimal

from core.config import Settings


def test_defaults(monkeypatch) -> None:
    for name in (
        "DATABASE_URL",
        "SEED_DEMO_DATA",
        "LEADERBOARD_LIMIT",
        "REFERRAL_BONUS",
        "WELCOME_BONUS_COINS",
        "CORS_ALLOW_ORIGINS",
        "BCRYPT_ROUNDS",
    ):
        monkeypatch.delenv(name, raising=False)
    s = Settings.from_env()
    assert s.database_url.startswith("sqlite+aiosqlite")
    assert s.seed_demo_data is False
    assert s.leaderboard_limit == 50
    assert s.referral_bonus == Decimal("50.00")
    assert s.welcome_bonus_coins == 100
    assert s.cors_allow_origins == ["*"]
    assert s.bcrypt_rounds == 12


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("SEED_DEMO_DATA", "yes")
    monkeypatch.setenv("LEADERBOARD_LIMIT", "10")
    monkeypatch.setenv("REFERRAL_BONUS", "25.50")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("BCRYPT_ROUNDS", "5")
    s = Settings.from_env()
    assert s.database_url == "sqlite+aiosqlite:///:memory:"
    assert s.seed_demo_data is True
    assert s.leaderboard_limit == 10
    assert s.referral_bonus == Decimal("25.50")
    assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
    assert s.bcrypt_rounds == 5
