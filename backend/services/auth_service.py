"""Registration and login. Tokens are opaque and never verified."""

from __future__ import annotations

import logging
from typing import Optional

import bcrypt
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from core.errors import AuthenticationError, DomainError, DuplicateError
from models.user import User
from repositories.user_repo import UserRepository
from services.notification_service import notify

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, *, rounds: Optional[int] = None) -> str:
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise DomainError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds or get_settings().bcrypt_rounds)
    return bcrypt.hashpw(raw, salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(raw, hashed.encode("utf-8"))
    except ValueError:
        # not a bcrypt hash
        return False


def issue_token(user: User) -> str:
    return f"fake-jwt-token-{user.id}"


async def register_user(
    session: AsyncSession,
    *,
    username: str,
    email: str,
    password: str,
    phone: Optional[str] = None,
    country: Optional[str] = None,
    avatar: Optional[str] = None,
    referred_by: Optional[str] = None,
    welcome_bonus_coins: Optional[int] = None,
) -> User:
    """Create an account with a USER%03d referral code and the welcome bonus."""
    users = UserRepository(session)
    if await users.get_by_email(email) is not None:
        raise DuplicateError("User already exists")
    if await users.get_by_username(username) is not None:
        raise DuplicateError("Username already taken")

    referral = (referred_by or "").strip() or None
    if referral is not None and await users.get_by_referral_code(referral) is None:
        raise DomainError("Invalid referral code")

    bonus = welcome_bonus_coins if welcome_bonus_coins is not None else get_settings().welcome_bonus_coins
    user = await users.create(
        User(
            username=username,
            email=email.strip().lower(),
            password_hash=hash_password(password),
            phone=phone,
            country=country,
            avatar=avatar,
            bonus_coins=bonus,
            referred_by=referral,
        )
    )
    user.referral_code = f"USER{user.id:03d}"
    await session.flush()

    await notify(
        session,
        user.id,
        "Welcome to Fire Fight",
        f"Your account is ready. You received {bonus} bonus coins!",
        "system",
    )
    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


async def authenticate(session: AsyncSession, email: str, password: str) -> User:
    user = await UserRepository(session).get_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid credentials")
    return user
