"""Users: list/get/update, plus per-user teams, transactions, notifications and referrals."""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import EmailStr, Field
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_db_session
from core.errors import DuplicateError, NotFoundError
from repositories.notification_repo import NotificationRepository
from repositories.transaction_repo import TransactionRepository
from repositories.user_repo import UserRepository
from services.notification_service import mark_all_read
from services.referral_service import list_referrals
from services.team_service import list_user_teams

from .schemas import (
    CamelModel,
    MessageOut,
    NotificationOut,
    ReferralOut,
    TeamOut,
    TransactionOut,
    UserOut,
)

router = APIRouter(prefix="/users", tags=["users"])

_NOT_NULL = ("username", "email", "bonus_coins", "is_admin")


class UserUpdateBody(CamelModel):
    """Profile and admin fields. The wallet balance only moves through the ledger."""

    username: Optional[str] = Field(default=None, min_length=3, max_length=64)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    country: Optional[str] = None
    avatar: Optional[str] = None
    bonus_coins: Optional[int] = Field(default=None, ge=0)
    is_admin: Optional[bool] = None


async def _require_user(session: AsyncSession, user_id: int):
    user = await UserRepository(session).get_by_id(user_id, refresh=True)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


@router.get("", response_model=List[UserOut], summary="List users")
async def get_users(session: AsyncSession = Depends(get_db_session)):
    return await UserRepository(session).list_all()


@router.get("/{user_id}", response_model=UserOut, summary="Get one user")
async def get_user(user_id: int, session: AsyncSession = Depends(get_db_session)):
    return await _require_user(session, user_id)


@router.put("/{user_id}", response_model=UserOut, summary="Update a user")
async def put_user(
    user_id: int,
    body: UserUpdateBody,
    session: AsyncSession = Depends(get_db_session),
):
    repo = UserRepository(session)
    user = await _require_user(session, user_id)
    changes = body.model_dump(exclude_unset=True)
    # Explicit nulls on non-nullable columns are ignored
    changes = {k: v for k, v in changes.items() if not (v is None and k in _NOT_NULL)}
    if changes.get("email") and changes["email"].lower() != user.email:
        other = await repo.get_by_email(changes["email"])
        if other is not None and other.id != user_id:
            raise DuplicateError("Email already in use")
        changes["email"] = changes["email"].lower()
    if changes.get("username") and changes["username"] != user.username:
        other = await repo.get_by_username(changes["username"])
        if other is not None and other.id != user_id:
            raise DuplicateError("Username already taken")
    return await repo.update_fields(user, **changes)


@router.get("/{user_id}/teams", response_model=List[TeamOut], summary="Teams the user belongs to")
async def get_user_teams(user_id: int, session: AsyncSession = Depends(get_db_session)):
    return await list_user_teams(session, user_id)


@router.get(
    "/{user_id}/transactions",
    response_model=List[TransactionOut],
    summary="User wallet ledger, newest first",
)
async def get_user_transactions(user_id: int, session: AsyncSession = Depends(get_db_session)):
    await _require_user(session, user_id)
    return await TransactionRepository(session).list_by_user(user_id)


@router.get(
    "/{user_id}/notifications",
    response_model=List[NotificationOut],
    summary="User notifications, newest first",
)
async def get_user_notifications(user_id: int, session: AsyncSession = Depends(get_db_session)):
    await _require_user(session, user_id)
    return await NotificationRepository(session).list_by_user(user_id)


@router.put(
    "/{user_id}/notifications/read-all",
    response_model=MessageOut,
    summary="Mark every notification of the user as read",
)
async def put_read_all(user_id: int, session: AsyncSession = Depends(get_db_session)):
    count = await mark_all_read(session, user_id)
    return MessageOut(message=f"{count} notifications marked as read")


@router.get(
    "/{user_id}/referrals",
    response_model=List[ReferralOut],
    summary="Users who registered with this user's referral code",
)
async def get_user_referrals(user_id: int, session: AsyncSession = Depends(get_db_session)):
    rows = await list_referrals(session, user_id)
    return [
        ReferralOut(
            user=UserOut.model_validate(row["user"]),
            is_rewarded=row["is_rewarded"],
            bonus_amount=row["bonus_amount"],
        )
        for row in rows
    ]
