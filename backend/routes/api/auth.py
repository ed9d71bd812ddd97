"""POST /api/auth/login and /api/auth/register."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import EmailStr, Field, model_validator
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_db_session
from services.auth_service import authenticate, issue_token, register_user

from .schemas import AuthOut, CamelModel, UserOut

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginBody(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterBody(CamelModel):
    username: str = Field(..., min_length=3, max_length=64)
    email: EmailStr
    password: str = Field(..., min_length=6)
    confirm_password: str = Field(..., min_length=1)
    phone: Optional[str] = None
    country: Optional[str] = None
    avatar: Optional[str] = None
    referred_by: Optional[str] = Field(default=None, description="Referral code of the inviting user")

    @model_validator(mode="after")
    def _passwords_match(self) -> "RegisterBody":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


@router.post("/login", response_model=AuthOut, summary="Log in with email and password")
async def post_login(body: LoginBody, session: AsyncSession = Depends(get_db_session)):
    """Returns the user (without password) and an opaque token; 401 on bad credentials."""
    user = await authenticate(session, body.email, body.password)
    return AuthOut(user=UserOut.model_validate(user), token=issue_token(user))


@router.post("/register", response_model=AuthOut, summary="Create an account")
async def post_register(body: RegisterBody, session: AsyncSession = Depends(get_db_session)):
    user = await register_user(
        session,
        username=body.username,
        email=body.email,
        password=body.password,
        phone=body.phone,
        country=body.country,
        avatar=body.avatar,
        referred_by=body.referred_by,
    )
    return AuthOut(user=UserOut.model_validate(user), token=issue_token(user))
