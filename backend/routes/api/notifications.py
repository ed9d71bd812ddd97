"""Notification read flags and admin broadcast."""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_db_session
from models.notification import NOTIFICATION_TYPES
from services.notification_service import mark_read, send_notifications

from .schemas import CamelModel, NotificationOut, SentOut

router = APIRouter(prefix="/notifications", tags=["notifications"])


class SendBody(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    type: str = "system"
    user_ids: Optional[List[int]] = None

    @field_validator("type")
    @classmethod
    def _known_type(cls, v: str) -> str:
        if v not in NOTIFICATION_TYPES:
            raise ValueError(f"type must be one of: {', '.join(NOTIFICATION_TYPES)}")
        return v


@router.put("/{notification_id}/read", response_model=NotificationOut, summary="Mark one notification read")
async def put_read(notification_id: int, session: AsyncSession = Depends(get_db_session)):
    return await mark_read(session, notification_id)


@router.post("", response_model=SentOut, summary="Send a notification to users")
async def post_notification(body: SendBody, session: AsyncSession = Depends(get_db_session)):
    sent = await send_notifications(
        session, body.title, body.message, body.type, user_ids=body.user_ids
    )
    return SentOut(message="Notifications sent", sent=sent)
