"""Per-user notifications: creation, admin broadcast, read flags."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import DomainError, NotFoundError
from models.notification import NOTIFICATION_TYPES, Notification
from repositories.notification_repo import NotificationRepository
from repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


async def notify(
    session: AsyncSession,
    user_id: int,
    title: str,
    message: str,
    type_: str = "system",
) -> Notification:
    """Queue a notification for one user in the current transaction."""
    if type_ not in NOTIFICATION_TYPES:
        raise DomainError(f"Invalid notification type: {type_}")
    repo = NotificationRepository(session)
    return await repo.create(
        Notification(user_id=user_id, title=title, message=message, type=type_)
    )


async def send_notifications(
    session: AsyncSession,
    title: str,
    message: str,
    type_: str = "system",
    user_ids: Optional[Iterable[int]] = None,
) -> int:
    """Send one notification to each listed user, or to every non-admin user.

    Unknown user ids are rejected before anything is written.
    """
    users = UserRepository(session)
    if user_ids is None:
        targets: List[int] = await users.list_non_admin_ids()
    else:
        targets = list(dict.fromkeys(user_ids))
        for uid in targets:
            if await users.get_by_id(uid) is None:
                raise NotFoundError("User", uid)
    for uid in targets:
        await notify(session, uid, title, message, type_)
    logger.info("Sent %s notification '%s' to %d users", type_, title, len(targets))
    return len(targets)


async def mark_read(session: AsyncSession, notification_id: int) -> Notification:
    repo = NotificationRepository(session)
    notification = await repo.get_by_id(notification_id)
    if notification is None:
        raise NotFoundError("Notification", notification_id)
    return await repo.update_fields(notification, read=True)


async def mark_all_read(session: AsyncSession, user_id: int) -> int:
    if await UserRepository(session).get_by_id(user_id) is None:
        raise NotFoundError("User", user_id)
    return await NotificationRepository(session).mark_all_read(user_id)
