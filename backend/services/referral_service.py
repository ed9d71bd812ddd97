"""Referral program: the referrer is paid once the referred user enters a first tournament."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from core.errors import NotFoundError
from core.money import ZERO, format_money, to_money
from models.user import User
from repositories.transaction_repo import TransactionRepository
from repositories.user_repo import UserRepository
from services.notification_service import notify
from services.wallet_service import record_transaction, update_user_wallet

logger = logging.getLogger(__name__)


async def reward_referrer(
    session: AsyncSession,
    referred: User,
    bonus: Optional[Decimal] = None,
) -> Optional[User]:
    """Credit the referrer of ``referred``; returns the referrer or None if there is none."""
    if not referred.referred_by:
        return None
    referrer = await UserRepository(session).get_by_referral_code(referred.referred_by)
    if referrer is None:
        logger.warning(
            "User %s has unknown referral code %s", referred.id, referred.referred_by
        )
        return None

    amount = to_money(bonus if bonus is not None else get_settings().referral_bonus)
    if amount <= ZERO:
        return referrer
    referrer = await update_user_wallet(session, referrer.id, amount)
    await record_transaction(
        session,
        referrer.id,
        "referral_bonus",
        amount,
        f"Referral Bonus - {referred.username} joined",
    )
    await notify(
        session,
        referrer.id,
        "Referral bonus earned",
        f"{referred.username} played their first tournament. You earned {format_money(amount)}!",
        "referral",
    )
    logger.info("Referral bonus %s paid to user %s for user %s", amount, referrer.id, referred.id)
    return referrer


async def list_referrals(session: AsyncSession, user_id: int) -> List[Dict[str, Any]]:
    """Users who registered with this user's referral code."""
    users = UserRepository(session)
    user = await users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    if not user.referral_code:
        return []
    transactions = TransactionRepository(session)
    bonus = to_money(get_settings().referral_bonus)
    rows: List[Dict[str, Any]] = []
    for referred in await users.list_referred_by(user.referral_code):
        rewarded = await transactions.count_by_user_and_type(referred.id, "tournament_entry") > 0
        rows.append(
            {
                "user": referred,
                "is_rewarded": rewarded,
                "bonus_amount": bonus if rewarded else ZERO,
            }
        )
    return rows
