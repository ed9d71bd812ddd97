"""
Wallet balance and ledger operations.

Every balance change goes through update_user_wallet, a single conditional
UPDATE, and is paired with a ledger row written in the same session. The
session owner commits both or neither: if the ledger insert fails the balance
change is rolled back with it.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import DomainError, InsufficientBalanceError, InvalidStateError, NotFoundError
from core.money import ZERO, MoneyLike, format_money, to_money
from models.transaction import TRANSACTION_STATUSES, TRANSACTION_TYPES, Transaction
from models.user import User
from repositories.transaction_repo import TransactionRepository
from repositories.user_repo import UserRepository
from services.notification_service import notify

logger = logging.getLogger(__name__)


def _positive_amount(amount: MoneyLike) -> Decimal:
    try:
        value = to_money(amount)
    except ValueError as e:
        raise DomainError(str(e)) from e
    if value <= ZERO:
        raise DomainError("Amount must be greater than zero")
    return value


_CREDIT_TYPES = ("deposit", "tournament_win", "referral_bonus")


def _check_sign(type_: str, value: Decimal) -> None:
    if type_ in _CREDIT_TYPES and value <= ZERO:
        raise DomainError(f"{type_} amount must be greater than zero")
    if type_ == "withdrawal" and value >= ZERO:
        raise DomainError("withdrawal amount must be negative")


async def update_user_wallet(session: AsyncSession, user_id: int, amount: MoneyLike) -> User:
    """Apply a signed delta to the user's wallet balance and return the user.

    Raises NotFoundError for an unknown user and InsufficientBalanceError when
    a debit is larger than the balance; in both cases nothing changes.
    """
    delta = to_money(amount)
    users = UserRepository(session)
    if not await users.apply_wallet_delta(user_id, delta):
        if await users.get_by_id(user_id) is None:
            raise NotFoundError("User", user_id)
        raise InsufficientBalanceError()
    user = await users.get_by_id(user_id, refresh=True)
    logger.info("Wallet user=%s delta=%s balance=%s", user_id, delta, user.wallet_balance)
    return user


async def record_transaction(
    session: AsyncSession,
    user_id: int,
    type_: str,
    amount: MoneyLike,
    description: Optional[str] = None,
    status: str = "completed",
) -> Transaction:
    """Append one ledger row (no balance change)."""
    if type_ not in TRANSACTION_TYPES:
        raise DomainError(f"Invalid transaction type: {type_}")
    if status not in TRANSACTION_STATUSES:
        raise DomainError(f"Invalid transaction status: {status}")
    repo = TransactionRepository(session)
    return await repo.create(
        Transaction(
            user_id=user_id,
            type=type_,
            amount=to_money(amount),
            description=description,
            status=status,
        )
    )


async def create_transaction(
    session: AsyncSession,
    user_id: int,
    type_: str,
    amount: MoneyLike,
    description: Optional[str] = None,
    status: str = "completed",
) -> Transaction:
    """Ledger entry from the admin/API surface.

    Completed entries move the balance. A pending withdrawal is debited up
    front like withdraw(), so rejecting it later only returns what was taken.
    """
    try:
        value = to_money(amount)
    except ValueError as e:
        raise DomainError(str(e)) from e
    _check_sign(type_, value)
    if await UserRepository(session).get_by_id(user_id) is None:
        raise NotFoundError("User", user_id)
    if status == "completed" or (type_ == "withdrawal" and status == "pending"):
        await update_user_wallet(session, user_id, value)
    return await record_transaction(session, user_id, type_, value, description, status)


async def deposit(session: AsyncSession, user_id: int, amount: MoneyLike) -> User:
    value = _positive_amount(amount)
    user = await update_user_wallet(session, user_id, value)
    await record_transaction(session, user_id, "deposit", value, "Wallet deposit")
    await notify(
        session,
        user_id,
        "Money added",
        f"{format_money(value)} was added to your wallet.",
        "wallet",
    )
    return user


async def withdraw(session: AsyncSession, user_id: int, amount: MoneyLike) -> User:
    """Debit now and log a pending withdrawal for an admin to settle."""
    value = _positive_amount(amount)
    user = await update_user_wallet(session, user_id, -value)
    await record_transaction(
        session, user_id, "withdrawal", -value, "Wallet withdrawal", status="pending"
    )
    await notify(
        session,
        user_id,
        "Withdrawal requested",
        f"Your withdrawal of {format_money(value)} is pending approval.",
        "wallet",
    )
    return user


async def settle_withdrawal(session: AsyncSession, transaction_id: int, status: str) -> Transaction:
    """Approve (completed) or reject (failed) a pending withdrawal.

    Rejection credits the withheld amount back to the wallet.
    """
    if status not in ("completed", "failed"):
        raise DomainError("status must be one of: completed, failed")
    repo = TransactionRepository(session)
    tx = await repo.get_by_id(transaction_id)
    if tx is None:
        raise NotFoundError("Transaction", transaction_id)
    if tx.type != "withdrawal" or tx.status != "pending":
        raise InvalidStateError("Only pending withdrawals can be settled")

    amount = to_money(tx.amount)
    if status == "failed":
        await update_user_wallet(session, tx.user_id, -amount)
    await repo.update_fields(tx, status=status)

    if status == "completed":
        title, message = "Withdrawal approved", f"Your withdrawal of {format_money(-amount)} was approved."
    else:
        title, message = (
            "Withdrawal rejected",
            f"Your withdrawal of {format_money(-amount)} was rejected and refunded.",
        )
    await notify(session, tx.user_id, title, message, "wallet")
    logger.info("Withdrawal %s settled as %s", transaction_id, status)
    return tx
