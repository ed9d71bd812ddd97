"""
Tournament lifecycle and the join / entry-fee flow.

join_tournament performs its writes (slot, debit, participant row, ledger
row) in the caller's session. The slot and the debit are conditional UPDATEs,
so a full tournament or a short wallet raises before commit and the session
owner's rollback leaves no trace of the attempt.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import CapacityError, DomainError, DuplicateError, InvalidStateError, NotFoundError
from core.money import ZERO, format_money, to_money
from models.base import as_utc
from models.tournament import TOURNAMENT_MODES, TOURNAMENT_STATUSES, Tournament
from models.tournament_participant import TournamentParticipant
from repositories.game_repo import GameRepository
from repositories.participant_repo import ParticipantRepository
from repositories.team_repo import TeamRepository
from repositories.tournament_repo import TournamentRepository
from repositories.transaction_repo import TransactionRepository
from repositories.user_repo import UserRepository
from services.notification_service import notify
from services.referral_service import reward_referrer
from services.wallet_service import record_transaction, update_user_wallet

logger = logging.getLogger(__name__)

_STATUS_ORDER = {status: i for i, status in enumerate(TOURNAMENT_STATUSES)}


def _validate_fields(data: Dict[str, Any]) -> None:
    if "mode" in data and data["mode"] not in TOURNAMENT_MODES:
        raise DomainError(f"mode must be one of: {', '.join(TOURNAMENT_MODES)}")
    if "status" in data and data["status"] not in TOURNAMENT_STATUSES:
        raise DomainError(f"status must be one of: {', '.join(TOURNAMENT_STATUSES)}")
    for key in ("entry_fee", "prize_pool"):
        if key in data:
            data[key] = to_money(data[key])
            if data[key] < ZERO:
                raise DomainError(f"{key} must not be negative")
    if "max_participants" in data and data["max_participants"] < 1:
        raise DomainError("max_participants must be at least 1")
    for key in ("start_time", "end_time"):
        if data.get(key) is not None:
            data[key] = as_utc(data[key])


def _check_times(start: Optional[datetime], end: Optional[datetime]) -> None:
    start, end = as_utc(start), as_utc(end)
    if start is not None and end is not None and end < start:
        raise DomainError("end_time must not be before start_time")


async def get_tournament(session: AsyncSession, tournament_id: int) -> Tournament:
    tournament = await TournamentRepository(session).get_by_id(tournament_id, refresh=True)
    if tournament is None:
        raise NotFoundError("Tournament", tournament_id)
    return tournament


async def create_tournament(session: AsyncSession, data: Dict[str, Any]) -> Tournament:
    data = dict(data)
    _validate_fields(data)
    _check_times(data.get("start_time"), data.get("end_time"))
    game_id = data.get("game_id")
    if game_id is not None and await GameRepository(session).get_by_id(game_id) is None:
        raise NotFoundError("Game", game_id)
    tournament = await TournamentRepository(session).create(
        Tournament(current_participants=0, **data)
    )
    logger.info("Created tournament %s '%s'", tournament.id, tournament.title)
    return tournament


async def update_tournament(
    session: AsyncSession, tournament_id: int, changes: Dict[str, Any]
) -> Tournament:
    """Partial update. Status only moves forward: upcoming -> live -> ended."""
    tournament = await get_tournament(session, tournament_id)
    changes = dict(changes)
    _validate_fields(changes)

    new_status = changes.get("status")
    if new_status is not None and _STATUS_ORDER[new_status] < _STATUS_ORDER[tournament.status]:
        raise InvalidStateError(
            f"Cannot move tournament from {tournament.status} to {new_status}"
        )
    if changes.get("max_participants", tournament.max_participants) < tournament.current_participants:
        raise DomainError("max_participants cannot be lower than current participants")
    _check_times(
        changes.get("start_time", tournament.start_time),
        changes.get("end_time", tournament.end_time),
    )
    game_id = changes.get("game_id")
    if game_id is not None and await GameRepository(session).get_by_id(game_id) is None:
        raise NotFoundError("Game", game_id)

    await TournamentRepository(session).update_fields(tournament, **changes)
    if new_status is not None:
        logger.info("Tournament %s status -> %s", tournament_id, new_status)
    return tournament


async def delete_tournament(session: AsyncSession, tournament_id: int) -> None:
    tournament = await get_tournament(session, tournament_id)
    await TournamentRepository(session).delete_with_dependents(tournament)
    logger.info("Deleted tournament %s", tournament_id)


async def list_participants(session: AsyncSession, tournament_id: int) -> List[TournamentParticipant]:
    await get_tournament(session, tournament_id)
    return await ParticipantRepository(session).list_by_tournament(tournament_id)


async def join_tournament(
    session: AsyncSession,
    tournament_id: int,
    user_id: int,
    team_id: Optional[int] = None,
) -> TournamentParticipant:
    """Register a user: take a slot, debit the entry fee, log the entry.

    Raises NotFoundError (tournament/user/team), DuplicateError (already
    registered), CapacityError (full) or InsufficientBalanceError.
    """
    tournaments = TournamentRepository(session)
    participants = ParticipantRepository(session)

    tournament = await tournaments.get_by_id(tournament_id, refresh=True)
    if tournament is None:
        raise NotFoundError("Tournament", tournament_id)
    # Capacity is reported before any user or team lookup
    if tournament.current_participants >= tournament.max_participants:
        raise CapacityError("Tournament is full")
    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    if team_id is not None and await TeamRepository(session).get_by_id(team_id) is None:
        raise NotFoundError("Team", team_id)
    if await participants.get(tournament_id, user_id) is not None:
        raise DuplicateError("Already joined this tournament")

    first_entry = (
        await TransactionRepository(session).count_by_user_and_type(user_id, "tournament_entry") == 0
    )
    fee = to_money(tournament.entry_fee)

    if not await tournaments.try_increment_participants(tournament_id):
        raise CapacityError("Tournament is full")
    await update_user_wallet(session, user_id, -fee)

    try:
        participant = await participants.create(
            TournamentParticipant(tournament_id=tournament_id, user_id=user_id, team_id=team_id)
        )
    except IntegrityError as e:
        raise DuplicateError("Already joined this tournament") from e

    await record_transaction(
        session,
        user_id,
        "tournament_entry",
        -fee if fee else ZERO,
        f"Tournament Entry - {tournament.title}",
    )
    await notify(
        session,
        user_id,
        "Tournament joined",
        f"You joined {tournament.title}. Entry fee paid: {format_money(fee)}.",
        "tournament",
    )
    if first_entry and user.referred_by:
        await reward_referrer(session, user)

    logger.info("User %s joined tournament %s (fee %s)", user_id, tournament_id, fee)
    return participant


async def remove_participant(session: AsyncSession, tournament_id: int, user_id: int) -> bool:
    """Admin removal; refunds the entry fee while the tournament is upcoming.

    Returns True when a refund was paid.
    """
    tournament = await get_tournament(session, tournament_id)
    participants = ParticipantRepository(session)
    participant = await participants.get(tournament_id, user_id)
    if participant is None:
        raise NotFoundError("Participant", user_id)

    await participants.delete(participant)
    await TournamentRepository(session).decrement_participants(tournament_id)

    fee = to_money(tournament.entry_fee)
    refunded = tournament.status == "upcoming" and fee > ZERO
    if refunded:
        await update_user_wallet(session, user_id, fee)
        await record_transaction(
            session, user_id, "tournament_entry", fee, f"Tournament Entry Refund - {tournament.title}"
        )
        await notify(
            session,
            user_id,
            "Removed from tournament",
            f"You were removed from {tournament.title}. {format_money(fee)} was refunded.",
            "tournament",
        )
    logger.info("Removed user %s from tournament %s (refunded=%s)", user_id, tournament_id, refunded)
    return refunded
