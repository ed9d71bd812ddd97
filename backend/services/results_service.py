"""Tournament results and prize payout."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import BatchEntryError, DomainError, NotFoundError
from core.money import ZERO, MoneyLike, format_money, to_money
from models.tournament_result import TournamentResult
from repositories.result_repo import TournamentResultRepository
from repositories.team_repo import TeamRepository
from repositories.tournament_repo import TournamentRepository
from repositories.user_repo import UserRepository
from services.notification_service import notify
from services.wallet_service import record_transaction, update_user_wallet

logger = logging.getLogger(__name__)


@dataclass
class ResultEntry:
    """One participant's final standing as submitted by an admin."""

    user_id: int
    position: int
    team_id: Optional[int] = None
    kills: int = 0
    points: int = 0
    prize_won: MoneyLike = ZERO


async def list_results(session: AsyncSession, tournament_id: int) -> List[TournamentResult]:
    if await TournamentRepository(session).get_by_id(tournament_id) is None:
        raise NotFoundError("Tournament", tournament_id)
    return await TournamentResultRepository(session).list_by_tournament(tournament_id)


async def distribute_prizes(
    session: AsyncSession,
    tournament_id: int,
    entries: Sequence[ResultEntry],
) -> List[TournamentResult]:
    """Store one result per entry and pay out every positive prize.

    The prizes of this batch plus those already paid for the tournament must
    fit in its prize pool. A failing entry raises BatchEntryError naming its
    index; the caller's rollback discards the whole batch.
    """
    tournament = await TournamentRepository(session).get_by_id(tournament_id)
    if tournament is None:
        raise NotFoundError("Tournament", tournament_id)

    results_repo = TournamentResultRepository(session)
    prizes: List[Decimal] = []
    for index, entry in enumerate(entries):
        try:
            prize = to_money(entry.prize_won or ZERO)
        except ValueError as e:
            raise BatchEntryError(index, DomainError(str(e))) from e
        if prize < ZERO:
            raise BatchEntryError(index, DomainError("prize_won must not be negative"))
        prizes.append(prize)

    already_paid = sum(
        (to_money(r.prize_won) for r in await results_repo.list_by_tournament(tournament_id)),
        ZERO,
    )
    pool = to_money(tournament.prize_pool)
    if already_paid + sum(prizes, ZERO) > pool:
        raise DomainError(
            f"Total prizes {format_money(already_paid + sum(prizes, ZERO))} "
            f"exceed prize pool {format_money(pool)}"
        )

    created: List[TournamentResult] = []
    for index, (entry, prize) in enumerate(zip(entries, prizes)):
        try:
            created.append(
                await _apply_entry(session, tournament_id, tournament.title, entry, prize)
            )
        except BatchEntryError:
            raise
        except DomainError as e:
            raise BatchEntryError(index, e) from e

    logger.info(
        "Recorded %d results for tournament %s, paid %s",
        len(created),
        tournament_id,
        format_money(sum(prizes, ZERO)),
    )
    return created


async def _apply_entry(
    session: AsyncSession,
    tournament_id: int,
    title: str,
    entry: ResultEntry,
    prize: Decimal,
) -> TournamentResult:
    if entry.position < 1:
        raise DomainError("position must be at least 1")
    if await UserRepository(session).get_by_id(entry.user_id) is None:
        raise NotFoundError("User", entry.user_id)
    teams = TeamRepository(session)
    if entry.team_id is not None and await teams.get_by_id(entry.team_id) is None:
        raise NotFoundError("Team", entry.team_id)

    result = await TournamentResultRepository(session).create(
        TournamentResult(
            tournament_id=tournament_id,
            user_id=entry.user_id,
            team_id=entry.team_id,
            position=entry.position,
            kills=entry.kills,
            points=entry.points,
            prize_won=prize,
        )
    )

    if prize > ZERO:
        await update_user_wallet(session, entry.user_id, prize)
        await record_transaction(
            session,
            entry.user_id,
            "tournament_win",
            prize,
            f"Tournament Win - Position {entry.position}",
        )
        await notify(
            session,
            entry.user_id,
            "Prize won",
            f"You finished #{entry.position} in {title} and won {format_money(prize)}!",
            "tournament",
        )
    if entry.team_id is not None:
        await teams.record_match(entry.team_id, won=entry.position == 1)
    return result
