from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow

TOURNAMENT_STATUSES = ("upcoming", "live", "ended")
TOURNAMENT_MODES = ("solo", "duo", "squad")


class Tournament(Base):
    """Paid-entry tournament with a prize pool and a capped participant list."""

    __tablename__ = "tournaments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    game_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("games.id"), nullable=True, index=True
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    entry_fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    prize_pool: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    max_participants: Mapped[int] = mapped_column(Integer, nullable=False)
    # Maintained by conditional UPDATEs in TournamentRepository
    current_participants: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    mode: Mapped[str] = mapped_column(String(16), nullable=False)  # solo | duo | squad
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default="upcoming", index=True
    )  # upcoming | live | ended
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    room_code: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    room_password: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    rules: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    __table_args__ = (
        CheckConstraint("current_participants >= 0", name="ck_tournament_participants_nonneg"),
    )
