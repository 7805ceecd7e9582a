"""
CourtSession model.

A scheduled hearing or meeting, optionally linked to a case. Times are stored
in UTC; SQLite hands them back naive, so comparisons go through as_utc().
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.ext.mutable import MutableList
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lawdesk.db.base import Base
from lawdesk.models.enums import PENDING_SESSION_STATUSES, Priority, SessionStatus

if TYPE_CHECKING:  # pragma: no cover
    from lawdesk.models.case import Case


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Aware UTC datetime; naive values are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CourtSession(Base):
    __tablename__ = "court_session"
    __table_args__ = (
        UniqueConstraint("law_firm_id", "session_number", name="uq_court_session_firm_number"),
        CheckConstraint("reminder_minutes_before >= 1", name="reminder_minutes_min"),
        Index("ix_court_session_firm_start", "law_firm_id", "scheduled_start"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    law_firm_id: Mapped[int] = mapped_column(
        ForeignKey("law_firm.id", ondelete="CASCADE"), nullable=False, index=True
    )
    case_id: Mapped[int | None] = mapped_column(
        ForeignKey("legal_case.id", ondelete="CASCADE"), nullable=True, index=True
    )
    created_by: Mapped[int | None] = mapped_column(
        ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )

    session_number: Mapped[str] = mapped_column(String(32), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    title_ar: Mapped[str | None] = mapped_column(String(200), nullable=True)
    session_type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=SessionStatus.SCHEDULED.value, index=True
    )
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default=Priority.MEDIUM.value)

    scheduled_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    scheduled_end: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    actual_start: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    actual_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Venue
    location_type: Mapped[str] = mapped_column(String(16), nullable=False, default="physical")
    venue: Mapped[str | None] = mapped_column(String(200), nullable=True)
    room: Mapped[str | None] = mapped_column(String(64), nullable=True)
    virtual_link: Mapped[str | None] = mapped_column(String(500), nullable=True)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    agenda: Mapped[str | None] = mapped_column(Text, nullable=True)

    reminder_minutes_before: Mapped[int] = mapped_column(Integer, nullable=False, default=24 * 60)
    reminder_sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Outcome
    outcome_summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    minutes: Mapped[str | None] = mapped_column(Text, nullable=True)
    next_steps: Mapped[list] = mapped_column(MutableList.as_mutable(JSON), nullable=False, default=list)

    cancellation_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    postponement_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    case: Mapped[Optional["Case"]] = relationship("Case", lazy="joined")
    # Staff attending; reminders go to each of them
    participants: Mapped[list["CourtSessionParticipant"]] = relationship(
        "CourtSessionParticipant",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="CourtSessionParticipant.user_id",
    )

    @property
    def participant_ids(self) -> list[int]:
        return [p.user_id for p in self.participants]

    @property
    def is_upcoming(self) -> bool:
        return self.status in PENDING_SESSION_STATUSES and as_utc(self.scheduled_start) > utc_now()

    @property
    def is_overdue(self) -> bool:
        return self.status in PENDING_SESSION_STATUSES and as_utc(self.scheduled_end) < utc_now()

    def reminder_due(self, now: datetime) -> bool:
        """True once `now` is inside the reminder window and no reminder went out yet."""
        if self.status not in PENDING_SESSION_STATUSES or self.reminder_sent_at is not None:
            return False
        start = as_utc(self.scheduled_start)
        return start > now and (start - now).total_seconds() <= self.reminder_minutes_before * 60

    def __repr__(self) -> str:
        return f"<CourtSession id={self.id!r} number={self.session_number!r} status={self.status!r}>"


class CourtSessionParticipant(Base):
    __tablename__ = "court_session_participant"

    session_id: Mapped[int] = mapped_column(
        ForeignKey("court_session.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("app_user.id", ondelete="CASCADE"), primary_key=True, index=True
    )
