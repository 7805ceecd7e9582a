"""
Case and CaseNote models.

Dates are calendar dates; durations and ages are whole days.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.ext.mutable import MutableList
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lawdesk.db.base import Base
from lawdesk.models.enums import CaseStatus, Priority

if TYPE_CHECKING:  # pragma: no cover
    from lawdesk.models.client import Client
    from lawdesk.models.user import User


class Case(Base):
    # "case" is a SQL keyword
    __tablename__ = "legal_case"
    __table_args__ = (
        CheckConstraint(
            "success_probability IS NULL OR (success_probability >= 0 AND success_probability <= 100)",
            name="success_probability_range",
        ),
        CheckConstraint("estimated_value IS NULL OR estimated_value >= 0", name="estimated_value_min"),
        CheckConstraint("actual_value IS NULL OR actual_value >= 0", name="actual_value_min"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    law_firm_id: Mapped[int] = mapped_column(
        ForeignKey("law_firm.id", ondelete="CASCADE"), nullable=False, index=True
    )
    client_id: Mapped[int] = mapped_column(
        ForeignKey("client.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assigned_lawyer_id: Mapped[int] = mapped_column(
        ForeignKey("app_user.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    case_type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=CaseStatus.NEW.value, index=True)
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default=Priority.MEDIUM.value, index=True)

    # Unique when present
    case_number: Mapped[str | None] = mapped_column(String(64), nullable=True, unique=True)

    start_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.today, index=True)
    expected_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    actual_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    success_probability: Mapped[int | None] = mapped_column(Integer, nullable=True)
    estimated_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    actual_value: Mapped[float | None] = mapped_column(Float, nullable=True)

    tags: Mapped[list] = mapped_column(MutableList.as_mutable(JSON), nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    client: Mapped["Client"] = relationship("Client", lazy="joined")
    assigned_lawyer: Mapped["User"] = relationship("User", lazy="joined")
    notes: Mapped[list["CaseNote"]] = relationship(
        "CaseNote",
        back_populates="case",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CaseNote.id",
    )

    @property
    def duration_days(self) -> Optional[int]:
        end = self.actual_end_date or self.expected_end_date
        if end is None or self.start_date is None:
            return None
        return (end - self.start_date).days

    @property
    def age_days(self) -> int:
        if self.start_date is None:
            return 0
        return (date.today() - self.start_date).days

    def __repr__(self) -> str:
        return f"<Case id={self.id!r} law_firm_id={self.law_firm_id!r} status={self.status!r}>"


class CaseNote(Base):
    __tablename__ = "case_note"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    case_id: Mapped[int] = mapped_column(
        ForeignKey("legal_case.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    added_by: Mapped[int | None] = mapped_column(
        ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    case: Mapped["Case"] = relationship("Case", back_populates="notes")
