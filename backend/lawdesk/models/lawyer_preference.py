"""
LawyerPreference model.

One row per user holding how they want AI-assisted answers and notifications
tailored. Column defaults double as the "reset to defaults" values.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, func
from sqlalchemy.ext.mutable import MutableDict, MutableList
from sqlalchemy.orm import Mapped, mapped_column

from lawdesk.db.base import Base


def default_working_hours() -> Dict[str, Any]:
    return {"start": "09:00", "end": "17:00", "timezone": "Asia/Riyadh"}


class LawyerPreference(Base):
    __tablename__ = "lawyer_preference"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    law_firm_id: Mapped[int] = mapped_column(
        ForeignKey("law_firm.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Response preferences
    preferred_language: Mapped[str] = mapped_column(String(8), nullable=False, default="both")
    response_style: Mapped[str] = mapped_column(String(32), nullable=False, default="formal")
    detail_level: Mapped[str] = mapped_column(String(32), nullable=False, default="standard")
    include_arabic_terms: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    include_citations: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    include_examples: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Practice
    specializations: Mapped[list] = mapped_column(MutableList.as_mutable(JSON), nullable=False, default=list)
    preferred_sources: Mapped[list] = mapped_column(MutableList.as_mutable(JSON), nullable=False, default=list)
    practice_areas: Mapped[list] = mapped_column(MutableList.as_mutable(JSON), nullable=False, default=list)

    # Communication
    urgency_handling: Mapped[str] = mapped_column(String(32), nullable=False, default="balanced")
    client_communication_style: Mapped[str] = mapped_column(String(32), nullable=False, default="formal")
    risk_tolerance: Mapped[str] = mapped_column(String(16), nullable=False, default="medium")

    # Workflow
    preferred_case_types: Mapped[list] = mapped_column(MutableList.as_mutable(JSON), nullable=False, default=list)
    working_hours: Mapped[dict] = mapped_column(
        MutableDict.as_mutable(JSON), nullable=False, default=default_working_hours
    )

    # Learning
    feedback_frequency: Mapped[str] = mapped_column(String(16), nullable=False, default="weekly")
    improvement_areas: Mapped[list] = mapped_column(MutableList.as_mutable(JSON), nullable=False, default=list)
    success_metrics: Mapped[list] = mapped_column(MutableList.as_mutable(JSON), nullable=False, default=list)

    # Notifications
    ai_suggestion_notifications: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    learning_updates: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    personalized_tips: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<LawyerPreference id={self.id!r} user_id={self.user_id!r}>"
