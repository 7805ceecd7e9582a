"""
LawFirm model.

The tenant: every user, client, case, document and notification belongs to exactly one firm.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text, func, text
from sqlalchemy.orm import Mapped, mapped_column

from lawdesk.db.base import Base
from lawdesk.models.enums import SubscriptionPlan


class LawFirm(Base):
    __tablename__ = "law_firm"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    license_number: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)

    # Stored lowercased
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    subscription_plan: Mapped[str] = mapped_column(
        String(32), nullable=False, default=SubscriptionPlan.BASIC.value
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true"), index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<LawFirm id={self.id!r} license={self.license_number!r} active={self.is_active!r}>"
