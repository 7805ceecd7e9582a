"""
Client and ClientNote models.

A client belongs to one law firm and may optionally have a portal password that
lets them sign into the read-only client portal.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.ext.mutable import MutableDict, MutableList
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lawdesk.db.base import Base
from lawdesk.models.enums import ClientStatus, ClientType

if TYPE_CHECKING:  # pragma: no cover
    from lawdesk.models.user import User


class Client(Base):
    __tablename__ = "client"
    __table_args__ = (
        UniqueConstraint("law_firm_id", "email", name="uq_client_firm_email"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    law_firm_id: Mapped[int] = mapped_column(
        ForeignKey("law_firm.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assigned_lawyer_id: Mapped[int | None] = mapped_column(
        ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True, index=True
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    name_ar: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)

    # Unique when present; NULLs do not collide
    national_id: Mapped[str | None] = mapped_column(String(10), nullable=True, unique=True)
    commercial_register: Mapped[str | None] = mapped_column(String(64), nullable=True)

    client_type: Mapped[str] = mapped_column(
        String(32), nullable=False, default=ClientType.INDIVIDUAL.value, index=True
    )
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=ClientStatus.ACTIVE.value, index=True
    )

    address: Mapped[dict | None] = mapped_column(MutableDict.as_mutable(JSON), nullable=True)
    company: Mapped[dict | None] = mapped_column(MutableDict.as_mutable(JSON), nullable=True)
    emergency_contact: Mapped[dict | None] = mapped_column(MutableDict.as_mutable(JSON), nullable=True)
    preferences: Mapped[dict] = mapped_column(MutableDict.as_mutable(JSON), nullable=False, default=dict)
    tags: Mapped[list] = mapped_column(MutableList.as_mutable(JSON), nullable=False, default=list)

    portal_password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)

    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    assigned_lawyer: Mapped[Optional["User"]] = relationship("User", lazy="joined")
    notes: Mapped[list["ClientNote"]] = relationship(
        "ClientNote",
        back_populates="client",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ClientNote.id",
    )

    @property
    def display_name(self) -> str:
        """Arabic name when the client prefers Arabic and one is on file."""
        language = (self.preferences or {}).get("language")
        if language == "ar" and self.name_ar:
            return self.name_ar
        return self.name

    @property
    def has_portal_access(self) -> bool:
        return bool(self.portal_password_hash)

    def __repr__(self) -> str:
        return f"<Client id={self.id!r} law_firm_id={self.law_firm_id!r} email={self.email!r}>"


class ClientNote(Base):
    __tablename__ = "client_note"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        ForeignKey("client.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    added_by: Mapped[int | None] = mapped_column(
        ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    client: Mapped["Client"] = relationship("Client", back_populates="notes")
