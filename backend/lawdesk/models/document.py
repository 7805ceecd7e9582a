"""
Document and DocumentReview models.

A document is a stored file attached to a case. New versions are separate rows
pointing at the root document through parent_document_id.
"""

from __future__ import annotations

import os
from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
    text,
)
from sqlalchemy.ext.mutable import MutableDict, MutableList
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lawdesk.db.base import Base
from lawdesk.models.enums import DocumentStatus

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def human_file_size(num_bytes: int) -> str:
    """Format a byte count as e.g. "1.5 KB" (base 1024, at most 2 decimals)."""
    if not num_bytes or num_bytes <= 0:
        return "0 Bytes"
    idx = 0
    while num_bytes >= 1024 ** (idx + 1) and idx < len(_SIZE_UNITS) - 1:
        idx += 1
    value = round(num_bytes / (1024 ** idx), 2)
    text_value = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text_value} {_SIZE_UNITS[idx]}"


class Document(Base):
    __tablename__ = "document"
    __table_args__ = (
        CheckConstraint("version >= 1", name="version_min"),
        CheckConstraint("file_size >= 0", name="file_size_min"),
        Index("ix_document_case_status", "case_id", "status"),
        Index("ix_document_firm_type", "law_firm_id", "document_type"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    law_firm_id: Mapped[int] = mapped_column(
        ForeignKey("law_firm.id", ondelete="CASCADE"), nullable=False, index=True
    )
    case_id: Mapped[int] = mapped_column(
        ForeignKey("legal_case.id", ondelete="CASCADE"), nullable=False, index=True
    )
    client_id: Mapped[int] = mapped_column(
        ForeignKey("client.id", ondelete="CASCADE"), nullable=False, index=True
    )
    uploaded_by: Mapped[int | None] = mapped_column(
        ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True, index=True
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    title_ar: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    description_ar: Mapped[str | None] = mapped_column(Text, nullable=True)

    document_type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=DocumentStatus.DRAFT.value, index=True
    )

    # Stored file
    file_path: Mapped[str] = mapped_column(String(1024), nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(255), nullable=False)
    checksum: Mapped[str] = mapped_column(String(64), nullable=False)

    # Versioning
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    parent_document_id: Mapped[int | None] = mapped_column(
        ForeignKey("document.id", ondelete="SET NULL"), nullable=True, index=True
    )

    is_template: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false"), index=True
    )
    template_category: Mapped[str | None] = mapped_column(String(100), nullable=True)

    tags: Mapped[list] = mapped_column(MutableList.as_mutable(JSON), nullable=False, default=list)
    # "metadata" is reserved on declarative classes
    doc_metadata: Mapped[dict] = mapped_column(
        "metadata", MutableDict.as_mutable(JSON), nullable=False, default=dict
    )

    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    is_archived: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false"), index=True
    )
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    archived_by: Mapped[int | None] = mapped_column(
        ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    reviews: Mapped[list["DocumentReview"]] = relationship(
        "DocumentReview",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DocumentReview.id",
    )

    @property
    def display_title(self) -> str:
        return self.title_ar or self.title

    @property
    def display_description(self) -> Optional[str]:
        return self.description_ar or self.description

    @property
    def file_extension(self) -> Optional[str]:
        ext = os.path.splitext(self.file_name or "")[1]
        return ext[1:].lower() if ext else None

    @property
    def human_file_size(self) -> str:
        return human_file_size(self.file_size or 0)

    def __repr__(self) -> str:
        return f"<Document id={self.id!r} case_id={self.case_id!r} version={self.version!r}>"


class DocumentReview(Base):
    __tablename__ = "document_review"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    document_id: Mapped[int] = mapped_column(
        ForeignKey("document.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reviewed_by: Mapped[int | None] = mapped_column(
        ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    review_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    document: Mapped["Document"] = relationship("Document", back_populates="reviews")
