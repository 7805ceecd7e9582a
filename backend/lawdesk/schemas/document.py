"""
Pydantic models for documents, versions and reviews.

Uploads arrive as multipart form fields; routes build a DocumentCreate from
them so the same constraints apply as for JSON bodies.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import AliasChoices, Field

from lawdesk.models.enums import DocumentStatus, DocumentType, ReviewOutcome
from lawdesk.schemas.common import ORMBase, PageMeta, RequestBase


class DocumentCreate(RequestBase):
    title: str = Field(..., min_length=3, max_length=200)
    title_ar: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    description_ar: Optional[str] = Field(default=None, max_length=1000)
    document_type: DocumentType
    case_id: int = Field(..., ge=1)
    tags: List[str] = Field(default_factory=list)
    is_template: bool = False
    template_category: Optional[str] = Field(default=None, max_length=100)
    expiry_date: Optional[date] = None


class DocumentVersionCreate(RequestBase):
    description: Optional[str] = Field(default=None, max_length=1000)


class DocumentUpdate(RequestBase):
    title: Optional[str] = Field(default=None, min_length=3, max_length=200)
    title_ar: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    description_ar: Optional[str] = Field(default=None, max_length=1000)
    document_type: Optional[DocumentType] = None
    status: Optional[DocumentStatus] = None
    tags: Optional[List[str]] = None
    is_template: Optional[bool] = None
    template_category: Optional[str] = Field(default=None, max_length=100)
    expiry_date: Optional[date] = None
    metadata: Optional[dict] = None


class ReviewRequest(RequestBase):
    status: ReviewOutcome
    comments: Optional[str] = Field(default=None, max_length=2000)


class ReviewOut(ORMBase):
    id: int
    document_id: int
    reviewed_by: Optional[int] = None
    status: str
    comments: Optional[str] = None
    review_date: datetime


class DocumentOut(ORMBase):
    id: int
    law_firm_id: int
    case_id: int
    client_id: int
    uploaded_by: Optional[int] = None
    title: str
    title_ar: Optional[str] = None
    display_title: str
    description: Optional[str] = None
    description_ar: Optional[str] = None
    document_type: str
    status: str
    file_name: str
    file_size: int
    human_file_size: str
    file_extension: Optional[str] = None
    mime_type: str
    checksum: str
    version: int
    parent_document_id: Optional[int] = None
    is_template: bool
    template_category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    # ORM attribute is doc_metadata; JSON key is metadata
    metadata: dict = Field(
        default_factory=dict, validation_alias=AliasChoices("doc_metadata", "metadata")
    )
    expiry_date: Optional[date] = None
    is_archived: bool
    archived_at: Optional[datetime] = None
    archived_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class DocumentDetail(DocumentOut):
    reviews: List[ReviewOut] = Field(default_factory=list)


class DocumentListResponse(PageMeta):
    items: List[DocumentOut] = Field(default_factory=list)


class DocumentVersionsResponse(ORMBase):
    root_id: int
    items: List[DocumentOut] = Field(default_factory=list)
    total: int = Field(..., ge=0)
