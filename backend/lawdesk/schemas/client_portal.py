"""
Pydantic models for the client portal.

Portal views are narrower than staff views: no internal values, notes or
review history.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from lawdesk.schemas.common import Email, ORMBase, PageMeta, RequestBase


class PortalLoginRequest(RequestBase):
    email: Email = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class PortalClientOut(ORMBase):
    id: int
    law_firm_id: int
    name: str
    name_ar: Optional[str] = None
    display_name: str
    email: str
    phone: str
    client_type: str
    status: str
    preferences: dict = Field(default_factory=dict)


class PortalLoginResponse(BaseModel):
    client: PortalClientOut
    token: str
    token_type: str = "bearer"


class PortalLawyer(ORMBase):
    id: int
    name: str
    email: str


class PortalCaseOut(ORMBase):
    id: int
    title: str
    description: str
    case_type: str
    status: str
    priority: str
    case_number: Optional[str] = None
    start_date: date
    expected_end_date: Optional[date] = None
    actual_end_date: Optional[date] = None
    assigned_lawyer: Optional[PortalLawyer] = None
    created_at: datetime
    updated_at: datetime


class PortalDocumentOut(ORMBase):
    id: int
    case_id: int
    title: str
    title_ar: Optional[str] = None
    display_title: str
    document_type: str
    status: str
    file_name: str
    file_size: int
    human_file_size: str
    version: int
    created_at: datetime


class PortalStatistics(BaseModel):
    total_cases: int = Field(..., ge=0)
    active_cases: int = Field(..., ge=0)
    closed_cases: int = Field(..., ge=0)
    total_documents: int = Field(..., ge=0)


class PortalDashboard(BaseModel):
    client: PortalClientOut
    statistics: PortalStatistics
    recent_cases: List[PortalCaseOut] = Field(default_factory=list)
    recent_documents: List[PortalDocumentOut] = Field(default_factory=list)


class PortalCaseListResponse(PageMeta):
    items: List[PortalCaseOut] = Field(default_factory=list)


class PortalDocumentListResponse(PageMeta):
    items: List[PortalDocumentOut] = Field(default_factory=list)
