"""
Pydantic models for cases.

Date ordering (expected/actual end vs. start) is checked in the case service
because updates must be validated against the stored values.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from lawdesk.models.enums import CaseStatus, CaseType, Priority
from lawdesk.schemas.common import NoteOut, ORMBase, PageMeta, RequestBase, UserSummary


class CaseCreate(RequestBase):
    title: str = Field(..., min_length=5, max_length=200)
    description: str = Field(..., min_length=10, max_length=10000)
    case_type: CaseType
    status: CaseStatus = CaseStatus.NEW
    priority: Priority = Priority.MEDIUM
    client_id: int = Field(..., ge=1)
    assigned_lawyer_id: Optional[int] = Field(default=None, ge=1)
    case_number: Optional[str] = Field(default=None, min_length=1, max_length=64)
    start_date: Optional[date] = None
    expected_end_date: Optional[date] = None
    actual_end_date: Optional[date] = None
    success_probability: Optional[int] = Field(default=None, ge=0, le=100)
    estimated_value: Optional[float] = Field(default=None, ge=0)
    actual_value: Optional[float] = Field(default=None, ge=0)
    tags: List[str] = Field(default_factory=list)


class CaseUpdate(RequestBase):
    title: Optional[str] = Field(default=None, min_length=5, max_length=200)
    description: Optional[str] = Field(default=None, min_length=10, max_length=10000)
    case_type: Optional[CaseType] = None
    status: Optional[CaseStatus] = None
    priority: Optional[Priority] = None
    assigned_lawyer_id: Optional[int] = Field(default=None, ge=1)
    case_number: Optional[str] = Field(default=None, min_length=1, max_length=64)
    start_date: Optional[date] = None
    expected_end_date: Optional[date] = None
    actual_end_date: Optional[date] = None
    success_probability: Optional[int] = Field(default=None, ge=0, le=100)
    estimated_value: Optional[float] = Field(default=None, ge=0)
    actual_value: Optional[float] = Field(default=None, ge=0)
    tags: Optional[List[str]] = None


class CaseClientSummary(ORMBase):
    id: int
    name: str
    name_ar: Optional[str] = None
    email: str


class CaseOut(ORMBase):
    id: int
    law_firm_id: int
    client_id: int
    assigned_lawyer_id: int
    title: str
    description: str
    case_type: str
    status: str
    priority: str
    case_number: Optional[str] = None
    start_date: date
    expected_end_date: Optional[date] = None
    actual_end_date: Optional[date] = None
    success_probability: Optional[int] = None
    estimated_value: Optional[float] = None
    actual_value: Optional[float] = None
    tags: List[str] = Field(default_factory=list)
    duration_days: Optional[int] = None
    age_days: int = 0
    client: Optional[CaseClientSummary] = None
    assigned_lawyer: Optional[UserSummary] = None
    created_at: datetime
    updated_at: datetime


class CaseDetail(CaseOut):
    notes: List[NoteOut] = Field(default_factory=list)


class CaseListResponse(PageMeta):
    items: List[CaseOut] = Field(default_factory=list)
