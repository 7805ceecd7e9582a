"""
Pydantic models for court sessions (hearings and meetings).

End-after-start is checked in the session service so updates and postponements
are validated against the stored times.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from lawdesk.models.enums import Priority, SessionType
from lawdesk.schemas.common import ORMBase, PageMeta, RequestBase

LocationType = Literal["physical", "virtual", "hybrid"]

# One week; reminders further ahead than that are not useful
MAX_REMINDER_MINUTES = 7 * 24 * 60


class CourtSessionCreate(RequestBase):
    title: str = Field(..., min_length=3, max_length=200)
    title_ar: Optional[str] = Field(default=None, max_length=200)
    session_type: SessionType = SessionType.COURT_HEARING
    priority: Priority = Priority.MEDIUM
    case_id: Optional[int] = Field(default=None, ge=1)
    scheduled_start: datetime
    scheduled_end: datetime
    location_type: LocationType = "physical"
    venue: Optional[str] = Field(default=None, max_length=200)
    room: Optional[str] = Field(default=None, max_length=64)
    virtual_link: Optional[str] = Field(default=None, max_length=500)
    description: Optional[str] = Field(default=None, max_length=2000)
    agenda: Optional[str] = Field(default=None, max_length=5000)
    participant_ids: List[int] = Field(default_factory=list)
    reminder_minutes_before: int = Field(default=24 * 60, ge=1, le=MAX_REMINDER_MINUTES)


class CourtSessionUpdate(RequestBase):
    title: Optional[str] = Field(default=None, min_length=3, max_length=200)
    title_ar: Optional[str] = Field(default=None, max_length=200)
    session_type: Optional[SessionType] = None
    priority: Optional[Priority] = None
    scheduled_start: Optional[datetime] = None
    scheduled_end: Optional[datetime] = None
    location_type: Optional[LocationType] = None
    venue: Optional[str] = Field(default=None, max_length=200)
    room: Optional[str] = Field(default=None, max_length=64)
    virtual_link: Optional[str] = Field(default=None, max_length=500)
    description: Optional[str] = Field(default=None, max_length=2000)
    agenda: Optional[str] = Field(default=None, max_length=5000)
    participant_ids: Optional[List[int]] = Field(default=None, min_length=1)
    reminder_minutes_before: Optional[int] = Field(default=None, ge=1, le=MAX_REMINDER_MINUTES)


class SessionComplete(RequestBase):
    outcome_summary: Optional[str] = Field(default=None, max_length=5000)
    minutes: Optional[str] = Field(default=None, max_length=20000)
    next_steps: List[str] = Field(default_factory=list)


class SessionCancel(RequestBase):
    reason: str = Field(..., min_length=3, max_length=500)


class SessionPostpone(RequestBase):
    reason: str = Field(..., min_length=3, max_length=500)
    scheduled_start: datetime
    scheduled_end: datetime


class SessionCaseSummary(ORMBase):
    id: int
    title: str
    case_number: Optional[str] = None
    status: str


class CourtSessionOut(ORMBase):
    id: int
    law_firm_id: int
    case_id: Optional[int] = None
    created_by: Optional[int] = None
    session_number: str
    title: str
    title_ar: Optional[str] = None
    session_type: str
    status: str
    priority: str
    scheduled_start: datetime
    scheduled_end: datetime
    actual_start: Optional[datetime] = None
    actual_end: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    location_type: str
    venue: Optional[str] = None
    room: Optional[str] = None
    virtual_link: Optional[str] = None
    description: Optional[str] = None
    agenda: Optional[str] = None
    participant_ids: List[int] = Field(default_factory=list)
    reminder_minutes_before: int
    reminder_sent_at: Optional[datetime] = None
    outcome_summary: Optional[str] = None
    minutes: Optional[str] = None
    next_steps: List[str] = Field(default_factory=list)
    cancellation_reason: Optional[str] = None
    postponement_reason: Optional[str] = None
    is_upcoming: bool = False
    is_overdue: bool = False
    case: Optional[SessionCaseSummary] = None
    created_at: datetime
    updated_at: datetime


class CourtSessionListResponse(PageMeta):
    items: List[CourtSessionOut] = Field(default_factory=list)


class ReminderDispatchResult(BaseModel):
    sessions: int = Field(..., ge=0)
    notifications: int = Field(..., ge=0)
