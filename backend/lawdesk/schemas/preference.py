"""Pydantic models for lawyer preferences and the preference form template."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from lawdesk.schemas.common import ORMBase, RequestBase

Language = Literal["en", "ar", "both"]
ResponseStyle = Literal["formal", "conversational", "technical", "simplified"]
DetailLevel = Literal["brief", "standard", "comprehensive"]
UrgencyHandling = Literal["conservative", "balanced", "aggressive"]
CommunicationStyle = Literal["formal", "friendly", "educational"]
RiskTolerance = Literal["low", "medium", "high"]
FeedbackFrequency = Literal["always", "weekly", "monthly", "never"]

_HHMM = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"


class WorkingHours(RequestBase):
    start: str = Field(default="09:00", pattern=_HHMM)
    end: str = Field(default="17:00", pattern=_HHMM)
    timezone: str = Field(default="Asia/Riyadh", max_length=64)


class PreferenceUpdate(RequestBase):
    preferred_language: Optional[Language] = None
    response_style: Optional[ResponseStyle] = None
    detail_level: Optional[DetailLevel] = None
    include_arabic_terms: Optional[bool] = None
    include_citations: Optional[bool] = None
    include_examples: Optional[bool] = None
    specializations: Optional[List[str]] = None
    preferred_sources: Optional[List[str]] = None
    practice_areas: Optional[List[str]] = None
    urgency_handling: Optional[UrgencyHandling] = None
    client_communication_style: Optional[CommunicationStyle] = None
    risk_tolerance: Optional[RiskTolerance] = None
    preferred_case_types: Optional[List[str]] = None
    working_hours: Optional[WorkingHours] = None
    feedback_frequency: Optional[FeedbackFrequency] = None
    improvement_areas: Optional[List[str]] = None
    success_metrics: Optional[List[str]] = None
    ai_suggestion_notifications: Optional[bool] = None
    learning_updates: Optional[bool] = None
    personalized_tips: Optional[bool] = None


class PreferenceOut(ORMBase):
    id: int
    user_id: int
    law_firm_id: int
    preferred_language: str
    response_style: str
    detail_level: str
    include_arabic_terms: bool
    include_citations: bool
    include_examples: bool
    specializations: List[str] = Field(default_factory=list)
    preferred_sources: List[str] = Field(default_factory=list)
    practice_areas: List[str] = Field(default_factory=list)
    urgency_handling: str
    client_communication_style: str
    risk_tolerance: str
    preferred_case_types: List[str] = Field(default_factory=list)
    working_hours: Dict[str, Any] = Field(default_factory=dict)
    feedback_frequency: str
    improvement_areas: List[str] = Field(default_factory=list)
    success_metrics: List[str] = Field(default_factory=list)
    ai_suggestion_notifications: bool
    learning_updates: bool
    personalized_tips: bool
    created_at: datetime
    updated_at: datetime


class PreferenceField(BaseModel):
    options: List[str]
    default: str
    description: str


class PreferenceTemplate(BaseModel):
    fields: Dict[str, PreferenceField]
    defaults: Dict[str, Any]
    common_specializations: List[str]
    common_practice_areas: List[str]
