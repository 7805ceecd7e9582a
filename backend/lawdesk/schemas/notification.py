"""Pydantic models for in-app notifications."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from lawdesk.models.enums import NotificationPriority, NotificationType
from lawdesk.schemas.common import ORMBase, PageMeta, RequestBase


class NotificationCreate(RequestBase):
    recipient_id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=2000)
    type: NotificationType = NotificationType.SYSTEM_ALERT
    priority: NotificationPriority = NotificationPriority.NORMAL
    data: dict = Field(default_factory=dict)


class NotificationOut(ORMBase):
    id: int
    law_firm_id: int
    recipient_id: int
    sender_id: Optional[int] = None
    title: str
    message: str
    type: str
    priority: str
    data: dict = Field(default_factory=dict)
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: datetime


class NotificationListResponse(PageMeta):
    items: List[NotificationOut] = Field(default_factory=list)
    unread_count: int = Field(..., ge=0)


class MarkAllReadResponse(BaseModel):
    modified_count: int = Field(..., ge=0)
