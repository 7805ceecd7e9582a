"""Pydantic models for law firm onboarding and profile management."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from lawdesk.core.security import MIN_PASSWORD_LENGTH
from lawdesk.models.enums import SubscriptionPlan
from lawdesk.schemas.auth import UserOut
from lawdesk.schemas.common import ORMBase, RequestBase, Email


class LawFirmCreate(RequestBase):
    name: str = Field(..., min_length=1, max_length=100)
    license_number: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=500)
    phone: str = Field(..., min_length=1, max_length=32)
    email: Email = Field(..., max_length=255)
    subscription_plan: SubscriptionPlan = Field(default=SubscriptionPlan.BASIC)


class FirmAdminCreate(RequestBase):
    name: str = Field(..., min_length=1, max_length=50)
    email: Email = Field(..., max_length=255)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)


class FirmRegisterRequest(RequestBase):
    firm: LawFirmCreate
    admin: FirmAdminCreate


class LawFirmUpdate(RequestBase):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    address: Optional[str] = Field(default=None, min_length=1, max_length=500)
    phone: Optional[str] = Field(default=None, min_length=1, max_length=32)
    subscription_plan: Optional[SubscriptionPlan] = None


class LawFirmOut(ORMBase):
    id: int
    name: str
    license_number: str
    address: str
    phone: str
    email: str
    subscription_plan: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class LawFirmDetail(LawFirmOut):
    user_count: int = 0


class FirmRegisterResponse(BaseModel):
    law_firm: LawFirmOut
    user: UserOut
    token: str
    token_type: str = "bearer"
