"""
Pydantic models for clients.

Phone numbers follow the Saudi mobile/landline shape (``+966``/``0`` prefix is
optional); national ids are exactly ten digits.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from lawdesk.core.security import MIN_PASSWORD_LENGTH
from lawdesk.models.enums import ClientStatus, ClientType
from lawdesk.schemas.common import Email, NoteOut, ORMBase, PageMeta, RequestBase, UserSummary

PHONE_PATTERN = r"^(\+966|0)?[0-9]{9}$"
NATIONAL_ID_PATTERN = r"^[0-9]{10}$"


# -------------------------------
# Embedded documents
# -------------------------------

class ClientAddress(RequestBase):
    street: Optional[str] = Field(default=None, max_length=200)
    city: Optional[str] = Field(default=None, max_length=100)
    region: Optional[str] = Field(default=None, max_length=100)
    postal_code: Optional[str] = Field(default=None, max_length=20)
    country: str = Field(default="Saudi Arabia", max_length=100)


class ClientCompany(RequestBase):
    name: Optional[str] = Field(default=None, max_length=200)
    industry: Optional[str] = Field(default=None, max_length=100)
    size: Optional[str] = Field(default=None, max_length=50)
    website: Optional[str] = Field(default=None, max_length=255)


class EmergencyContact(RequestBase):
    name: Optional[str] = Field(default=None, max_length=100)
    relationship: Optional[str] = Field(default=None, max_length=50)
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)


class ClientPreferences(RequestBase):
    language: Literal["en", "ar"] = "en"
    communication_method: Literal["email", "phone", "whatsapp", "sms"] = "email"
    timezone: str = Field(default="Asia/Riyadh", max_length=64)


# -------------------------------
# Requests
# -------------------------------

class ClientCreate(RequestBase):
    name: str = Field(..., min_length=2, max_length=100)
    name_ar: Optional[str] = Field(default=None, max_length=100)
    email: Email = Field(..., max_length=255)
    phone: str = Field(..., pattern=PHONE_PATTERN)
    national_id: Optional[str] = Field(default=None, pattern=NATIONAL_ID_PATTERN)
    commercial_register: Optional[str] = Field(default=None, max_length=64)
    client_type: ClientType = ClientType.INDIVIDUAL
    status: ClientStatus = ClientStatus.ACTIVE
    address: Optional[ClientAddress] = None
    company: Optional[ClientCompany] = None
    emergency_contact: Optional[EmergencyContact] = None
    preferences: ClientPreferences = Field(default_factory=ClientPreferences)
    tags: List[str] = Field(default_factory=list)
    assigned_lawyer_id: Optional[int] = Field(default=None, ge=1)


class ClientUpdate(RequestBase):
    """Email is fixed after creation."""

    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    name_ar: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    national_id: Optional[str] = Field(default=None, pattern=NATIONAL_ID_PATTERN)
    commercial_register: Optional[str] = Field(default=None, max_length=64)
    client_type: Optional[ClientType] = None
    status: Optional[ClientStatus] = None
    address: Optional[ClientAddress] = None
    company: Optional[ClientCompany] = None
    emergency_contact: Optional[EmergencyContact] = None
    preferences: Optional[ClientPreferences] = None
    tags: Optional[List[str]] = None
    assigned_lawyer_id: Optional[int] = Field(default=None, ge=1)
    is_active: Optional[bool] = None


class PortalPasswordRequest(RequestBase):
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)


# -------------------------------
# Responses
# -------------------------------

class ClientOut(ORMBase):
    id: int
    law_firm_id: int
    name: str
    name_ar: Optional[str] = None
    display_name: str
    email: str
    phone: str
    national_id: Optional[str] = None
    commercial_register: Optional[str] = None
    client_type: str
    status: str
    address: Optional[dict] = None
    company: Optional[dict] = None
    emergency_contact: Optional[dict] = None
    preferences: dict = Field(default_factory=dict)
    tags: List[str] = Field(default_factory=list)
    assigned_lawyer_id: Optional[int] = None
    assigned_lawyer: Optional[UserSummary] = None
    has_portal_access: bool = False
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ClientDetail(ClientOut):
    case_count: int = 0
    notes: List[NoteOut] = Field(default_factory=list)


class ClientListResponse(PageMeta):
    items: List[ClientOut] = Field(default_factory=list)
