"""
Pydantic models for staff authentication and user management.

Password and reset-token columns are never part of any output model.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from lawdesk.core.security import MIN_PASSWORD_LENGTH
from lawdesk.models.enums import UserRole
from lawdesk.schemas.common import ORMBase, PageMeta, RequestBase, Email


# -------------------------------
# Requests
# -------------------------------

class RegisterRequest(RequestBase):
    email: Email = Field(..., max_length=255)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)
    name: str = Field(..., min_length=1, max_length=50)
    role: UserRole = Field(default=UserRole.LAWYER)
    law_firm_id: int = Field(..., ge=1)


class LoginRequest(RequestBase):
    email: Email = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class ChangePasswordRequest(RequestBase):
    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)


class UserCreate(RequestBase):
    email: Email = Field(..., max_length=255)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)
    name: str = Field(..., min_length=1, max_length=50)
    role: UserRole = Field(default=UserRole.LAWYER)


class UserUpdate(RequestBase):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


# -------------------------------
# Responses
# -------------------------------

class UserOut(ORMBase):
    id: int
    law_firm_id: int
    email: str
    name: str
    role: str
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class UserListResponse(PageMeta):
    items: List[UserOut] = Field(default_factory=list)


class AuthResponse(BaseModel):
    user: UserOut
    token: str
    token_type: str = "bearer"
