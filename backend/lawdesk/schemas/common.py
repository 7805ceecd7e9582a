"""
Shared schema building blocks.

- ORMBase: response models read straight from ORM objects.
- RequestBase: request models store enum members as their string values.
- PageMeta: pagination envelope fields shared by every list response.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Annotated, Any, Dict, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

__all__ = [
    "ORMBase",
    "RequestBase",
    "PageMeta",
    "MessageResponse",
    "UserSummary",
    "NoteCreate",
    "NoteOut",
    "normalize_email",
    "Email",
    "page_meta",
]

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: Optional[str]) -> Optional[str]:
    """Trim and lowercase an email; raises ValueError when malformed."""
    if value is None:
        return None
    cleaned = value.strip().lower()
    if not _EMAIL_RE.match(cleaned):
        raise ValueError("Please enter a valid email")
    return cleaned


def page_meta(total: int, page: int, limit: int) -> Dict[str, Any]:
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if limit else 0,
    }


# Trimmed, lowercased email address
Email = Annotated[str, AfterValidator(normalize_email)]


class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class RequestBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True, str_strip_whitespace=True)


class PageMeta(BaseModel):
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)


class MessageResponse(BaseModel):
    message: str


class UserSummary(ORMBase):
    id: int
    name: str
    email: str
    role: str


class NoteCreate(RequestBase):
    content: str = Field(..., min_length=1, max_length=5000)


class NoteOut(ORMBase):
    id: int
    content: str
    added_by: Optional[int] = None
    added_at: datetime
