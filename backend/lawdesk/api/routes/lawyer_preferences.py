"""
Lawyer preference routes. Limited to admins and lawyers.

Endpoints:
- GET  /api/v1/lawyer-preferences           -> own preferences (created with defaults on first read)
- PUT  /api/v1/lawyer-preferences           -> partial update
- POST /api/v1/lawyer-preferences/reset     -> restore defaults
- GET  /api/v1/lawyer-preferences/template  -> options, defaults and descriptions for forms
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from lawdesk.core.deps import get_preference_service, require_roles
from lawdesk.models.enums import UserRole
from lawdesk.models.user import User
from lawdesk.schemas.preference import PreferenceOut, PreferenceTemplate, PreferenceUpdate
from lawdesk.services.preference_service import PreferenceService

router = APIRouter(prefix="/api/v1/lawyer-preferences", tags=["lawyer-preferences"])

lawyers_only = require_roles(UserRole.ADMIN.value, UserRole.LAWYER.value)


@router.get("", response_model=PreferenceOut)
def get_preferences(
    user: User = Depends(lawyers_only),
    service: PreferenceService = Depends(get_preference_service),
) -> PreferenceOut:
    return PreferenceOut.model_validate(service.get_or_create(user))


@router.put("", response_model=PreferenceOut)
def update_preferences(
    payload: PreferenceUpdate,
    user: User = Depends(lawyers_only),
    service: PreferenceService = Depends(get_preference_service),
) -> PreferenceOut:
    return PreferenceOut.model_validate(service.update(user, payload))


@router.post("/reset", response_model=PreferenceOut)
def reset_preferences(
    user: User = Depends(lawyers_only),
    service: PreferenceService = Depends(get_preference_service),
) -> PreferenceOut:
    return PreferenceOut.model_validate(service.reset(user))


@router.get("/template", response_model=PreferenceTemplate, dependencies=[Depends(lawyers_only)])
def preference_template() -> PreferenceTemplate:
    return PreferenceTemplate.model_validate(PreferenceService.template())
