"""
Law firm routes.

Endpoints:
- POST /api/v1/law-firms/register -> onboard a firm with its first admin (public, rate limited)
- GET  /api/v1/law-firms/me       -> caller's firm with user_count
- PUT  /api/v1/law-firms/me       -> update the caller's firm (admin only)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from lawdesk.core.deps import get_current_user, get_law_firm_service, require_roles
from lawdesk.core.rate_limit import auth_rate_limit
from lawdesk.models.enums import UserRole
from lawdesk.models.user import User
from lawdesk.schemas.auth import UserOut
from lawdesk.schemas.law_firm import (
    FirmRegisterRequest,
    FirmRegisterResponse,
    LawFirmDetail,
    LawFirmOut,
    LawFirmUpdate,
)
from lawdesk.services.law_firm_service import LawFirmService

router = APIRouter(prefix="/api/v1/law-firms", tags=["law-firms"])


@router.post(
    "/register",
    response_model=FirmRegisterResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(auth_rate_limit)],
)
def register_firm(
    payload: FirmRegisterRequest,
    service: LawFirmService = Depends(get_law_firm_service),
) -> FirmRegisterResponse:
    firm, admin, token = service.onboard(payload)
    return FirmRegisterResponse(
        law_firm=LawFirmOut.model_validate(firm),
        user=UserOut.model_validate(admin),
        token=token,
    )


@router.get("/me", response_model=LawFirmDetail)
def get_my_firm(
    user: User = Depends(get_current_user),
    service: LawFirmService = Depends(get_law_firm_service),
) -> LawFirmDetail:
    firm = service.get(user.law_firm_id)
    detail = LawFirmDetail.model_validate(firm)
    return detail.model_copy(update={"user_count": service.user_count(firm.id)})


@router.put("/me", response_model=LawFirmOut)
def update_my_firm(
    payload: LawFirmUpdate,
    user: User = Depends(require_roles(UserRole.ADMIN.value)),
    service: LawFirmService = Depends(get_law_firm_service),
) -> LawFirmOut:
    return LawFirmOut.model_validate(service.update(user.law_firm_id, payload))
