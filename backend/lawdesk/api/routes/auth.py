"""
Staff authentication routes.

Endpoints:
- POST /api/v1/auth/register         -> sign up into an existing firm (rate limited)
- POST /api/v1/auth/login            -> exchange credentials for a bearer token (rate limited)
- POST /api/v1/auth/logout           -> stateless; logs the event
- GET  /api/v1/auth/me               -> current user
- POST /api/v1/auth/change-password  -> verify current password and set a new one
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from lawdesk.core.deps import get_auth_service, get_current_user
from lawdesk.core.logging import get_logger
from lawdesk.core.rate_limit import auth_rate_limit
from lawdesk.models.user import User
from lawdesk.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    UserOut,
)
from lawdesk.schemas.common import MessageResponse
from lawdesk.services.auth_service import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])

log = get_logger(__name__)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(auth_rate_limit)],
)
def register(
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    user, token = service.register(payload)
    return AuthResponse(user=UserOut.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse, dependencies=[Depends(auth_rate_limit)])
def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    user, token = service.login(payload.email, payload.password)
    return AuthResponse(user=UserOut.model_validate(user), token=token)


@router.post("/logout", response_model=MessageResponse)
def logout(user: User = Depends(get_current_user)) -> MessageResponse:
    # Tokens are stateless; the client discards its copy
    log.info("user logged out", extra={"user_id": user.id, "law_firm_id": user.law_firm_id})
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)) -> UserOut:
    return UserOut.model_validate(user)


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    payload: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    service.change_password(user, payload.current_password, payload.new_password)
    return MessageResponse(message="Password updated successfully")
