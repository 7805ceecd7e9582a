"""
Staff authentication service.

Depends only on:
- UserRepo / LawFirmRepo Protocols
- Core security utilities (password hashing, token signing)

Behavior:
    register(payload) -> (user, token)
    - Firm must exist and be active
    - Public sign-up may pick any staff role except admin
    login(email, password) -> (user, token)
    - Unknown email and wrong password are indistinguishable
    - Deactivated accounts are rejected; last_login is stamped on success
    change_password(user, current, new)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Tuple

from lawdesk.core.contracts import LawFirmRepo, UserRepo
from lawdesk.core.errors import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)
from lawdesk.core.logging import get_logger
from lawdesk.core.security import (
    TOKEN_TYPE_USER,
    create_access_token,
    hash_password,
    verify_password,
)
from lawdesk.models.enums import STAFF_ROLES, UserRole
from lawdesk.models.user import User
from lawdesk.schemas.auth import RegisterRequest

__all__ = ["AuthService", "issue_user_token"]

log = get_logger(__name__)


def issue_user_token(user: User) -> str:
    """Sign a staff bearer token carrying role and firm."""
    return create_access_token(
        subject_id=user.id,
        email=user.email,
        law_firm_id=user.law_firm_id,
        token_type=TOKEN_TYPE_USER,
        role=user.role,
    )


class AuthService:
    """
    Registration, login and password changes for staff users.
    """

    def __init__(self, user_repo: UserRepo, firm_repo: LawFirmRepo) -> None:
        self.user_repo = user_repo
        self.firm_repo = firm_repo

    def register(self, payload: RegisterRequest) -> Tuple[User, str]:
        firm = self.firm_repo.get_by_id(payload.law_firm_id)
        if firm is None or not firm.is_active:
            raise NotFoundError("Law firm not found or inactive")

        role = payload.role
        if role not in STAFF_ROLES or role == UserRole.ADMIN.value:
            raise PermissionDeniedError(
                "This role cannot be self-assigned",
                details={"role": role},
            )

        if self.user_repo.get_by_email(payload.email) is not None:
            raise ConflictError("User already exists with this email")

        try:
            user = self.user_repo.create(
                law_firm_id=firm.id,
                email=payload.email,
                name=payload.name,
                password_hash=hash_password(payload.password),
                role=role,
            )
        except ValueError as exc:
            # Lost a race against a concurrent sign-up with the same email
            raise ConflictError("User already exists with this email") from exc

        log.info(
            "user registered",
            extra={"user_id": user.id, "law_firm_id": user.law_firm_id, "role": user.role},
        )
        return user, issue_user_token(user)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        user = self.user_repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            log.info("login failed", extra={"email": email})
            raise AuthenticationError("Invalid credentials")
        if not user.is_active:
            raise AuthenticationError("Account is deactivated")

        user = self.user_repo.update(user, {"last_login": datetime.now(timezone.utc)})
        log.info("user logged in", extra={"user_id": user.id, "law_firm_id": user.law_firm_id})
        return user, issue_user_token(user)

    def change_password(self, user: User, current_password: str, new_password: str) -> None:
        if not verify_password(current_password, user.password_hash):
            raise BadRequestError("Current password is incorrect")
        try:
            new_hash = hash_password(new_password)
        except ValueError as exc:
            raise BadRequestError(str(exc)) from exc
        self.user_repo.update(user, {"password_hash": new_hash})
        log.info("password changed", extra={"user_id": user.id, "law_firm_id": user.law_firm_id})
