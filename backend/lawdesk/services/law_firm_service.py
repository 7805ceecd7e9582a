"""
Law firm onboarding and profile service.

Onboarding creates the firm together with its first admin; the admin is the
only way an admin account comes into existence besides /users.
"""

from __future__ import annotations

from typing import Tuple

from lawdesk.core.contracts import LawFirmRepo, UserRepo
from lawdesk.core.errors import ConflictError, NotFoundError
from lawdesk.core.logging import get_logger
from lawdesk.core.security import hash_password
from lawdesk.models.enums import UserRole
from lawdesk.models.law_firm import LawFirm
from lawdesk.models.user import User
from lawdesk.schemas.law_firm import FirmRegisterRequest, LawFirmUpdate
from lawdesk.services.auth_service import issue_user_token

__all__ = ["LawFirmService"]

log = get_logger(__name__)


class LawFirmService:
    def __init__(self, firm_repo: LawFirmRepo, user_repo: UserRepo) -> None:
        self.firm_repo = firm_repo
        self.user_repo = user_repo

    def onboard(self, payload: FirmRegisterRequest) -> Tuple[LawFirm, User, str]:
        """
        Register a firm and its first admin user.

        Raises:
            ConflictError: firm email or license number, or admin email, already used.
        """
        firm_in = payload.firm
        admin_in = payload.admin

        if self.firm_repo.get_by_email(firm_in.email) is not None:
            raise ConflictError("Law firm already exists with this email")
        if self.user_repo.get_by_email(admin_in.email) is not None:
            raise ConflictError("User already exists with this email")

        try:
            firm, admin = self.firm_repo.create_with_admin(
                firm_fields={
                    "name": firm_in.name,
                    "license_number": firm_in.license_number,
                    "address": firm_in.address,
                    "phone": firm_in.phone,
                    "email": firm_in.email,
                    "subscription_plan": firm_in.subscription_plan,
                },
                admin_fields={
                    "email": admin_in.email,
                    "name": admin_in.name,
                    "password_hash": hash_password(admin_in.password),
                    "role": UserRole.ADMIN.value,
                },
            )
        except ValueError as exc:
            raise ConflictError(
                "Law firm email, license number or admin email already registered"
            ) from exc

        log.info("law firm onboarded", extra={"law_firm_id": firm.id, "admin_id": admin.id})
        return firm, admin, issue_user_token(admin)

    def get(self, law_firm_id: int) -> LawFirm:
        firm = self.firm_repo.get_by_id(law_firm_id)
        if firm is None:
            raise NotFoundError("Law firm not found")
        return firm

    def user_count(self, law_firm_id: int) -> int:
        return self.firm_repo.count_users(law_firm_id)

    def update(self, law_firm_id: int, payload: LawFirmUpdate) -> LawFirm:
        firm = self.get(law_firm_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            return firm
        return self.firm_repo.update(firm, changes)
