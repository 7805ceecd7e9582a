"""
Firm-scoped staff user management.

Admins cannot lock themselves out: self-deactivation and self-demotion are
rejected.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from lawdesk.core.contracts import UserRepo
from lawdesk.core.errors import BadRequestError, ConflictError, NotFoundError
from lawdesk.core.logging import get_logger
from lawdesk.core.security import hash_password
from lawdesk.models.enums import STAFF_ROLES, UserRole
from lawdesk.models.user import User
from lawdesk.schemas.auth import UserCreate, UserUpdate

__all__ = ["UserService"]

log = get_logger(__name__)


class UserService:
    def __init__(self, user_repo: UserRepo) -> None:
        self.user_repo = user_repo

    def list_users(
        self,
        actor: User,
        *,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[Sequence[User], int]:
        return self.user_repo.list_users(
            actor.law_firm_id,
            role=role,
            is_active=is_active,
            search=search,
            offset=offset,
            limit=limit,
        )

    def get(self, actor: User, user_id: int) -> User:
        user = self.user_repo.get_in_firm(actor.law_firm_id, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def create(self, actor: User, payload: UserCreate) -> User:
        role = payload.role
        if role not in STAFF_ROLES:
            raise BadRequestError("Invalid staff role", details={"role": role})
        if self.user_repo.get_by_email(payload.email) is not None:
            raise ConflictError("User already exists with this email")
        try:
            user = self.user_repo.create(
                law_firm_id=actor.law_firm_id,
                email=payload.email,
                name=payload.name,
                password_hash=hash_password(payload.password),
                role=role,
            )
        except ValueError as exc:
            raise ConflictError("User already exists with this email") from exc
        log.info(
            "user created",
            extra={"user_id": user.id, "law_firm_id": user.law_firm_id, "created_by": actor.id},
        )
        return user

    def update(self, actor: User, user_id: int, payload: UserUpdate) -> User:
        user = self.get(actor, user_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)

        if "role" in changes and changes["role"] not in STAFF_ROLES:
            raise BadRequestError("Invalid staff role", details={"role": changes["role"]})
        if user.id == actor.id:
            if changes.get("is_active") is False:
                raise BadRequestError("You cannot deactivate your own account")
            if "role" in changes and changes["role"] != UserRole.ADMIN.value:
                raise BadRequestError("You cannot change your own admin role")

        if not changes:
            return user
        return self.user_repo.update(user, changes)

    def deactivate(self, actor: User, user_id: int) -> User:
        user = self.get(actor, user_id)
        if user.id == actor.id:
            raise BadRequestError("You cannot deactivate your own account")
        user = self.user_repo.update(user, {"is_active": False})
        log.info(
            "user deactivated",
            extra={"user_id": user.id, "law_firm_id": user.law_firm_id, "actor_id": actor.id},
        )
        return user
