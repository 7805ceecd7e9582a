"""
SQLAlchemy-based User repository.

Implements the UserRepo Protocol:
- get_by_id, get_by_email, get_in_firm
- list_users (role / is_active / name-or-email search, paginated)
- create, update
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import or_, select

from lawdesk.models.user import User
from lawdesk.repos.base import SqlAlchemyRepo, like_pattern

__all__ = ["SqlAlchemyUserRepo"]


class SqlAlchemyUserRepo(SqlAlchemyRepo):
    """
    Concrete User repository using SQLAlchemy ORM.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.strip().lower())
        return self.session.execute(stmt).scalars().first()

    def get_in_firm(self, law_firm_id: int, user_id: int) -> Optional[User]:
        stmt = select(User).where(User.id == user_id, User.law_firm_id == law_firm_id)
        return self.session.execute(stmt).scalars().first()

    def list_users(
        self,
        law_firm_id: int,
        *,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[Sequence[User], int]:
        conditions: List[Any] = [User.law_firm_id == law_firm_id]
        if role:
            conditions.append(User.role == role)
        if is_active is not None:
            conditions.append(User.is_active.is_(bool(is_active)))
        if search and search.strip():
            pattern = like_pattern(search)
            conditions.append(
                or_(User.name.ilike(pattern, escape="\\"), User.email.ilike(pattern, escape="\\"))
            )
        return self._page(User, conditions, [User.created_at.desc(), User.id.desc()], offset, limit)

    def create(
        self, *, law_firm_id: int, email: str, name: str, password_hash: str, role: str
    ) -> User:
        if not isinstance(email, str) or not email.strip():
            raise ValueError("email must be a non-empty string")
        user = User(
            law_firm_id=law_firm_id,
            email=email.strip().lower(),
            name=name.strip(),
            password_hash=password_hash,
            role=role,
        )
        return self._save(user, "User creation failed due to uniqueness constraint")

    def update(self, user: User, changes: Mapping[str, Any]) -> User:
        return self._apply(user, changes, "User update failed due to uniqueness constraint")
