"""
SQLAlchemy-based LawFirm repository.

Firm onboarding writes the firm and its first admin in a single commit so a
duplicate admin email never leaves an orphan firm behind.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from lawdesk.models.law_firm import LawFirm
from lawdesk.models.user import User
from lawdesk.repos.base import SqlAlchemyRepo

__all__ = ["SqlAlchemyLawFirmRepo"]


class SqlAlchemyLawFirmRepo(SqlAlchemyRepo):
    """
    Concrete LawFirm repository using SQLAlchemy ORM.
    """

    def get_by_id(self, law_firm_id: int) -> Optional[LawFirm]:
        return self.session.get(LawFirm, law_firm_id)

    def get_by_email(self, email: str) -> Optional[LawFirm]:
        stmt = select(LawFirm).where(LawFirm.email == email.strip().lower())
        return self.session.execute(stmt).scalars().first()

    def get_by_license(self, license_number: str) -> Optional[LawFirm]:
        stmt = select(LawFirm).where(LawFirm.license_number == license_number.strip())
        return self.session.execute(stmt).scalars().first()

    def create_with_admin(
        self, *, firm_fields: Mapping[str, Any], admin_fields: Mapping[str, Any]
    ) -> Tuple[LawFirm, User]:
        firm = LawFirm(**firm_fields)
        self.session.add(firm)
        try:
            # Assigns firm.id for the admin row
            self.session.flush()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Law firm registration failed due to uniqueness constraint") from exc
        admin = User(law_firm_id=firm.id, **admin_fields)
        self.session.add(admin)
        self._commit("Law firm registration failed due to uniqueness constraint")
        self.session.refresh(firm)
        self.session.refresh(admin)
        return firm, admin

    def update(self, firm: LawFirm, changes: Mapping[str, Any]) -> LawFirm:
        return self._apply(firm, changes, "Law firm update failed due to uniqueness constraint")

    def count_users(self, law_firm_id: int) -> int:
        stmt = select(func.count(User.id)).where(User.law_firm_id == law_firm_id)
        return int(self.session.execute(stmt).scalar() or 0)
