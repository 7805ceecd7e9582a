"""SQLAlchemy-based LawyerPreference repository."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from sqlalchemy import select

from lawdesk.models.lawyer_preference import LawyerPreference
from lawdesk.repos.base import SqlAlchemyRepo

__all__ = ["SqlAlchemyPreferenceRepo"]


class SqlAlchemyPreferenceRepo(SqlAlchemyRepo):
    def get_by_user(self, user_id: int) -> Optional[LawyerPreference]:
        stmt = select(LawyerPreference).where(LawyerPreference.user_id == user_id)
        return self.session.execute(stmt).scalars().first()

    def create(self, *, user_id: int, law_firm_id: int) -> LawyerPreference:
        preference = LawyerPreference(user_id=user_id, law_firm_id=law_firm_id)
        return self._save(preference, "Preferences already exist for this user")

    def update(self, preference: LawyerPreference, changes: Mapping[str, Any]) -> LawyerPreference:
        return self._apply(preference, changes, "Preference update failed")
