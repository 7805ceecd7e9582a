"""
SQLAlchemy-based Case repository.

Lists are ordered newest first; analytics read the whole firm through list_all.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import func, or_, select

from lawdesk.models.case import Case, CaseNote
from lawdesk.repos.base import SqlAlchemyRepo, like_pattern

__all__ = ["SqlAlchemyCaseRepo"]


class SqlAlchemyCaseRepo(SqlAlchemyRepo):
    """
    Concrete Case repository using SQLAlchemy ORM.
    """

    def get(self, law_firm_id: int, case_id: int) -> Optional[Case]:
        stmt = select(Case).where(Case.id == case_id, Case.law_firm_id == law_firm_id)
        return self.session.execute(stmt).scalars().first()

    def list_cases(
        self,
        law_firm_id: int,
        *,
        status: Optional[str] = None,
        case_type: Optional[str] = None,
        priority: Optional[str] = None,
        client_id: Optional[int] = None,
        assigned_lawyer_id: Optional[int] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[Sequence[Case], int]:
        conditions: List[Any] = [Case.law_firm_id == law_firm_id]
        if status:
            conditions.append(Case.status == status)
        if case_type:
            conditions.append(Case.case_type == case_type)
        if priority:
            conditions.append(Case.priority == priority)
        if client_id is not None:
            conditions.append(Case.client_id == client_id)
        if assigned_lawyer_id is not None:
            conditions.append(Case.assigned_lawyer_id == assigned_lawyer_id)
        if search and search.strip():
            pattern = like_pattern(search)
            conditions.append(
                or_(
                    Case.title.ilike(pattern, escape="\\"),
                    Case.description.ilike(pattern, escape="\\"),
                    Case.case_number.ilike(pattern, escape="\\"),
                )
            )
        return self._page(Case, conditions, [Case.created_at.desc(), Case.id.desc()], offset, limit)

    def list_all(self, law_firm_id: int) -> Sequence[Case]:
        stmt = select(Case).where(Case.law_firm_id == law_firm_id).order_by(Case.id.asc())
        return list(self.session.execute(stmt).scalars().all())

    def count_for_client(self, client_id: int, *, statuses: Optional[Sequence[str]] = None) -> int:
        stmt = select(func.count(Case.id)).where(Case.client_id == client_id)
        if statuses is not None:
            stmt = stmt.where(Case.status.in_(list(statuses)))
        return int(self.session.execute(stmt).scalar() or 0)

    def create(self, fields: Mapping[str, Any]) -> Case:
        case = Case(**fields)
        return self._save(case, "Case creation failed due to uniqueness constraint")

    def update(self, case: Case, changes: Mapping[str, Any]) -> Case:
        return self._apply(case, changes, "Case update failed due to uniqueness constraint")

    def delete(self, case: Case) -> None:
        self.session.delete(case)
        self.session.commit()

    def add_note(self, case: Case, *, content: str, added_by: Optional[int]) -> CaseNote:
        note = CaseNote(case_id=case.id, content=content, added_by=added_by)
        self.session.add(note)
        self.session.commit()
        self.session.refresh(note)
        self.session.refresh(case)
        return note
