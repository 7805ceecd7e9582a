"""
Shared plumbing for the SQLAlchemy repositories.

- Session type check on construction.
- Commit helper translating IntegrityError into ValueError.
- Paginated select helper returning (items, total).
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Sequence, Tuple

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

__all__ = ["SqlAlchemyRepo", "like_pattern"]


def like_pattern(term: str) -> str:
    """Wrap a search term for a case-insensitive substring match."""
    escaped = term.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SqlAlchemyRepo:
    """
    Base class for concrete repositories. Expects a Session provided by the
    caller (e.g., FastAPI dependency).
    """

    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    def _commit(self, failure_message: str) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError(failure_message) from exc

    def _save(self, obj: Any, failure_message: str) -> Any:
        self.session.add(obj)
        self._commit(failure_message)
        self.session.refresh(obj)
        return obj

    def _apply(self, obj: Any, changes: Mapping[str, Any], failure_message: str) -> Any:
        for field, value in changes.items():
            if not hasattr(obj, field):
                raise ValueError(f"Unknown field: {field}")
            setattr(obj, field, value)
        self._commit(failure_message)
        self.session.refresh(obj)
        return obj

    def _page(
        self,
        model: Any,
        conditions: Iterable[ColumnElement[bool]],
        order_by: Sequence[Any],
        offset: int,
        limit: int,
    ) -> Tuple[List[Any], int]:
        conditions = list(conditions)
        count_stmt: Select = select(func.count(model.id)).where(*conditions)
        total = int(self.session.execute(count_stmt).scalar() or 0)

        stmt = (
            select(model)
            .where(*conditions)
            .order_by(*order_by)
            .offset(max(0, int(offset)))
            .limit(max(1, int(limit)))
        )
        items = list(self.session.execute(stmt).scalars().all())
        return items, total
