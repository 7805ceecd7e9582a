"""
SQLAlchemy-based CourtSession repository.

Lists are ordered by scheduled start, latest first. Participants live in the
court_session_participant table so "my sessions" filters stay in SQL.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import select

from lawdesk.models.court_session import CourtSession, CourtSessionParticipant
from lawdesk.models.enums import PENDING_SESSION_STATUSES
from lawdesk.repos.base import SqlAlchemyRepo

__all__ = ["SqlAlchemyCourtSessionRepo"]


class SqlAlchemyCourtSessionRepo(SqlAlchemyRepo):
    def get(self, law_firm_id: int, session_id: int) -> Optional[CourtSession]:
        stmt = select(CourtSession).where(
            CourtSession.id == session_id, CourtSession.law_firm_id == law_firm_id
        )
        return self.session.execute(stmt).scalars().first()

    def list_sessions(
        self,
        law_firm_id: int,
        *,
        status: Optional[str] = None,
        session_type: Optional[str] = None,
        case_id: Optional[int] = None,
        participant_id: Optional[int] = None,
        starts_after: Optional[datetime] = None,
        starts_before: Optional[datetime] = None,
        pending_only: bool = False,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[Sequence[CourtSession], int]:
        conditions: List[Any] = [CourtSession.law_firm_id == law_firm_id]
        if status:
            conditions.append(CourtSession.status == status)
        if pending_only:
            conditions.append(CourtSession.status.in_(sorted(PENDING_SESSION_STATUSES)))
        if session_type:
            conditions.append(CourtSession.session_type == session_type)
        if case_id is not None:
            conditions.append(CourtSession.case_id == case_id)
        if participant_id is not None:
            attending = select(CourtSessionParticipant.session_id).where(
                CourtSessionParticipant.user_id == participant_id
            )
            conditions.append(CourtSession.id.in_(attending))
        if starts_after is not None:
            conditions.append(CourtSession.scheduled_start >= starts_after)
        if starts_before is not None:
            conditions.append(CourtSession.scheduled_start <= starts_before)
        return self._page(
            CourtSession,
            conditions,
            [CourtSession.scheduled_start.desc(), CourtSession.id.desc()],
            offset,
            limit,
        )

    def last_session_number(self, law_firm_id: int, prefix: str) -> Optional[str]:
        stmt = (
            select(CourtSession.session_number)
            .where(
                CourtSession.law_firm_id == law_firm_id,
                CourtSession.session_number.startswith(prefix, autoescape=True),
            )
            .order_by(CourtSession.session_number.desc())
            .limit(1)
        )
        return self.session.execute(stmt).scalar()

    def starting_between(
        self, start: datetime, end: datetime, *, law_firm_id: Optional[int] = None
    ) -> Sequence[CourtSession]:
        stmt = select(CourtSession).where(
            CourtSession.status.in_(sorted(PENDING_SESSION_STATUSES)),
            CourtSession.reminder_sent_at.is_(None),
            CourtSession.scheduled_start >= start,
            CourtSession.scheduled_start <= end,
        )
        if law_firm_id is not None:
            stmt = stmt.where(CourtSession.law_firm_id == law_firm_id)
        stmt = stmt.order_by(CourtSession.scheduled_start.asc(), CourtSession.id.asc())
        return list(self.session.execute(stmt).unique().scalars().all())

    def create(self, fields: Mapping[str, Any], participant_ids: Sequence[int]) -> CourtSession:
        court_session = CourtSession(**fields)
        court_session.participants = [CourtSessionParticipant(user_id=uid) for uid in participant_ids]
        return self._save(court_session, "Session creation failed due to uniqueness constraint")

    def update(
        self,
        court_session: CourtSession,
        changes: Mapping[str, Any],
        participant_ids: Optional[Sequence[int]] = None,
    ) -> CourtSession:
        if participant_ids is not None:
            wanted = list(dict.fromkeys(participant_ids))
            # Keep existing rows so unchanged participants are not deleted and re-inserted
            court_session.participants = [p for p in court_session.participants if p.user_id in wanted]
            present = {p.user_id for p in court_session.participants}
            court_session.participants.extend(
                CourtSessionParticipant(user_id=uid) for uid in wanted if uid not in present
            )
        return self._apply(court_session, changes, "Session update failed due to uniqueness constraint")
