"""
Court session service.

Business rules:
- A linked case must belong to the caller's firm; its assigned lawyer joins the
  participants when still active.
- Participants must be active staff of the firm. With none given, the caller
  attends.
- The scheduled end must fall after the scheduled start.
- Only scheduled or postponed sessions can be edited, started, postponed or
  cancelled. Only participants can start or complete a session.
- Session numbers read SES-<TYP>-<YEAR>-<seq>, counted per firm, type and year.
- Reminders (hearing_reminder) go to every participant once the session is
  within its reminder window; rescheduling re-arms the reminder.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from lawdesk.core.contracts import CaseRepo, CourtSessionRepo, UserRepo
from lawdesk.core.errors import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from lawdesk.core.logging import get_logger
from lawdesk.models.court_session import CourtSession, as_utc, utc_now
from lawdesk.models.enums import (
    PENDING_SESSION_STATUSES,
    STAFF_ROLES,
    NotificationPriority,
    NotificationType,
    SessionStatus,
    SessionType,
)
from lawdesk.models.user import User
from lawdesk.schemas.court_session import (
    MAX_REMINDER_MINUTES,
    CourtSessionCreate,
    CourtSessionUpdate,
    SessionCancel,
    SessionComplete,
    SessionPostpone,
)
from lawdesk.services.notification_service import NotificationService

__all__ = ["CourtSessionService", "check_session_times", "next_session_number", "session_number_prefix"]

log = get_logger(__name__)

_NOT_NULL_FIELDS = (
    "title",
    "session_type",
    "priority",
    "scheduled_start",
    "scheduled_end",
    "location_type",
    "reminder_minutes_before",
)

_NUMBER_ATTEMPTS = 3


def check_session_times(start: datetime, end: datetime) -> None:
    if as_utc(end) <= as_utc(start):
        raise ValidationFailedError(
            "Invalid session times",
            details={"errors": [{"field": "scheduled_end", "message": "Scheduled end time must be after start time"}]},
        )


def session_number_prefix(session_type: str, year: int) -> str:
    return f"SES-{session_type[:3].upper()}-{year}-"


def next_session_number(last: Optional[str], prefix: str) -> str:
    sequence = int(last[len(prefix):]) + 1 if last else 1
    return f"{prefix}{sequence:06d}"


class CourtSessionService:
    def __init__(
        self,
        session_repo: CourtSessionRepo,
        case_repo: CaseRepo,
        user_repo: UserRepo,
        notifications: NotificationService,
    ) -> None:
        self.session_repo = session_repo
        self.case_repo = case_repo
        self.user_repo = user_repo
        self.notifications = notifications

    # ---- lookups ----

    def get(self, actor: User, session_id: int) -> CourtSession:
        court_session = self.session_repo.get(actor.law_firm_id, session_id)
        if court_session is None:
            raise NotFoundError("Session not found")
        return court_session

    def list_sessions(
        self,
        actor: User,
        *,
        status: Optional[str] = None,
        session_type: Optional[str] = None,
        case_id: Optional[int] = None,
        mine: bool = False,
        upcoming: bool = False,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[Sequence[CourtSession], int]:
        starts_after = as_utc(date_from)
        if upcoming:
            now = utc_now()
            starts_after = max(starts_after, now) if starts_after else now
        return self.session_repo.list_sessions(
            actor.law_firm_id,
            status=status,
            session_type=session_type,
            case_id=case_id,
            participant_id=actor.id if mine else None,
            starts_after=starts_after,
            starts_before=as_utc(date_to),
            pending_only=upcoming,
            offset=offset,
            limit=limit,
        )

    # ---- scheduling ----

    def _resolve_participants(self, actor: User, user_ids: Iterable[int]) -> List[int]:
        resolved: List[int] = []
        invalid: List[int] = []
        for user_id in dict.fromkeys(user_ids):
            user = self.user_repo.get_in_firm(actor.law_firm_id, user_id)
            if user is None or not user.is_active or user.role not in STAFF_ROLES:
                invalid.append(user_id)
            else:
                resolved.append(user_id)
        if invalid:
            raise BadRequestError(
                "Participants must be active staff of this firm",
                details={"invalid_participant_ids": invalid},
            )
        return resolved

    def create(self, actor: User, payload: CourtSessionCreate) -> CourtSession:
        fields: Dict[str, Any] = payload.model_dump()
        requested = fields.pop("participant_ids") or [actor.id]

        case = None
        if fields.get("case_id") is not None:
            case = self.case_repo.get(actor.law_firm_id, fields["case_id"])
            if case is None:
                raise NotFoundError("Case not found")

        fields["scheduled_start"] = as_utc(fields["scheduled_start"])
        fields["scheduled_end"] = as_utc(fields["scheduled_end"])
        check_session_times(fields["scheduled_start"], fields["scheduled_end"])

        participant_ids = self._resolve_participants(actor, requested)
        if case is not None and case.assigned_lawyer.is_active and case.assigned_lawyer_id not in participant_ids:
            participant_ids.append(case.assigned_lawyer_id)

        fields["law_firm_id"] = actor.law_firm_id
        fields["created_by"] = actor.id
        prefix = session_number_prefix(fields["session_type"], utc_now().year)

        # Numbers are read then written; a concurrent insert can take ours
        for _attempt in range(_NUMBER_ATTEMPTS):
            last = self.session_repo.last_session_number(actor.law_firm_id, prefix)
            fields["session_number"] = next_session_number(last, prefix)
            try:
                court_session = self.session_repo.create(fields, participant_ids)
                break
            except ValueError:
                continue
        else:
            raise ConflictError("Could not allocate a session number, please retry")

        log.info(
            "session scheduled",
            extra={
                "session_id": court_session.id,
                "law_firm_id": court_session.law_firm_id,
                "case_id": court_session.case_id,
                "session_type": court_session.session_type,
            },
        )
        return court_session

    def _require_pending(self, court_session: CourtSession, action: str) -> None:
        if court_session.status not in PENDING_SESSION_STATUSES:
            raise BadRequestError(
                f"Session cannot be {action} from status {court_session.status}",
                details={"status": court_session.status},
            )

    def update(self, actor: User, session_id: int, payload: CourtSessionUpdate) -> CourtSession:
        court_session = self.get(actor, session_id)
        self._require_pending(court_session, "edited")

        changes: Dict[str, Any] = payload.model_dump(exclude_unset=True)
        for key in _NOT_NULL_FIELDS:
            if key in changes and changes[key] is None:
                del changes[key]
        requested = changes.pop("participant_ids", None)
        participant_ids = self._resolve_participants(actor, requested) if requested else None

        for key in ("scheduled_start", "scheduled_end"):
            if key in changes:
                changes[key] = as_utc(changes[key])
        check_session_times(
            changes.get("scheduled_start", court_session.scheduled_start),
            changes.get("scheduled_end", court_session.scheduled_end),
        )
        if "scheduled_start" in changes or "reminder_minutes_before" in changes:
            changes["reminder_sent_at"] = None

        return self.session_repo.update(court_session, changes, participant_ids)

    def postpone(self, actor: User, session_id: int, payload: SessionPostpone) -> CourtSession:
        court_session = self.get(actor, session_id)
        self._require_pending(court_session, "postponed")
        start, end = as_utc(payload.scheduled_start), as_utc(payload.scheduled_end)
        check_session_times(start, end)

        court_session = self.session_repo.update(
            court_session,
            {
                "status": SessionStatus.POSTPONED.value,
                "scheduled_start": start,
                "scheduled_end": end,
                "postponement_reason": payload.reason,
                "reminder_sent_at": None,
            },
        )
        self._notify_participants(
            court_session,
            sender_id=actor.id,
            title="Session postponed",
            message=f'"{court_session.title}" moved to {_format_time(start)}: {payload.reason}',
            event="postponed",
        )
        log.info("session postponed", extra={"session_id": court_session.id, "by": actor.id})
        return court_session

    def cancel(self, actor: User, session_id: int, payload: SessionCancel) -> CourtSession:
        court_session = self.get(actor, session_id)
        self._require_pending(court_session, "cancelled")
        court_session = self.session_repo.update(
            court_session,
            {"status": SessionStatus.CANCELLED.value, "cancellation_reason": payload.reason},
        )
        self._notify_participants(
            court_session,
            sender_id=actor.id,
            title="Session cancelled",
            message=f'"{court_session.title}" was cancelled: {payload.reason}',
            event="cancelled",
        )
        log.info("session cancelled", extra={"session_id": court_session.id, "by": actor.id})
        return court_session

    # ---- running a session ----

    def _require_participant(self, actor: User, court_session: CourtSession) -> None:
        if actor.id not in court_session.participant_ids:
            raise PermissionDeniedError(
                "Only session participants can start or complete a session",
                details={"session_id": court_session.id},
            )

    def start(self, actor: User, session_id: int) -> CourtSession:
        court_session = self.get(actor, session_id)
        self._require_participant(actor, court_session)
        self._require_pending(court_session, "started")
        return self.session_repo.update(
            court_session,
            {"status": SessionStatus.IN_PROGRESS.value, "actual_start": utc_now()},
        )

    def complete(self, actor: User, session_id: int, payload: SessionComplete) -> CourtSession:
        court_session = self.get(actor, session_id)
        self._require_participant(actor, court_session)
        if court_session.status != SessionStatus.IN_PROGRESS.value:
            raise BadRequestError(
                f"Session cannot be completed from status {court_session.status}",
                details={"status": court_session.status},
            )
        ended = utc_now()
        started = as_utc(court_session.actual_start) or ended
        changes: Dict[str, Any] = payload.model_dump()
        changes.update(
            status=SessionStatus.COMPLETED.value,
            actual_end=ended,
            duration_minutes=max(0, round((ended - started).total_seconds() / 60)),
        )
        court_session = self.session_repo.update(court_session, changes)
        log.info(
            "session completed",
            extra={"session_id": court_session.id, "duration_minutes": court_session.duration_minutes},
        )
        return court_session

    # ---- reminders ----

    def _notify_participants(
        self,
        court_session: CourtSession,
        *,
        sender_id: Optional[int],
        title: str,
        message: str,
        event: str,
        priority: str = NotificationPriority.HIGH.value,
    ) -> int:
        sent = 0
        for user_id in court_session.participant_ids:
            if user_id == sender_id:
                continue
            self.notifications.notify(
                law_firm_id=court_session.law_firm_id,
                recipient_id=user_id,
                sender_id=sender_id,
                title=title,
                message=message,
                type=NotificationType.HEARING_REMINDER.value,
                priority=priority,
                data={
                    "session_id": court_session.id,
                    "session_number": court_session.session_number,
                    "case_id": court_session.case_id,
                    "event": event,
                    "scheduled_start": as_utc(court_session.scheduled_start).isoformat(),
                },
            )
            sent += 1
        return sent

    def dispatch_due_reminders(
        self, *, law_firm_id: Optional[int] = None, now: Optional[datetime] = None
    ) -> Tuple[int, int]:
        """
        Send reminders for every session whose reminder window has opened.

        Returns (sessions reminded, notifications sent). Safe to call repeatedly;
        a session is reminded once per schedule.
        """
        now = as_utc(now) or utc_now()
        candidates = self.session_repo.starting_between(
            now, now + timedelta(minutes=MAX_REMINDER_MINUTES), law_firm_id=law_firm_id
        )
        sessions = notifications = 0
        for court_session in candidates:
            if not court_session.reminder_due(now):
                continue
            is_hearing = court_session.session_type == SessionType.COURT_HEARING.value
            notifications += self._notify_participants(
                court_session,
                sender_id=None,
                title="Upcoming court hearing" if is_hearing else "Upcoming session",
                message=f'"{court_session.title}" starts at {_format_time(court_session.scheduled_start)}',
                event="reminder",
                priority=(NotificationPriority.HIGH if is_hearing else NotificationPriority.NORMAL).value,
            )
            self.session_repo.update(court_session, {"reminder_sent_at": now})
            sessions += 1

        log.info(
            "session reminders dispatched",
            extra={"law_firm_id": law_firm_id, "sessions": sessions, "notifications": notifications},
        )
        return sessions, notifications


def _format_time(value: datetime) -> str:
    return as_utc(value).strftime("%Y-%m-%d %H:%M UTC")
