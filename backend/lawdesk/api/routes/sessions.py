"""
Court session routes (firm-scoped).

Endpoints:
- GET  /api/v1/sessions                      -> list (paginated; status, type, case, mine, upcoming, date range)
- POST /api/v1/sessions                      -> schedule a session
- POST /api/v1/sessions/reminders/dispatch   -> send due reminders for the firm (admin)
- GET  /api/v1/sessions/{id}                 -> detail
- PUT  /api/v1/sessions/{id}                 -> edit a scheduled or postponed session
- PUT  /api/v1/sessions/{id}/start           -> participant starts the session
- PUT  /api/v1/sessions/{id}/complete        -> participant records the outcome
- PUT  /api/v1/sessions/{id}/postpone        -> move to new times and notify participants
- PUT  /api/v1/sessions/{id}/cancel          -> cancel and notify participants
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from lawdesk.core.deps import (
    Pagination,
    get_court_session_service,
    get_current_user,
    pagination,
    require_roles,
)
from lawdesk.models.enums import SessionStatus, SessionType, UserRole
from lawdesk.models.user import User
from lawdesk.schemas.common import page_meta
from lawdesk.schemas.court_session import (
    CourtSessionCreate,
    CourtSessionListResponse,
    CourtSessionOut,
    CourtSessionUpdate,
    ReminderDispatchResult,
    SessionCancel,
    SessionComplete,
    SessionPostpone,
)
from lawdesk.services.court_session_service import CourtSessionService

router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])


@router.get("", response_model=CourtSessionListResponse)
def list_sessions(
    status_filter: Optional[SessionStatus] = Query(None, alias="status"),
    session_type: Optional[SessionType] = Query(None, alias="type"),
    case_id: Optional[int] = Query(None, ge=1),
    mine: bool = Query(False, description="Only sessions the caller attends"),
    upcoming: bool = Query(False, description="Only pending sessions starting from now"),
    date_from: Optional[datetime] = Query(None),
    date_to: Optional[datetime] = Query(None),
    paging: Pagination = Depends(pagination),
    user: User = Depends(get_current_user),
    service: CourtSessionService = Depends(get_court_session_service),
) -> CourtSessionListResponse:
    items, total = service.list_sessions(
        user,
        status=status_filter.value if status_filter else None,
        session_type=session_type.value if session_type else None,
        case_id=case_id,
        mine=mine,
        upcoming=upcoming,
        date_from=date_from,
        date_to=date_to,
        offset=paging.offset,
        limit=paging.limit,
    )
    return CourtSessionListResponse(
        **page_meta(total, paging.page, paging.limit),
        items=[CourtSessionOut.model_validate(s) for s in items],
    )


@router.post("", response_model=CourtSessionOut, status_code=status.HTTP_201_CREATED)
def create_session(
    payload: CourtSessionCreate,
    user: User = Depends(get_current_user),
    service: CourtSessionService = Depends(get_court_session_service),
) -> CourtSessionOut:
    return CourtSessionOut.model_validate(service.create(user, payload))


@router.post("/reminders/dispatch", response_model=ReminderDispatchResult)
def dispatch_reminders(
    user: User = Depends(require_roles(UserRole.ADMIN.value)),
    service: CourtSessionService = Depends(get_court_session_service),
) -> ReminderDispatchResult:
    sessions, notifications = service.dispatch_due_reminders(law_firm_id=user.law_firm_id)
    return ReminderDispatchResult(sessions=sessions, notifications=notifications)


@router.get("/{session_id}", response_model=CourtSessionOut)
def get_session(
    session_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: CourtSessionService = Depends(get_court_session_service),
) -> CourtSessionOut:
    return CourtSessionOut.model_validate(service.get(user, session_id))


@router.put("/{session_id}", response_model=CourtSessionOut)
def update_session(
    payload: CourtSessionUpdate,
    session_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: CourtSessionService = Depends(get_court_session_service),
) -> CourtSessionOut:
    return CourtSessionOut.model_validate(service.update(user, session_id, payload))


@router.put("/{session_id}/start", response_model=CourtSessionOut)
def start_session(
    session_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: CourtSessionService = Depends(get_court_session_service),
) -> CourtSessionOut:
    return CourtSessionOut.model_validate(service.start(user, session_id))


@router.put("/{session_id}/complete", response_model=CourtSessionOut)
def complete_session(
    payload: SessionComplete,
    session_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: CourtSessionService = Depends(get_court_session_service),
) -> CourtSessionOut:
    return CourtSessionOut.model_validate(service.complete(user, session_id, payload))


@router.put("/{session_id}/postpone", response_model=CourtSessionOut)
def postpone_session(
    payload: SessionPostpone,
    session_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: CourtSessionService = Depends(get_court_session_service),
) -> CourtSessionOut:
    return CourtSessionOut.model_validate(service.postpone(user, session_id, payload))


@router.put("/{session_id}/cancel", response_model=CourtSessionOut)
def cancel_session(
    payload: SessionCancel,
    session_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    service: CourtSessionService = Depends(get_court_session_service),
) -> CourtSessionOut:
    return CourtSessionOut.model_validate(service.cancel(user, session_id, payload))
