import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from lawdesk.core.errors import (  # noqa: E402
    BadRequestError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from lawdesk.models.court_session import CourtSession  # noqa: E402
from lawdesk.schemas.court_session import (  # noqa: E402
    CourtSessionCreate,
    CourtSessionUpdate,
    SessionComplete,
    SessionPostpone,
)
from lawdesk.services.court_session_service import (  # noqa: E402
    CourtSessionService,
    check_session_times,
    next_session_number,
    session_number_prefix,
)
from lawdesk.services.notification_service import NotificationService  # noqa: E402
from tests.fakes import (  # noqa: E402
    FakeCaseRepo,
    FakeCourtSessionRepo,
    FakeNotificationRepo,
    FakeUserRepo,
)

NOW = datetime(2030, 3, 10, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def setup():
    users = FakeUserRepo()
    admin = users.create(law_firm_id=1, email="admin@firm.test", name="Admin", password_hash="x", role="admin")
    lawyer = users.create(law_firm_id=1, email="lawyer@firm.test", name="Lawyer", password_hash="x", role="lawyer")
    outsider = users.create(law_firm_id=2, email="other@firm.test", name="Other", password_hash="x", role="lawyer")
    notifications = FakeNotificationRepo()
    cases = FakeCaseRepo()
    service = CourtSessionService(
        session_repo=FakeCourtSessionRepo(),
        case_repo=cases,
        user_repo=users,
        notifications=NotificationService(notifications, users),
    )
    return service, users, cases, notifications, admin, lawyer, outsider


def _payload(start=None, **overrides):
    start = start or datetime.now(timezone.utc) + timedelta(days=1)
    data = {"title": "Preliminary hearing", "scheduled_start": start, "scheduled_end": start + timedelta(hours=2)}
    data.update(overrides)
    return CourtSessionCreate(**data)


def test_session_number_helpers():
    prefix = session_number_prefix("court_hearing", 2030)
    assert prefix == "SES-COU-2030-"
    assert next_session_number(None, prefix) == "SES-COU-2030-000001"
    assert next_session_number("SES-COU-2030-000041", prefix) == "SES-COU-2030-000042"
    assert session_number_prefix("mediation", 2031) == "SES-MED-2031-"


def test_check_session_times():
    start = datetime(2030, 1, 1, 9, 0, tzinfo=timezone.utc)
    check_session_times(start, start + timedelta(minutes=1))
    # Naive values are read as UTC
    check_session_times(start.replace(tzinfo=None), start + timedelta(minutes=1))

    with pytest.raises(ValidationFailedError) as exc_info:
        check_session_times(start, start)
    assert exc_info.value.details["errors"][0]["field"] == "scheduled_end"


def test_reminder_window():
    court_session = CourtSession(
        status="scheduled",
        scheduled_start=NOW + timedelta(minutes=90),
        reminder_minutes_before=60,
        reminder_sent_at=None,
    )
    assert court_session.reminder_due(NOW) is False
    assert court_session.reminder_due(NOW + timedelta(minutes=30)) is True
    # Already started
    assert court_session.reminder_due(NOW + timedelta(minutes=91)) is False

    court_session.reminder_sent_at = NOW
    assert court_session.reminder_due(NOW + timedelta(minutes=30)) is False

    court_session.reminder_sent_at = None
    court_session.status = "cancelled"
    assert court_session.reminder_due(NOW + timedelta(minutes=30)) is False


def test_create_numbers_and_default_participant(setup):
    service, _users, _cases, _notes, admin, lawyer, _outsider = setup
    first = service.create(admin, _payload())
    second = service.create(admin, _payload(participant_ids=[lawyer.id]))
    mediation = service.create(admin, _payload(session_type="mediation"))

    year = datetime.now(timezone.utc).year
    assert first.session_number == f"SES-COU-{year}-000001"
    assert second.session_number == f"SES-COU-{year}-000002"
    assert mediation.session_number == f"SES-MED-{year}-000001"
    assert first.participant_ids == [admin.id]
    assert second.participant_ids == [lawyer.id]
    assert first.status == "scheduled"
    assert first.created_by == admin.id


def test_create_adds_case_lawyer(setup):
    service, _users, cases, _notes, admin, lawyer, _outsider = setup
    case = cases.seed(1, lawyer)
    court_session = service.create(admin, _payload(case_id=case.id))
    assert sorted(court_session.participant_ids) == sorted([admin.id, lawyer.id])

    with pytest.raises(NotFoundError):
        service.create(admin, _payload(case_id=999))


def test_create_rejects_invalid_participants(setup):
    service, users, _cases, _notes, admin, lawyer, outsider = setup
    users.update(lawyer, {"is_active": False})

    with pytest.raises(BadRequestError) as exc_info:
        service.create(admin, _payload(participant_ids=[lawyer.id, outsider.id, 404]))
    assert exc_info.value.details["invalid_participant_ids"] == [lawyer.id, outsider.id, 404]


def test_update_validates_against_stored_times(setup):
    service, _users, _cases, _notes, admin, _lawyer, _outsider = setup
    court_session = service.create(admin, _payload())

    with pytest.raises(ValidationFailedError):
        service.update(admin, court_session.id, CourtSessionUpdate(scheduled_end=court_session.scheduled_start))

    updated = service.update(admin, court_session.id, CourtSessionUpdate(venue="Board of Grievances", title=None))
    assert updated.venue == "Board of Grievances"
    assert updated.title == "Preliminary hearing"


def test_lifecycle_rules(setup):
    service, _users, _cases, _notes, admin, lawyer, _outsider = setup
    court_session = service.create(admin, _payload(participant_ids=[lawyer.id]))

    with pytest.raises(PermissionDeniedError):
        service.start(admin, court_session.id)
    with pytest.raises(BadRequestError):
        service.complete(lawyer, court_session.id, SessionComplete())

    started = service.start(lawyer, court_session.id)
    assert started.status == "in_progress"
    assert started.actual_start is not None
    with pytest.raises(BadRequestError):
        service.update(lawyer, court_session.id, CourtSessionUpdate(venue="Elsewhere"))

    done = service.complete(lawyer, court_session.id, SessionComplete(outcome_summary="Adjourned", next_steps=["File memo"]))
    assert done.status == "completed"
    assert done.duration_minutes == 0
    assert done.next_steps == ["File memo"]
    with pytest.raises(BadRequestError):
        service.start(lawyer, court_session.id)


def test_dispatch_sends_once_per_schedule(setup):
    service, _users, _cases, notes, admin, lawyer, _outsider = setup
    court_session = service.create(
        admin,
        _payload(start=NOW + timedelta(minutes=45), participant_ids=[admin.id, lawyer.id], reminder_minutes_before=60),
    )
    service.create(admin, _payload(start=NOW + timedelta(days=3), reminder_minutes_before=60))

    assert service.dispatch_due_reminders(now=NOW) == (1, 2)
    items, total = notes.list_for_recipient(lawyer.id)
    assert total == 1
    assert items[0].type == "hearing_reminder"
    assert items[0].priority == "high"
    assert items[0].sender_id is None
    assert items[0].data["event"] == "reminder"
    assert items[0].data["session_id"] == court_session.id
    assert court_session.reminder_sent_at == NOW

    assert service.dispatch_due_reminders(now=NOW) == (0, 0)

    # Rescheduling re-arms the reminder and tells the other participants
    new_start = NOW + timedelta(minutes=50)
    service.postpone(
        admin,
        court_session.id,
        SessionPostpone(reason="Judge unavailable", scheduled_start=new_start, scheduled_end=new_start + timedelta(hours=1)),
    )
    items, total = notes.list_for_recipient(lawyer.id)
    assert total == 2
    assert items[0].data["event"] == "postponed"
    assert notes.count_unread(admin.id) == 1

    assert service.dispatch_due_reminders(now=NOW, law_firm_id=1) == (1, 2)
    assert service.dispatch_due_reminders(now=NOW, law_firm_id=2) == (0, 0)
