import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from lawdesk.models.court_session import CourtSession, CourtSessionParticipant, as_utc
from lawdesk.repos.case_repo import SqlAlchemyCaseRepo
from lawdesk.repos.court_session_repo import SqlAlchemyCourtSessionRepo
from lawdesk.repos.user_repo import SqlAlchemyUserRepo
from tests.helpers import seed_case, seed_client, seed_firm, seed_session


def _lawyer(db_session, firm, email="lawyer@firm.test"):
    return SqlAlchemyUserRepo(db_session).create(
        law_firm_id=firm.id, email=email, name="Lawyer", password_hash="x", role="lawyer"
    )


def test_create_applies_defaults_and_participants(db_session):
    firm, admin = seed_firm(db_session)
    lawyer = _lawyer(db_session, firm)
    court_session = seed_session(db_session, firm, admin, participants=[lawyer.id, admin.id])

    assert court_session.status == "scheduled"
    assert court_session.priority == "medium"
    assert court_session.location_type == "physical"
    assert court_session.reminder_minutes_before == 1440
    assert court_session.reminder_sent_at is None
    assert court_session.next_steps == []
    assert court_session.participant_ids == sorted([lawyer.id, admin.id])
    assert court_session.is_upcoming is True
    assert court_session.is_overdue is False


def test_session_number_unique_per_firm(db_session):
    firm, admin = seed_firm(db_session)
    other_firm, other_admin = seed_firm(db_session, suffix="b")
    seed_session(db_session, firm, admin, sequence=1)
    # Same number in another firm is fine
    seed_session(db_session, other_firm, other_admin, sequence=1)

    with pytest.raises(ValueError):
        seed_session(db_session, firm, admin, sequence=1)


def test_last_session_number_by_prefix(db_session):
    firm, admin = seed_firm(db_session)
    repo = SqlAlchemyCourtSessionRepo(db_session)
    assert repo.last_session_number(firm.id, "SES-COU-2026-") is None

    seed_session(db_session, firm, admin, sequence=2)
    seed_session(db_session, firm, admin, sequence=11)
    seed_session(db_session, firm, admin, session_number="SES-MED-2026-000040", session_type="mediation")

    assert repo.last_session_number(firm.id, "SES-COU-2026-") == "SES-COU-2026-000011"
    assert repo.last_session_number(firm.id, "SES-MED-2026-") == "SES-MED-2026-000040"


def test_list_sessions_filters_and_order(db_session):
    firm, admin = seed_firm(db_session)
    other_firm, other_admin = seed_firm(db_session, suffix="b")
    lawyer = _lawyer(db_session, firm)
    client = seed_client(db_session, firm)
    case = seed_case(db_session, firm, client, admin)
    now = datetime.now(timezone.utc)

    past = seed_session(db_session, firm, admin, sequence=1, scheduled_start=now - timedelta(days=3), status="completed")
    soon = seed_session(db_session, firm, admin, sequence=2, case=case, participants=[lawyer.id])
    later = seed_session(
        db_session, firm, admin, sequence=3, scheduled_start=now + timedelta(days=9), session_type="mediation"
    )
    seed_session(db_session, other_firm, other_admin, sequence=1)
    repo = SqlAlchemyCourtSessionRepo(db_session)

    items, total = repo.list_sessions(firm.id)
    assert total == 3
    # Latest start first
    assert [s.id for s in items] == [later.id, soon.id, past.id]

    items, _ = repo.list_sessions(firm.id, participant_id=lawyer.id)
    assert [s.id for s in items] == [soon.id]

    items, _ = repo.list_sessions(firm.id, case_id=case.id)
    assert [s.id for s in items] == [soon.id]

    items, _ = repo.list_sessions(firm.id, session_type="mediation")
    assert [s.id for s in items] == [later.id]

    items, _ = repo.list_sessions(firm.id, status="completed")
    assert [s.id for s in items] == [past.id]

    items, _ = repo.list_sessions(firm.id, starts_after=now, pending_only=True)
    assert {s.id for s in items} == {soon.id, later.id}

    items, _ = repo.list_sessions(firm.id, starts_after=now, starts_before=now + timedelta(days=5))
    assert [s.id for s in items] == [soon.id]

    items, total = repo.list_sessions(firm.id, offset=2, limit=2)
    assert total == 3
    assert [s.id for s in items] == [past.id]


def test_starting_between_skips_reminded_and_closed(db_session):
    firm, admin = seed_firm(db_session)
    other_firm, other_admin = seed_firm(db_session, suffix="b")
    now = datetime.now(timezone.utc)
    start = now + timedelta(hours=2)

    due = seed_session(db_session, firm, admin, sequence=1, scheduled_start=start)
    seed_session(db_session, firm, admin, sequence=2, scheduled_start=start, reminder_sent_at=now)
    seed_session(db_session, firm, admin, sequence=3, scheduled_start=start, status="cancelled")
    seed_session(db_session, firm, admin, sequence=4, scheduled_start=now + timedelta(days=30))
    postponed = seed_session(db_session, firm, admin, sequence=5, scheduled_start=start, status="postponed")
    foreign = seed_session(db_session, other_firm, other_admin, sequence=1, scheduled_start=start)
    repo = SqlAlchemyCourtSessionRepo(db_session)

    found = repo.starting_between(now, now + timedelta(days=7))
    assert {s.id for s in found} == {due.id, postponed.id, foreign.id}

    found = repo.starting_between(now, now + timedelta(days=7), law_firm_id=firm.id)
    assert {s.id for s in found} == {due.id, postponed.id}


def test_update_replaces_participants(db_session):
    firm, admin = seed_firm(db_session)
    lawyer = _lawyer(db_session, firm)
    second = _lawyer(db_session, firm, email="second@firm.test")
    court_session = seed_session(db_session, firm, admin, participants=[admin.id, lawyer.id])
    repo = SqlAlchemyCourtSessionRepo(db_session)

    updated = repo.update(court_session, {"venue": "Riyadh General Court"}, [lawyer.id, second.id, lawyer.id])
    assert updated.venue == "Riyadh General Court"
    assert updated.participant_ids == sorted([lawyer.id, second.id])

    # Field-only updates leave participants alone
    updated = repo.update(updated, {"room": "3B"})
    assert updated.participant_ids == sorted([lawyer.id, second.id])
    rows = db_session.query(CourtSessionParticipant).filter_by(session_id=court_session.id).count()
    assert rows == 2


def test_times_round_trip_as_utc(db_session):
    firm, admin = seed_firm(db_session)
    start = datetime(2030, 5, 1, 9, 30, tzinfo=timezone.utc)
    court_session = seed_session(db_session, firm, admin, scheduled_start=start)

    stored = SqlAlchemyCourtSessionRepo(db_session).get(firm.id, court_session.id)
    assert as_utc(stored.scheduled_start) == start
    assert as_utc(stored.scheduled_end) == start + timedelta(hours=1)


def test_case_delete_removes_sessions(db_session):
    firm, admin = seed_firm(db_session)
    client = seed_client(db_session, firm)
    case = seed_case(db_session, firm, client, admin)
    court_session = seed_session(db_session, firm, admin, case=case)
    assert court_session.case.id == case.id

    SqlAlchemyCaseRepo(db_session).delete(case)
    db_session.expire_all()

    assert SqlAlchemyCourtSessionRepo(db_session).get(firm.id, court_session.id) is None
    assert db_session.query(CourtSession).count() == 0
    assert db_session.query(CourtSessionParticipant).count() == 0
