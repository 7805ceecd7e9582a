import os
import sys

import pytest

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from lawdesk.repos.case_repo import SqlAlchemyCaseRepo
from lawdesk.repos.client_repo import SqlAlchemyClientRepo
from tests.helpers import seed_case, seed_client, seed_firm


def test_get_is_scoped_to_firm(db_session):
    firm_a, _ = seed_firm(db_session, suffix="a")
    firm_b, _ = seed_firm(db_session, suffix="b")
    client = seed_client(db_session, firm_a)
    repo = SqlAlchemyClientRepo(db_session)

    assert repo.get(firm_a.id, client.id).id == client.id
    assert repo.get(firm_b.id, client.id) is None
    assert repo.get_by_email(firm_a.id, "CLIENT@example.com").id == client.id
    assert repo.get_by_email(firm_b.id, "client@example.com") is None


def test_national_id_is_globally_unique(db_session):
    firm_a, _ = seed_firm(db_session, suffix="a")
    firm_b, _ = seed_firm(db_session, suffix="b")
    seed_client(db_session, firm_a, national_id="1234567890")

    with pytest.raises(ValueError):
        seed_client(db_session, firm_b, email="other@example.com", national_id="1234567890")


def test_list_clients_search_and_filters(db_session):
    firm, _ = seed_firm(db_session)
    seed_client(db_session, firm, email="a@example.com", name="Fahad", name_ar="فهد")
    seed_client(
        db_session,
        firm,
        email="b@example.com",
        name="Acme Trading",
        client_type="company",
        company={"name": "Acme Holdings", "industry": "Retail"},
    )
    seed_client(db_session, firm, email="c@example.com", name="Noura", status="archived")
    repo = SqlAlchemyClientRepo(db_session)

    _, total = repo.list_clients(firm.id)
    assert total == 3

    items, _ = repo.list_clients(firm.id, search="فهد")
    assert [c.email for c in items] == ["a@example.com"]

    items, _ = repo.list_clients(firm.id, search="holdings")
    assert [c.email for c in items] == ["b@example.com"]

    items, _ = repo.list_clients(firm.id, client_type="company")
    assert [c.email for c in items] == ["b@example.com"]

    items, _ = repo.list_clients(firm.id, status="archived")
    assert [c.email for c in items] == ["c@example.com"]


def test_find_for_portal_requires_password(db_session):
    firm_a, _ = seed_firm(db_session, suffix="a")
    firm_b, _ = seed_firm(db_session, suffix="b")
    without = seed_client(db_session, firm_a)
    with_a = seed_client(db_session, firm_b, portal_password_hash="hash")
    repo = SqlAlchemyClientRepo(db_session)

    found = repo.find_for_portal(" Client@Example.com ")
    assert [c.id for c in found] == [with_a.id]
    assert without.id not in [c.id for c in found]


def test_notes_and_delete_cascade(db_session):
    firm, admin = seed_firm(db_session)
    client = seed_client(db_session, firm)
    case = seed_case(db_session, firm, client, admin)
    repo = SqlAlchemyClientRepo(db_session)

    note = repo.add_note(client, content="Prefers morning calls", added_by=admin.id)
    assert note.added_by == admin.id
    assert note.added_at is not None
    assert [n.content for n in client.notes] == ["Prefers morning calls"]

    repo.delete(client)
    assert repo.get(firm.id, client.id) is None
    # Cases go with their client
    assert SqlAlchemyCaseRepo(db_session).get(firm.id, case.id) is None
