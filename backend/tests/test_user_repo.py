import os
import sys

import pytest

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from lawdesk.repos.user_repo import SqlAlchemyUserRepo
from tests.helpers import seed_firm


def test_create_normalizes_email_and_enforces_uniqueness(db_session):
    firm, _ = seed_firm(db_session)
    repo = SqlAlchemyUserRepo(db_session)

    user = repo.create(law_firm_id=firm.id, email=" Lina@Firm.TEST ", name=" Lina ", password_hash="x", role="lawyer")
    assert user.email == "lina@firm.test"
    assert user.name == "Lina"
    assert repo.get_by_email("LINA@firm.test").id == user.id

    # Emails are unique across firms
    with pytest.raises(ValueError):
        repo.create(law_firm_id=firm.id, email="lina@firm.test", name="Dup", password_hash="x", role="clerk")


def test_get_in_firm_scopes_by_tenant(db_session):
    firm_a, admin_a = seed_firm(db_session, suffix="a")
    firm_b, _ = seed_firm(db_session, suffix="b")
    repo = SqlAlchemyUserRepo(db_session)

    assert repo.get_in_firm(firm_a.id, admin_a.id).id == admin_a.id
    assert repo.get_in_firm(firm_b.id, admin_a.id) is None


def test_list_users_filters_and_paginates(db_session):
    firm, _ = seed_firm(db_session)
    repo = SqlAlchemyUserRepo(db_session)
    for i in range(3):
        repo.create(law_firm_id=firm.id, email=f"lawyer{i}@firm.test", name=f"Lawyer {i}", password_hash="x", role="lawyer")
    clerk = repo.create(law_firm_id=firm.id, email="clerk@firm.test", name="Clerk", password_hash="x", role="clerk")
    repo.update(clerk, {"is_active": False})

    items, total = repo.list_users(firm.id)
    assert total == 5

    items, total = repo.list_users(firm.id, role="lawyer", limit=2)
    assert total == 3
    assert len(items) == 2

    items, total = repo.list_users(firm.id, is_active=False)
    assert [u.email for u in items] == ["clerk@firm.test"]

    items, total = repo.list_users(firm.id, search="LAWYER 1")
    assert total == 1 and items[0].email == "lawyer1@firm.test"


def test_search_treats_wildcards_literally(db_session):
    firm, _ = seed_firm(db_session)
    repo = SqlAlchemyUserRepo(db_session)
    repo.create(law_firm_id=firm.id, email="plain@firm.test", name="Plain", password_hash="x", role="lawyer")

    _, total = repo.list_users(firm.id, search="%")
    assert total == 0
