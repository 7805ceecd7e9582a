import os
import sys

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from lawdesk.repos.notification_repo import SqlAlchemyNotificationRepo
from lawdesk.repos.user_repo import SqlAlchemyUserRepo
from tests.helpers import seed_firm


def _notify(repo, firm, recipient, **overrides):
    fields = {
        "law_firm_id": firm.id,
        "recipient_id": recipient.id,
        "title": "Heads up",
        "message": "Something happened",
        "type": "system_alert",
    }
    fields.update(overrides)
    return repo.create(fields)


def test_create_defaults_and_read_state(db_session):
    firm, admin = seed_firm(db_session)
    repo = SqlAlchemyNotificationRepo(db_session)

    n = _notify(repo, firm, admin)
    assert n.priority == "normal"
    assert n.data == {}
    assert n.is_read is False
    assert repo.count_unread(admin.id) == 1

    read = repo.mark_read(n)
    assert read.is_read is True
    first_read_at = read.read_at

    # Marking again keeps the original timestamp
    assert repo.mark_read(read).read_at == first_read_at
    assert repo.count_unread(admin.id) == 0


def test_list_filters_and_soft_delete(db_session):
    firm, admin = seed_firm(db_session)
    other = SqlAlchemyUserRepo(db_session).create(
        law_firm_id=firm.id, email="l@firm.test", name="L", password_hash="x", role="lawyer"
    )
    repo = SqlAlchemyNotificationRepo(db_session)

    a = _notify(repo, firm, admin, type="case_update", priority="high")
    b = _notify(repo, firm, admin, type="document_uploaded")
    _notify(repo, firm, other)

    items, total = repo.list_for_recipient(admin.id)
    assert total == 2
    assert [n.id for n in items] == [b.id, a.id]

    items, _ = repo.list_for_recipient(admin.id, type="case_update")
    assert [n.id for n in items] == [a.id]

    items, _ = repo.list_for_recipient(admin.id, priority="high")
    assert [n.id for n in items] == [a.id]

    repo.mark_read(a)
    items, _ = repo.list_for_recipient(admin.id, unread_only=True)
    assert [n.id for n in items] == [b.id]

    repo.soft_delete(b)
    _, total = repo.list_for_recipient(admin.id)
    assert total == 1
    assert repo.get_for_recipient(admin.id, b.id) is None
    # Not visible to another recipient either
    assert repo.get_for_recipient(other.id, a.id) is None


def test_mark_all_read_counts_only_unread(db_session):
    firm, admin = seed_firm(db_session)
    repo = SqlAlchemyNotificationRepo(db_session)
    first = _notify(repo, firm, admin)
    _notify(repo, firm, admin)
    _notify(repo, firm, admin)
    repo.mark_read(first)

    assert repo.mark_all_read(admin.id) == 2
    assert repo.count_unread(admin.id) == 0
    assert repo.mark_all_read(admin.id) == 0
