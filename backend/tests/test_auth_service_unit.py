import os
import sys

import pytest

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from lawdesk.core.errors import (  # noqa: E402
    AuthenticationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)
from lawdesk.core.security import TOKEN_TYPE_USER, decode_access_token, hash_password  # noqa: E402
from lawdesk.schemas.auth import RegisterRequest  # noqa: E402
from lawdesk.services.auth_service import AuthService  # noqa: E402
from tests.fakes import FakeLawFirmRepo, FakeUserRepo  # noqa: E402


@pytest.fixture
def repos():
    users = FakeUserRepo()
    firms = FakeLawFirmRepo(users)
    return users, firms


def _register(service, firm_id, **overrides):
    data = {"email": "lawyer@firm.test", "password": "secret123", "name": "Lawyer", "law_firm_id": firm_id}
    data.update(overrides)
    return service.register(RegisterRequest(**data))


def test_register_issues_user_token(repos):
    users, firms = repos
    firm = firms.seed()
    service = AuthService(users, firms)

    user, token = _register(service, firm.id)

    assert user.role == "lawyer"
    assert user.password_hash != "secret123"
    payload = decode_access_token(token, expected_type=TOKEN_TYPE_USER)
    assert payload["sub"] == user.id
    assert payload["law_firm_id"] == firm.id
    assert payload["role"] == "lawyer"


def test_register_rules(repos):
    users, firms = repos
    firm = firms.seed()
    inactive = firms.seed(email="closed@firm.test", is_active=False)
    service = AuthService(users, firms)

    with pytest.raises(NotFoundError):
        _register(service, inactive.id)
    with pytest.raises(NotFoundError):
        _register(service, 999)
    with pytest.raises(PermissionDeniedError):
        _register(service, firm.id, role="admin")

    _register(service, firm.id)
    with pytest.raises(ConflictError):
        _register(service, firm.id, email="LAWYER@firm.test")


def test_login_stamps_last_login(repos):
    users, firms = repos
    firm = firms.seed()
    seeded = users.create(
        law_firm_id=firm.id, email="a@firm.test", name="A", password_hash=hash_password("secret123"), role="admin"
    )
    service = AuthService(users, firms)

    user, token = service.login("a@firm.test", "secret123")
    assert user.id == seeded.id
    assert user.last_login is not None
    assert token


def test_login_failures_do_not_reveal_which_part_was_wrong(repos):
    users, firms = repos
    firm = firms.seed()
    users.create(law_firm_id=firm.id, email="a@firm.test", name="A", password_hash=hash_password("secret123"), role="admin")
    service = AuthService(users, firms)

    with pytest.raises(AuthenticationError) as unknown:
        service.login("nobody@firm.test", "secret123")
    with pytest.raises(AuthenticationError) as wrong:
        service.login("a@firm.test", "wrong-pass")
    assert unknown.value.message == wrong.value.message == "Invalid credentials"


def test_login_rejects_deactivated_accounts(repos):
    users, firms = repos
    firm = firms.seed()
    user = users.create(law_firm_id=firm.id, email="a@firm.test", name="A", password_hash=hash_password("secret123"), role="lawyer")
    user.is_active = False
    service = AuthService(users, firms)

    with pytest.raises(AuthenticationError) as exc:
        service.login("a@firm.test", "secret123")
    assert exc.value.message == "Account is deactivated"
    assert user.last_login is None


def test_change_password(repos):
    users, firms = repos
    firm = firms.seed()
    user = users.create(law_firm_id=firm.id, email="a@firm.test", name="A", password_hash=hash_password("secret123"), role="lawyer")
    service = AuthService(users, firms)

    with pytest.raises(BadRequestError):
        service.change_password(user, "nope", "newsecret1")

    service.change_password(user, "secret123", "newsecret1")
    service.login("a@firm.test", "newsecret1")
