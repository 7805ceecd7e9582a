"""
Pytest configuration for backend tests.

Provides an isolated SQLite database per test run using a temporary file
(rather than in-memory) to support multiple connections and sessions.

Environment is configured at import time, before any lawdesk module reads
settings, so the engine and cached settings point at the test locations.

Fixtures:
- db_engine (session scope): Creates the engine, builds tables, and tears down.
- db_session (function scope): Provides a clean Session per test, with FK enabled.
- storage (function scope): DocumentStorage writing under tmp_path.
- client (function scope): TestClient with storage overridden and auth rate limiting off.
- limited_client (function scope): TestClient with the real auth rate limiter.
- firm (function scope): An onboarded firm with its admin token.
"""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Ensure the 'backend' directory is on sys.path so we can import lawdesk modules when running tests from repo root
CURRENT_DIR = Path(__file__).parent
BACKEND_ROOT = (CURRENT_DIR / "..").resolve()
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

_TMP_ROOT = Path(tempfile.mkdtemp(prefix="lawdesk-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{(_TMP_ROOT / 'test.db').as_posix()}"
os.environ["UPLOAD_DIR"] = str(_TMP_ROOT / "uploads")
os.environ["JWT_SECRET"] = "test-secret"
os.environ.setdefault("SQLALCHEMY_ECHO", "0")

from tests.helpers import onboard_firm  # noqa: E402

ALLOWED_TEST_MIME_TYPES = ["application/pdf", "text/plain"]
TEST_MAX_UPLOAD_BYTES = 1024


@pytest.fixture(scope="session")
def db_engine() -> Generator:
    """
    Create tables on the temporary SQLite file for the entire test session.
    """
    from lawdesk.db.base import Base, import_all_models
    from lawdesk.db.session import engine

    import_all_models()
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator:
    """
    Provide a fresh Session for each test function.
    Truncates tables before each test for isolation.
    """
    from lawdesk.db.base import Base
    from lawdesk.db.session import SessionLocal

    session = SessionLocal()

    # Truncate all tables before running the test (clean slate)
    try:
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
    except Exception:
        session.rollback()
        raise

    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def storage(tmp_path):
    from lawdesk.services.document_storage import DocumentStorage

    return DocumentStorage(
        upload_dir=str(tmp_path / "uploads"),
        max_bytes=TEST_MAX_UPLOAD_BYTES,
        allowed_mime_types=ALLOWED_TEST_MIME_TYPES,
    )


def _build_client(storage, *, rate_limited: bool):
    from fastapi.testclient import TestClient

    from lawdesk.core.rate_limit import auth_rate_limit, limiter
    from lawdesk.main import app
    from lawdesk.services.document_storage import get_document_storage

    limiter.reset()
    app.dependency_overrides[get_document_storage] = lambda: storage
    if not rate_limited:
        app.dependency_overrides[auth_rate_limit] = lambda: None
    return app, TestClient(app)


@pytest.fixture
def client(db_session, storage) -> Generator:
    # Requests open their own sessions on the same database; db_session only truncates
    app, test_client = _build_client(storage, rate_limited=False)
    try:
        yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def limited_client(db_session, storage) -> Generator:
    app, test_client = _build_client(storage, rate_limited=True)
    try:
        yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def firm(client):
    """An onboarded firm: dict with law_firm, user, token and headers."""
    return onboard_firm(client)
