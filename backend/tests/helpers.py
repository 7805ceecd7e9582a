"""
Request helpers shared by the API tests.

Each helper drives the public API the way a frontend would and asserts the
happy-path status so failures surface at the step that broke.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

DEFAULT_PASSWORD = "secret123"

PDF_BYTES = b"%PDF-1.4\n% test document\n"


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def onboard_firm(client, *, suffix: str = "a") -> Dict[str, Any]:
    resp = client.post(
        "/api/v1/law-firms/register",
        json={
            "firm": {
                "name": f"Firm {suffix.upper()}",
                "license_number": f"LIC-{suffix}",
                "address": "King Fahd Road, Riyadh",
                "phone": "0501234567",
                "email": f"office-{suffix}@firm.test",
            },
            "admin": {
                "name": f"Admin {suffix.upper()}",
                "email": f"admin-{suffix}@firm.test",
                "password": DEFAULT_PASSWORD,
            },
        },
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    body["headers"] = auth_headers(body["token"])
    return body


def create_user(client, firm: Dict[str, Any], *, email: str, role: str = "lawyer", name: str = "Staff") -> Dict[str, Any]:
    resp = client.post(
        "/api/v1/users",
        json={"email": email, "password": DEFAULT_PASSWORD, "name": name, "role": role},
        headers=firm["headers"],
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def login(client, email: str, password: str = DEFAULT_PASSWORD) -> Dict[str, str]:
    resp = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return auth_headers(resp.json()["token"])


def create_client(client, headers: Dict[str, str], *, email: str = "client@example.com", **overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "name": "Saleh Al-Harbi",
        "email": email,
        "phone": "+966501234567",
        "client_type": "individual",
    }
    payload.update(overrides)
    resp = client.post("/api/v1/clients", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_case(client, headers: Dict[str, str], client_id: int, **overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "title": "Contract dispute",
        "description": "Supplier failed to deliver goods under the contract.",
        "case_type": "commercial",
        "client_id": client_id,
    }
    payload.update(overrides)
    resp = client.post("/api/v1/cases", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def upload_document(
    client,
    headers: Dict[str, str],
    case_id: int,
    *,
    title: str = "Supply contract",
    content: bytes = PDF_BYTES,
    content_type: str = "application/pdf",
    file_name: str = "contract.pdf",
    extra: Optional[Dict[str, Any]] = None,
):
    data: Dict[str, Any] = {"title": title, "document_type": "contract", "case_id": str(case_id)}
    data.update(extra or {})
    return client.post(
        "/api/v1/documents",
        data=data,
        files={"file": (file_name, content, content_type)},
        headers=headers,
    )


def seed_firm(session, *, suffix: str = "a", admin_role: str = "admin"):
    """Create a firm and its admin straight through the repository. Returns (firm, admin)."""
    from lawdesk.core.security import hash_password
    from lawdesk.repos.law_firm_repo import SqlAlchemyLawFirmRepo

    return SqlAlchemyLawFirmRepo(session).create_with_admin(
        firm_fields={
            "name": f"Firm {suffix.upper()}",
            "license_number": f"LIC-{suffix}",
            "address": "Olaya Street, Riyadh",
            "phone": "0112345678",
            "email": f"office-{suffix}@firm.test",
        },
        admin_fields={
            "email": f"admin-{suffix}@firm.test",
            "name": f"Admin {suffix.upper()}",
            "password_hash": hash_password(DEFAULT_PASSWORD),
            "role": admin_role,
        },
    )


def seed_client(session, firm, *, email: str = "client@example.com", **overrides: Any):
    from lawdesk.repos.client_repo import SqlAlchemyClientRepo

    fields: Dict[str, Any] = {
        "law_firm_id": firm.id,
        "name": "Saleh Al-Harbi",
        "email": email,
        "phone": "0501234567",
    }
    fields.update(overrides)
    return SqlAlchemyClientRepo(session).create(fields)


def seed_case(session, firm, client, lawyer, **overrides: Any):
    from lawdesk.repos.case_repo import SqlAlchemyCaseRepo

    fields: Dict[str, Any] = {
        "law_firm_id": firm.id,
        "client_id": client.id,
        "assigned_lawyer_id": lawyer.id,
        "title": "Contract dispute",
        "description": "Supplier failed to deliver goods.",
        "case_type": "commercial",
    }
    fields.update(overrides)
    return SqlAlchemyCaseRepo(session).create(fields)


def seed_document(session, case, uploader, **overrides: Any):
    from lawdesk.repos.document_repo import SqlAlchemyDocumentRepo

    fields: Dict[str, Any] = {
        "law_firm_id": case.law_firm_id,
        "case_id": case.id,
        "client_id": case.client_id,
        "uploaded_by": uploader.id,
        "title": "Supply contract",
        "document_type": "contract",
        "file_path": f"/tmp/{overrides.get('title', 'doc')}.pdf",
        "file_name": "contract.pdf",
        "file_size": 10,
        "mime_type": "application/pdf",
        "checksum": "0" * 64,
    }
    fields.update(overrides)
    return SqlAlchemyDocumentRepo(session).create(fields)


def seed_session(session, firm, creator, *, participants=(), case=None, **overrides: Any):
    from datetime import datetime, timedelta, timezone

    from lawdesk.repos.court_session_repo import SqlAlchemyCourtSessionRepo

    start = overrides.pop("scheduled_start", datetime.now(timezone.utc) + timedelta(days=2))
    fields: Dict[str, Any] = {
        "law_firm_id": firm.id,
        "case_id": case.id if case is not None else None,
        "created_by": creator.id,
        "session_number": f"SES-COU-2026-{overrides.pop('sequence', 1):06d}",
        "title": "First hearing",
        "session_type": "court_hearing",
        "scheduled_start": start,
        "scheduled_end": start + timedelta(hours=1),
    }
    fields.update(overrides)
    return SqlAlchemyCourtSessionRepo(session).create(fields, list(participants) or [creator.id])
