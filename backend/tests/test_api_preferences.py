import os
import sys

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from tests.helpers import create_user, login


def test_preferences_created_with_defaults(client, firm):
    resp = client.get("/api/v1/lawyer-preferences", headers=firm["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["user_id"] == firm["user"]["id"]
    assert body["preferred_language"] == "both"
    assert body["response_style"] == "formal"
    assert body["detail_level"] == "standard"
    assert body["working_hours"] == {"start": "09:00", "end": "17:00", "timezone": "Asia/Riyadh"}
    assert body["specializations"] == []

    # Second read returns the same row
    again = client.get("/api/v1/lawyer-preferences", headers=firm["headers"]).json()
    assert again["id"] == body["id"]


def test_update_and_reset(client, firm):
    headers = firm["headers"]
    resp = client.put(
        "/api/v1/lawyer-preferences",
        json={
            "response_style": "technical",
            "specializations": ["Commercial Law", "Labor Law"],
            "working_hours": {"start": "08:30", "end": "16:00"},
            "personalized_tips": False,
        },
        headers=headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["response_style"] == "technical"
    assert body["specializations"] == ["Commercial Law", "Labor Law"]
    assert body["working_hours"]["start"] == "08:30"
    assert body["personalized_tips"] is False
    # Untouched fields keep their values
    assert body["detail_level"] == "standard"

    bad = client.put("/api/v1/lawyer-preferences", json={"response_style": "poetic"}, headers=headers)
    assert bad.status_code == 422
    bad = client.put("/api/v1/lawyer-preferences", json={"working_hours": {"start": "25:00"}}, headers=headers)
    assert bad.status_code == 422

    reset = client.post("/api/v1/lawyer-preferences/reset", headers=headers)
    assert reset.status_code == 200
    assert reset.json()["response_style"] == "formal"
    assert reset.json()["specializations"] == []
    assert reset.json()["personalized_tips"] is True
    assert reset.json()["id"] == body["id"]


def test_partial_working_hours_update_merges(client, firm):
    headers = firm["headers"]
    resp = client.put("/api/v1/lawyer-preferences", json={"working_hours": {"start": "08:00"}}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["working_hours"] == {"start": "08:00", "end": "17:00", "timezone": "Asia/Riyadh"}

    resp = client.put("/api/v1/lawyer-preferences", json={"working_hours": {"end": "15:30"}}, headers=headers)
    assert resp.json()["working_hours"] == {"start": "08:00", "end": "15:30", "timezone": "Asia/Riyadh"}

    stored = client.get("/api/v1/lawyer-preferences", headers=headers).json()
    assert stored["working_hours"]["timezone"] == "Asia/Riyadh"


def test_template(client, firm):
    resp = client.get("/api/v1/lawyer-preferences/template", headers=firm["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["fields"]["detail_level"]["options"] == ["brief", "standard", "comprehensive"]
    assert body["defaults"]["preferred_language"] == "both"
    assert "Commercial Law" in body["common_specializations"]
    assert "Arbitration" in body["common_practice_areas"]


def test_preferences_are_per_user_and_role_limited(client, firm):
    create_user(client, firm, email="lawyer@firm.test")
    lawyer_headers = login(client, "lawyer@firm.test")
    client.put("/api/v1/lawyer-preferences", json={"risk_tolerance": "high"}, headers=lawyer_headers)

    admin_prefs = client.get("/api/v1/lawyer-preferences", headers=firm["headers"]).json()
    assert admin_prefs["risk_tolerance"] == "medium"

    create_user(client, firm, email="clerk@firm.test", role="clerk")
    clerk_headers = login(client, "clerk@firm.test")
    assert client.get("/api/v1/lawyer-preferences", headers=clerk_headers).status_code == 403
    assert client.get("/api/v1/lawyer-preferences/template", headers=clerk_headers).status_code == 403
