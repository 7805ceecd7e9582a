import os
import sys

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from tests.helpers import create_user, login, onboard_firm


def test_admin_creates_and_lists_users(client, firm):
    create_user(client, firm, email="lawyer@firm.test", name="Noura Lawyer")
    create_user(client, firm, email="clerk@firm.test", role="clerk", name="Fahad Clerk")

    resp = client.get("/api/v1/users", headers=firm["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 3
    assert body["page"] == 1
    assert body["total_pages"] == 1
    for item in body["items"]:
        assert "password_hash" not in item
        assert "password" not in item

    resp = client.get("/api/v1/users", params={"role": "clerk"}, headers=firm["headers"])
    assert [u["email"] for u in resp.json()["items"]] == ["clerk@firm.test"]

    resp = client.get("/api/v1/users", params={"search": "noura"}, headers=firm["headers"])
    assert [u["email"] for u in resp.json()["items"]] == ["lawyer@firm.test"]

    resp = client.get("/api/v1/users", params={"limit": 2, "page": 2}, headers=firm["headers"])
    assert resp.json()["total_pages"] == 2
    assert len(resp.json()["items"]) == 1


def test_create_user_rules(client, firm):
    resp = client.post(
        "/api/v1/users",
        json={"email": "x@firm.test", "password": "secret123", "name": "X", "role": "client"},
        headers=firm["headers"],
    )
    assert resp.status_code == 400

    create_user(client, firm, email="lawyer@firm.test")
    resp = client.post(
        "/api/v1/users",
        json={"email": "lawyer@firm.test", "password": "secret123", "name": "Dup"},
        headers=firm["headers"],
    )
    assert resp.status_code == 409

    lawyer_headers = login(client, "lawyer@firm.test")
    resp = client.post(
        "/api/v1/users",
        json={"email": "y@firm.test", "password": "secret123", "name": "Y"},
        headers=lawyer_headers,
    )
    assert resp.status_code == 403
    assert resp.json()["error"]["details"]["required_roles"] == ["admin"]


def test_update_user(client, firm):
    lawyer = create_user(client, firm, email="lawyer@firm.test")
    resp = client.put(
        f"/api/v1/users/{lawyer['id']}",
        json={"name": "Senior Lawyer", "role": "paralegal"},
        headers=firm["headers"],
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "Senior Lawyer"
    assert resp.json()["role"] == "paralegal"


def test_admin_cannot_lock_themselves_out(client, firm):
    admin_id = firm["user"]["id"]
    resp = client.put(f"/api/v1/users/{admin_id}", json={"role": "lawyer"}, headers=firm["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "You cannot change your own admin role"

    resp = client.put(f"/api/v1/users/{admin_id}", json={"is_active": False}, headers=firm["headers"])
    assert resp.status_code == 400

    resp = client.delete(f"/api/v1/users/{admin_id}", headers=firm["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "You cannot deactivate your own account"


def test_deactivate_user(client, firm):
    lawyer = create_user(client, firm, email="lawyer@firm.test")
    resp = client.delete(f"/api/v1/users/{lawyer['id']}", headers=firm["headers"])
    assert resp.status_code == 200
    assert resp.json()["is_active"] is False

    resp = client.get("/api/v1/users", params={"is_active": "false"}, headers=firm["headers"])
    assert [u["id"] for u in resp.json()["items"]] == [lawyer["id"]]


def test_users_are_isolated_between_firms(client, firm):
    other = onboard_firm(client, suffix="b")
    other_lawyer = create_user(client, other, email="lawyer-b@firm.test")

    resp = client.get(f"/api/v1/users/{other_lawyer['id']}", headers=firm["headers"])
    assert resp.status_code == 404
    resp = client.put(f"/api/v1/users/{other_lawyer['id']}", json={"name": "X"}, headers=firm["headers"])
    assert resp.status_code == 404
    resp = client.delete(f"/api/v1/users/{other_lawyer['id']}", headers=firm["headers"])
    assert resp.status_code == 404

    resp = client.get("/api/v1/users", headers=firm["headers"])
    assert {u["email"] for u in resp.json()["items"]} == {"admin-a@firm.test"}
