from __future__ import annotations

from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from staffdesk.api.deps import get_storage_settings
from staffdesk.core.config import settings
from staffdesk.core.security import TokenIssuer
from staffdesk.main import app
from staffdesk.seed.seed_data import DEFAULT_POSITIONS, seed
from staffdesk.storage import JsonFileStorage


def json_settings(path):
    return settings.model_copy(update={"storage_backend": "json", "json_store_path": path})


def run_position_lifecycle(client: TestClient, headers: dict[str, str]) -> None:
    created = client.post("/api/positions", json={"name": "Tester"}, headers=headers)
    assert created.status_code == 201
    tester = created.json()

    employee = client.post(
        "/api/employees",
        json={"employee_id": "E1", "first_name": "A", "last_name": "B", "position_id": tester["id"]},
        headers=headers,
    )
    assert employee.status_code == 201
    assert employee.json()["position_name"] == "Tester"

    blocked = client.delete(f"/api/positions/{tester['id']}", headers=headers)
    assert blocked.status_code == 400
    assert blocked.json()["code"] == "conflict"

    assert client.delete(f"/api/employees/{employee.json()['id']}", headers=headers).status_code == 204
    assert client.delete(f"/api/positions/{tester['id']}", headers=headers).status_code == 204


def test_position_and_employee_lifecycle(client, auth_headers):
    run_position_lifecycle(client, auth_headers)


def test_position_and_employee_lifecycle_on_json_store(tmp_path):
    path = tmp_path / "store.json"
    seed(JsonFileStorage(path))
    app.dependency_overrides[get_storage_settings] = lambda: json_settings(path)

    with TestClient(app) as client:
        login = client.post("/api/auth/login", json={"username": "admin", "password": "password"})
        assert login.status_code == 200
        headers = {"Authorization": f"Bearer {login.json()['token']}"}
        run_position_lifecycle(client, headers)
        health = client.get("/api/health")

    assert health.json()["database"] == "JSON"


def test_seeded_positions_are_listed_without_auth(client):
    response = client.get("/api/positions")

    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == sorted(DEFAULT_POSITIONS)


def test_login_returns_token_and_sanitized_user(client):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "password"})

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"] == {"id": 1, "username": "admin", "created_at": body["user"]["created_at"]}
    claims = TokenIssuer(settings.jwt_secret).validate(body["token"])
    remaining = claims.expires_at - datetime.now(timezone.utc)
    assert timedelta(hours=23, minutes=58) < remaining <= timedelta(hours=24)


def test_wrong_password_and_unknown_user_fail_identically(client):
    wrong_password = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})
    unknown_user = client.post("/api/auth/login", json={"username": "nobody", "password": "nope"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"detail": "Invalid credentials", "code": "auth"}


def test_login_rejects_short_username(client):
    response = client.post("/api/auth/login", json={"username": "ad", "password": "password"})

    assert response.status_code == 400
    assert response.json()["code"] == "validation"


def test_mutations_require_a_token(client):
    response = client.post("/api/positions", json={"name": "Tester"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Access token required"


def test_invalid_and_expired_tokens_are_forbidden(client):
    expired = TokenIssuer(
        settings.jwt_secret,
        clock=lambda: datetime.now(timezone.utc) - timedelta(hours=25),
    ).issue(1, "admin")

    for token in ("garbage", expired):
        response = client.post(
            "/api/positions", json={"name": "Tester"}, headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 403
        assert response.json()["code"] == "invalid_token"


def test_current_session_endpoint(client, auth_headers):
    response = client.get("/api/auth/me", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["username"] == "admin"
    assert response.json()["id"] == 1


def test_employee_validation_errors_are_400(client, auth_headers):
    missing = client.post("/api/employees", json={"employee_id": "E1", "first_name": " "}, headers=auth_headers)
    negative = client.post(
        "/api/employees",
        json={"employee_id": "E1", "first_name": "A", "last_name": "B", "salary": -5},
        headers=auth_headers,
    )
    malformed = client.post(
        "/api/employees",
        json={"employee_id": "E1", "first_name": "A", "last_name": "B", "salary": "lots"},
        headers=auth_headers,
    )

    assert missing.status_code == 400
    assert missing.json()["detail"] == "Employee ID, first name and last name are required"
    assert negative.status_code == 400
    assert malformed.status_code == 400
    assert malformed.json()["code"] == "validation"


def test_employee_update_and_get(client, auth_headers):
    created = client.post(
        "/api/employees",
        json={"employee_id": "E1", "first_name": "Anna", "last_name": "Ivanova", "salary": 100},
        headers=auth_headers,
    ).json()
    client.post(
        "/api/employees",
        json={"employee_id": "E2", "first_name": "Boris", "last_name": "Petrov"},
        headers=auth_headers,
    )

    updated = client.put(
        f"/api/employees/{created['id']}",
        json={"employee_id": "E1", "first_name": "Anya", "last_name": "Ivanova", "salary": 200},
        headers=auth_headers,
    )
    duplicate = client.put(
        f"/api/employees/{created['id']}",
        json={"employee_id": "E2", "first_name": "Anya", "last_name": "Ivanova"},
        headers=auth_headers,
    )
    missing = client.put(
        "/api/employees/999",
        json={"employee_id": "E9", "first_name": "X", "last_name": "Y"},
        headers=auth_headers,
    )

    assert updated.status_code == 200
    assert updated.json()["salary"] == 200
    assert updated.json()["updated_at"] > created["updated_at"]
    assert duplicate.status_code == 400
    assert duplicate.json()["detail"] == "Employee ID already exists"
    assert missing.status_code == 404

    fetched = client.get(f"/api/employees/{created['id']}")
    assert fetched.json()["first_name"] == "Anya"
    assert client.get("/api/employees/999").status_code == 404


def test_delete_missing_employee_is_404(client, auth_headers):
    assert client.delete("/api/employees/12345", headers=auth_headers).status_code == 404


def test_duplicate_position_is_rejected(client, auth_headers):
    response = client.post("/api/positions", json={"name": "qa engineer"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Position already exists"


def test_admin_user_management(client, auth_headers):
    created = client.post("/api/admin/users", json={"username": "boris", "password": "pass1"}, headers=auth_headers)
    assert created.status_code == 201
    assert "password" not in created.json() and "password_hash" not in created.json()

    listed = client.get("/api/admin/users", headers=auth_headers).json()
    assert [u["username"] for u in listed] == ["admin", "boris"]
    assert all(set(u) == {"id", "username", "created_at"} for u in listed)

    duplicate = client.post("/api/admin/users", json={"username": "boris", "password": "pass1"}, headers=auth_headers)
    self_named = client.post("/api/admin/users", json={"username": "admin", "password": "pass1"}, headers=auth_headers)
    assert duplicate.status_code == 400
    assert self_named.status_code == 400

    assert client.delete("/api/admin/users/1", headers=auth_headers).status_code == 400
    assert client.delete("/api/admin/users/999", headers=auth_headers).status_code == 404
    assert client.delete(f"/api/admin/users/{created.json()['id']}", headers=auth_headers).status_code == 204


def test_admin_cannot_delete_own_account(client, auth_headers):
    client.post("/api/admin/users", json={"username": "boris", "password": "pass1"}, headers=auth_headers)
    login = client.post("/api/auth/login", json={"username": "boris", "password": "pass1"}).json()
    headers = {"Authorization": f"Bearer {login['token']}"}

    response = client.delete(f"/api/admin/users/{login['user']['id']}", headers=headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot delete your own account"


def test_admin_users_require_a_token(client):
    assert client.get("/api/admin/users").status_code == 401


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "OK"
    assert response.json()["database"] == "SQLite"


def test_repeat_delete_does_not_reach_a_newer_employee(client, auth_headers):
    first = client.post(
        "/api/employees", json={"employee_id": "E1", "first_name": "A", "last_name": "B"}, headers=auth_headers
    ).json()
    assert client.delete(f"/api/employees/{first['id']}", headers=auth_headers).status_code == 204

    second = client.post(
        "/api/employees", json={"employee_id": "E2", "first_name": "C", "last_name": "D"}, headers=auth_headers
    ).json()

    assert second["id"] != first["id"]
    assert client.delete(f"/api/employees/{first['id']}", headers=auth_headers).status_code == 404
    assert client.get(f"/api/employees/{second['id']}").status_code == 200


def test_health_reports_unreadable_json_store(client, tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    app.dependency_overrides[get_storage_settings] = lambda: json_settings(path)

    response = client.get("/api/health")

    assert response.status_code == 500
    assert response.json() == {"status": "ERROR", "database": "JSON"}
